#!/usr/bin/env python3
"""
Smoke test for a running electricityMap web server.
Checks status endpoints, the API redirect and the app shell.

Usage: python scripts/smoke_web.py [base_url]
"""

import sys

import requests

BASE_URL = "http://127.0.0.1:8000"


def check(name, ok, detail=""):
    print(f"{'✅' if ok else '❌'} {name}{': ' + detail if detail else ''}")
    return ok


def main():
    base = sys.argv[1].rstrip("/") if len(sys.argv) > 1 else BASE_URL
    print(f"electricityMap web smoke test against {base}")
    print("=" * 40)

    results = []
    try:
        r = requests.get(f"{base}/health", timeout=5)
        results.append(check("health", r.status_code == 200 and r.json() == {"status": "ok"}, str(r.status_code)))

        r = requests.get(f"{base}/clientVersion", timeout=5)
        results.append(check("clientVersion", r.status_code == 200, r.text.strip()))

        r = requests.get(f"{base}/translationstatus", timeout=5)
        results.append(check("translationstatus", r.status_code == 200, f"{len(r.json())} locales"))

        r = requests.get(f"{base}/v1/state?countryCode=FR", timeout=5, allow_redirects=False)
        results.append(check("v1 redirect", r.status_code == 301, r.headers.get("location", "")))

        r = requests.get(f"{base}/", timeout=5, allow_redirects=False)
        results.append(check("app shell", r.status_code in (200, 301, 401), str(r.status_code)))
    except requests.RequestException as e:
        results.append(check("connection", False, str(e)))

    print("=" * 40)
    passed = sum(results)
    print(f"{passed}/{len(results)} checks passed")
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
