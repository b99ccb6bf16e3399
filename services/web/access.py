"""
Premium access (HTTP Basic) and the source-map allow-list.
"""

import posixpath
import secrets
from typing import Iterable, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.middleware.base import BaseHTTPMiddleware

from libs.em_common import get_logger

logger = get_logger("access")

REALM = "Premium access to electricitymap.org"
TOKEN_COOKIE = "electricitymap-token"

basic_auth = HTTPBasic(auto_error=False, realm=REALM)


def _same(a: str, b: str) -> bool:
    return secrets.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


async def read_credentials(request: Request) -> Optional[HTTPBasicCredentials]:
    """Basic-Auth credentials of the request, None if absent or malformed."""
    try:
        return await basic_auth(request)
    except HTTPException:
        return None


def is_authorized(credentials: Optional[HTTPBasicCredentials], configured: Iterable[tuple[str, str]]) -> bool:
    if credentials is None:
        return False
    authorized = False
    for name, password in configured:
        # no early exit, every pair is compared
        if _same(name, credentials.username) & _same(password, credentials.password):
            authorized = True
    return authorized


def challenge_response() -> PlainTextResponse:
    return PlainTextResponse(
        "Access denied",
        status_code=401,
        headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
    )


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        # the proxy appends the peer it saw, earlier entries come from the client
        return forwarded.split(",")[-1].strip()
    return request.client.host if request.client else ""


def static_relative_path(path: str) -> str:
    """Path relative to the static root, normalized like StaticFiles resolves it."""
    return posixpath.normpath("/".join(part for part in path.split("/") if part))


def is_source_map(path: str) -> bool:
    relative = static_relative_path(path)
    return relative.startswith("dist/") and relative.endswith(".map")


def source_map_allowed(request: Request, allowlist: Iterable[str]) -> bool:
    return client_ip(request) in set(allowlist)


class SourceMapGate(BaseHTTPMiddleware):
    """Any method on /dist/*.map: 401 unless the client is allow-listed."""

    def __init__(self, app, allowlist: Iterable[str]):
        super().__init__(app)
        self.allowlist = frozenset(allowlist)

    async def dispatch(self, request: Request, call_next):
        if is_source_map(request.url.path) and not source_map_allowed(request, self.allowlist):
            logger.info("source map %s refused for %s", request.url.path, client_ip(request))
            return JSONResponse({"error": "unauthorized"}, status_code=401)
        return await call_next(request)
