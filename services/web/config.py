import os
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent.parent

# Sentry's outbound addresses, the only clients allowed to fetch source maps
_SOURCE_MAP_ALLOWLIST = "35.184.238.160,104.155.159.182,104.155.149.19,130.211.230.102"


def _csv_list(v: str) -> list[str]:
    return [s.strip() for s in (v or "").split(",") if s.strip()]


class Settings:
    def __init__(self, env: dict | None = None):
        env = os.environ if env is None else env

        self.PORT: int = int(env.get("PORT", "8000") or "8000")
        self.NODE_ENV: str = env.get("NODE_ENV", "development")
        self.LOG_LEVEL: str = env.get("LOG_LEVEL", "INFO")

        # static assets / manifests
        self.STATIC_PATH: str = env.get("STATIC_PATH") or str(ROOT_DIR / "public")

        # premium access
        self.BASIC_AUTH_CREDENTIALS: str = env.get("BASIC_AUTH_CREDENTIALS", "")
        self.ELECTRICITYMAP_TOKEN: str | None = env.get("ELECTRICITYMAP_TOKEN")

        # locales
        self.LOCALES_DIR: str = env.get("LOCALES_DIR") or str(ROOT_DIR / "locales")
        self.LOCALES_CONFIG_PATH: str = env.get("LOCALES_CONFIG_PATH") or str(ROOT_DIR / "config" / "locales-config.json")
        self.DEFAULT_LOCALE: str = env.get("DEFAULT_LOCALE", "en")

        # hosts
        self.CANONICAL_HOST: str = env.get("CANONICAL_HOST", "www.electricitymap.org")
        self.API_HOST: str = env.get("API_HOST", "api.electricitymap.org")
        self.STAGING_HOST: str = env.get("STAGING_HOST", "staging.electricitymap.org")
        self.NON_WWW_HOSTS: set[str] = set(_csv_list(env.get("NON_WWW_HOSTS", "electricitymap.org,live.electricitymap.org")))
        self.LEGACY_HOST_MARKER: str = env.get("LEGACY_HOST_MARKER", "electricitymap.tmrow")

        self.SOURCE_MAP_ALLOWLIST: set[str] = set(_csv_list(env.get("SOURCE_MAP_ALLOWLIST", _SOURCE_MAP_ALLOWLIST)))

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    @property
    def static_max_age(self) -> int:
        return 24 * 3600 if self.is_production else 0

    def credentials(self) -> list[tuple[str, str]]:
        """`name:pass,name2:pass2` → [(name, pass), (name2, pass2)]"""
        pairs = []
        for item in self.BASIC_AUTH_CREDENTIALS.split(","):
            if not item.strip():
                continue
            name, _, password = item.partition(":")
            pairs.append((name, password))
        return pairs


settings = Settings()
