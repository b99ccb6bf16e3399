#!/usr/bin/env python3
"""
electricityMap web server
Static bundles, the localized HTML shell, legacy API redirects, status endpoints.
Port: $PORT
"""

from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from libs.em_common import get_logger, read_version
from services.web.access import SourceMapGate, TOKEN_COOKIE, challenge_response, is_authorized, read_credentials
from services.web.assets import hashes_for, load_asset_hashes
from services.web import config
from services.web.config import Settings
from services.web.locales import Translator, load_locale_config, load_translations, resolve_locale
from services.web.redirects import alternate_urls, api_url, canonical_url, should_redirect_to_canonical
from services.web.translation_status import TranslationStatus

logger = get_logger("web")

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class HealthResponse(BaseModel):
    status: str = Field("ok", description="Service health status")


class CachedStaticFiles(StaticFiles):
    """StaticFiles with a fixed Cache-Control max-age (24h in production, 0 otherwise)."""

    def __init__(self, *args, max_age: int = 0, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_age = max_age

    def file_response(self, *args, **kwargs) -> Response:
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = f"public, max-age={self.max_age}"
        return response

    async def lookup(self, request: Request) -> Optional[Response]:
        """File response for the request path, None when no such file exists."""
        try:
            return await self.get_response(self.get_path(request.scope), request.scope)
        except StarletteHTTPException as e:
            if e.status_code == 404:
                return None
            raise


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config.settings
    get_logger(level=settings.LOG_LEVEL)

    # Everything below is built once, before the server accepts connections
    locale_config = load_locale_config(settings.LOCALES_CONFIG_PATH)
    locales = locale_config.locales
    default_locale = settings.DEFAULT_LOCALE
    trees = load_translations(settings.LOCALES_DIR, locales)
    translator = Translator(trees, default_locale)
    status = TranslationStatus(translator.trees, locale_config.language_names, default_locale)
    src_hashes = load_asset_hashes(settings.STATIC_PATH, locales)
    version = read_version()

    static = CachedStaticFiles(directory=settings.STATIC_PATH, check_dir=False, max_age=settings.static_max_age)
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app = FastAPI(
        title="electricityMap web",
        version=version,
        description="Static bundles and the localized application shell",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.src_hashes = src_hashes

    app.add_middleware(SourceMapGate, allowlist=settings.SOURCE_MAP_ALLOWLIST)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    @app.exception_handler(Exception)
    async def handle_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return PlainTextResponse("Internal Server Error", status_code=500)

    @app.api_route("/health", methods=["GET", "HEAD"], response_model=HealthResponse)
    async def health():
        return HealthResponse(status="ok")

    @app.api_route("/clientVersion", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def client_version():
        return version

    # Translation status
    @app.api_route("/translationstatus/badges.svg", methods=["GET", "HEAD"])
    async def translation_badges():
        return Response(content=status.svg(), media_type="image/svg+xml;charset=utf-8")

    @app.api_route("/translationstatus", methods=["GET", "HEAD"])
    async def translation_status_all():
        return JSONResponse(status.json(locales))

    @app.api_route("/translationstatus/{language}", methods=["GET", "HEAD"])
    async def translation_status_one(language: str):
        return JSONResponse(status.json(language))

    # API moved to its own host
    @app.api_route("/v1/{rest:path}", methods=["GET", "HEAD"])
    async def api_v1(request: Request, rest: str):
        return RedirectResponse(api_url(request, settings), status_code=301)

    @app.api_route("/v2/{rest:path}", methods=["GET", "HEAD"])
    async def api_v2(request: Request, rest: str):
        return RedirectResponse(api_url(request, settings), status_code=301)

    # Static files first, then the app shell (client-side routing)
    @app.api_route("/{full_path:path}", methods=["GET", "HEAD"])
    async def index(request: Request, full_path: str):
        static_response = await static.lookup(request)
        if static_response is not None:
            return static_response

        if should_redirect_to_canonical(request.headers.get("host"), request.headers.get("user-agent"), settings):
            return RedirectResponse(canonical_url(request, settings), status_code=301)

        locale = resolve_locale(request, locale_config, default_locale)
        full_url = canonical_url(request, settings)

        token_cookie = None
        configured = settings.credentials()
        if configured:
            credentials = await read_credentials(request)
            if not is_authorized(credentials, configured):
                logger.info("premium access denied for %s", full_path or "/")
                return challenge_response()
            token_cookie = settings.ELECTRICITYMAP_TOKEN

        context = {
            "locale": locale,
            "fullUrl": full_url,
            "alternateUrls": alternate_urls(full_url, locales),
            "supportedLocales": locales,
            "languageNames": locale_config.language_names,
            "FBLocale": locale_config.facebook_locale(locale),
            "supportedFBLocales": list(locale_config.supported_facebook_locales),
            "__": translator.bind(locale),
        }
        context.update(hashes_for(src_hashes, locale, default_locale).as_view())

        response = templates.TemplateResponse(request, "pages/index.html", context)
        if token_cookie is not None:
            response.set_cookie(TOKEN_COOKIE, token_cookie)
        return response

    logger.info("App ready: version %s, %d locales, production=%s", version, len(locales), settings.is_production)
    return app


app = create_app()


if __name__ == "__main__":
    port = app.state.settings.PORT
    logger.info("Listening on *:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
