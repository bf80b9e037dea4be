# controller/page_controller.py
import logging
from pathlib import Path
from urllib.parse import urlsplit
from fastapi import APIRouter, Request, status
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, RedirectResponse, Response
from config.settings import settings
from util.constants import HANKO_URL_PLACEHOLDER

logger = logging.getLogger(__name__)

page_router = APIRouter()

PAGES = {
    "/": "index.html",
    "/about": "about.html",
    "/faq": "faq.html",
    "/public_html": "filemanager.html",
    "/profile": "profile.html",
    "/tos": "tos.html",
    "/privacy-policy": "privacy-policy.html",
    "/content-moderation": "content-moderation.html",
}
NOT_FOUND_PAGE = "404.html"
SOCIAL_CARD = "social-card.png"


def _public(name: str) -> Path:
    return Path(settings.PUBLIC_DIR) / name


def render_page(name: str, status_code: int = status.HTTP_200_OK) -> Response:
    page = _public(name)
    if not page.is_file():
        return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)
    html = page.read_text(encoding="utf-8").replace(
        HANKO_URL_PLACEHOLDER, settings.HANKO_API_URL
    )
    return HTMLResponse(html, status_code=status_code)


def render_not_found() -> Response:
    return render_page(NOT_FOUND_PAGE, status_code=status.HTTP_404_NOT_FOUND)


def _make_page_handler(name: str):
    async def handler() -> Response:
        return render_page(name)

    return handler


for _route, _name in PAGES.items():
    page_router.add_api_route(
        _route, _make_page_handler(_name), methods=["GET"], include_in_schema=False
    )


@page_router.get("/404", include_in_schema=False)
async def not_found_page() -> Response:
    return render_not_found()


@page_router.get("/" + SOCIAL_CARD, include_in_schema=False)
async def social_card() -> Response:
    card = _public(SOCIAL_CARD)
    if not card.is_file():
        return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(card, media_type="image/png")


@page_router.get("/~{path:path}", include_in_schema=False)
async def user_site(path: str, request: Request) -> Response:
    """
    User sites are served by the CDN pull zone; send the browser there unless
    the pull zone is this very host.
    """
    pull_zone = settings.BUNNY_PULL_ZONE.rstrip("/")
    if pull_zone:
        zone = urlsplit(pull_zone)
        here = request.url
        if (zone.scheme, zone.hostname) != (here.scheme, here.hostname):
            target = f"{pull_zone}{request.url.path}"
            logger.debug("site.redirect target=%s", target)
            return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
    return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)
