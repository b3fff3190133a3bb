"""
Page routes - Static HTML pages of the companion website.

Each path maps to one file in the views directory; the directory comes
from settings so it can be relocated in deployments and tests.
"""

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from src.config.settings import Settings, get_settings

router = APIRouter(tags=["pages"])

PAGES: dict[str, str] = {
    "/": "home.html",
    "/create-account": "register.html",
    "/confirm": "confirm.html",
    "/PlayTheGame": "PlayTheGame.html",
    "/follow-us": "follow.html",
    "/about": "about.html",
    "/screenshots": "Screenshots.html",
}


def _page(filename: str) -> Callable[..., FileResponse]:
    def serve_page(settings: Settings = Depends(get_settings)) -> FileResponse:
        path = settings.views_dir / filename
        if not path.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
        return FileResponse(path, media_type="text/html")

    return serve_page


for _path, _filename in PAGES.items():
    router.add_api_route(
        _path,
        _page(_filename),
        methods=["GET"],
        response_class=FileResponse,
        include_in_schema=False,
    )
