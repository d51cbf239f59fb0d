# thumbgallery/routers/gallery_routers.py
"""
Gallery browsing HTTP endpoints.

Role: Directory listings of the image tree
Responsibilities: Resolve the requested directory and return its entries,
as a browsable HTML page under /gallery or as JSON under /api/gallery
Interactions: Delegates to the gallery service; URLs point at the static mounts
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from ..constants import API_GALLERY_URL_PREFIX, GALLERY_URL_PREFIX
from ..dependencies import SettingsDep
from ..models.gallery_model import GalleryListing
from ..services.gallery_service import GalleryPathError, list_directory
from ..templating import render
from ..utils.router_helpers import handle_exceptions

router = APIRouter(tags=["gallery"])


def _listing_or_404(settings, path: str) -> GalleryListing:
    try:
        return list_directory(settings.image_folder, path)
    except GalleryPathError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _render_listing(listing: GalleryListing) -> HTMLResponse:
    title = f"Gallery: {listing.path}" if listing.path else "Gallery"
    return render("gallery.html", title=title, listing=listing)


@router.get("/", include_in_schema=False)
async def index():
    return RedirectResponse(f"{GALLERY_URL_PREFIX}/")


# ====================================================================
# HTML PAGES
# ====================================================================


@router.get(f"{GALLERY_URL_PREFIX}/", response_class=HTMLResponse)
@handle_exceptions("render gallery")
async def gallery_root_page(settings: SettingsDep):
    """Browsable page for the top level of the image tree."""
    return _render_listing(_listing_or_404(settings, ""))


@router.get(f"{GALLERY_URL_PREFIX}/{{path:path}}", response_class=HTMLResponse)
@handle_exceptions("render gallery directory")
async def gallery_page(path: str, settings: SettingsDep):
    """Browsable page for a sub-directory of the image tree."""
    return _render_listing(_listing_or_404(settings, path))


# ====================================================================
# JSON LISTINGS
# ====================================================================


@router.get(f"{API_GALLERY_URL_PREFIX}/", response_model=GalleryListing)
@handle_exceptions("list gallery")
async def list_gallery_root(settings: SettingsDep):
    """List the top level of the image tree."""
    return _listing_or_404(settings, "")


@router.get(f"{API_GALLERY_URL_PREFIX}/{{path:path}}", response_model=GalleryListing)
@handle_exceptions("list gallery directory")
async def list_gallery(path: str, settings: SettingsDep):
    """List a sub-directory of the image tree."""
    return _listing_or_404(settings, path)
