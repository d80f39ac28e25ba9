"""API v1 routers."""
from fastapi import APIRouter

from bazaar.api.v1 import admin, businesses, categories, favorites, locations, pages, profile, site_settings

router = APIRouter()

router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(locations.router, prefix="/locations", tags=["locations"])
router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
router.include_router(pages.router, prefix="/pages", tags=["pages"])
router.include_router(site_settings.router, prefix="/site-settings", tags=["site-settings"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
