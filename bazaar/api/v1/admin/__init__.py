"""Admin API. Every route requires the admin role."""
from fastapi import APIRouter, Depends

from bazaar.api.v1.admin import businesses, dashboard, featured, pages, reviews, site_settings, taxonomy, users
from bazaar.core.dependencies import require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
router.include_router(businesses.router)
router.include_router(taxonomy.router)
router.include_router(featured.router)
router.include_router(users.router)
router.include_router(reviews.router)
router.include_router(pages.router)
router.include_router(site_settings.router)
router.include_router(dashboard.router)
