"""Database models."""
from bazaar.models.business import Business, BusinessStatus, BusinessType, PaymentMethod
from bazaar.models.business_image import BusinessImage
from bazaar.models.category import Category
from bazaar.models.location import Location
from bazaar.models.profile import Profile
from bazaar.models.user_role import UserRole, AppRole
from bazaar.models.review import Review
from bazaar.models.favorite import UserFavorite
from bazaar.models.featured import FeaturedBusiness
from bazaar.models.page_content import PageContent
from bazaar.models.site_setting import SiteSetting
from bazaar.models.audit_log import SecurityAuditLog

__all__ = [
    "Business",
    "BusinessStatus",
    "BusinessType",
    "PaymentMethod",
    "BusinessImage",
    "Category",
    "Location",
    "Profile",
    "UserRole",
    "AppRole",
    "Review",
    "UserFavorite",
    "FeaturedBusiness",
    "PageContent",
    "SiteSetting",
    "SecurityAuditLog",
]
