"""Contact-information visibility rules."""
import uuid
from dataclasses import dataclass
from typing import Iterable

from bazaar.schemas.business import (
    PUBLIC_FIELDS,
    BusinessView,
    FullBusinessView,
    PublicBusinessView,
)


def redact(
    business: BusinessView,
    viewer_is_admin: bool,
    viewer_owns_business: bool,
) -> BusinessView:
    """
    Return the view of ``business`` the viewer is allowed to see.

    Admins and the owner get the record unchanged. Everyone else gets a
    ``PublicBusinessView`` built from the public allow-list, so every contact
    field comes back empty. Redacting an already public view returns an equal
    public view.
    """
    if viewer_is_admin or viewer_owns_business:
        return business
    if type(business) is PublicBusinessView:
        return business
    return PublicBusinessView.model_validate(business.model_dump(include=set(PUBLIC_FIELDS)))


def redact_all(
    businesses: Iterable[BusinessView],
    viewer_is_admin: bool,
    owned_business_id: uuid.UUID | None,
) -> list[BusinessView]:
    """Apply ``redact`` to each record; ownership is checked per record."""
    return [
        redact(
            business,
            viewer_is_admin=viewer_is_admin,
            viewer_owns_business=owned_business_id is not None and business.id == owned_business_id,
        )
        for business in businesses
    ]


def to_full_view(business) -> FullBusinessView:
    """Build the unredacted view from a loaded ``Business`` row."""
    return FullBusinessView.model_validate(business)


@dataclass(frozen=True)
class ViewerAccess:
    """Resolved privileges of the viewer for one request."""

    is_admin: bool = False
    owned_business_id: uuid.UUID | None = None

    def owns(self, business_id: uuid.UUID) -> bool:
        return self.owned_business_id is not None and self.owned_business_id == business_id

    def is_privileged_for(self, business_id: uuid.UUID) -> bool:
        """Admin, or owner of this particular business."""
        return self.is_admin or self.owns(business_id)


ANONYMOUS = ViewerAccess()
