"""Review moderation."""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.dependencies import require_admin
from bazaar.database import get_db
from bazaar.services.audit_service import AuditService
from bazaar.services.review_service import ReviewService

router = APIRouter()


class AdminReviewResponse(BaseModel):
    id: uuid.UUID
    business_id: uuid.UUID
    business_name: str | None = None
    user_id: uuid.UUID | None = None
    user_name: str | None = None
    rating: int
    comment: str | None = None
    created_at: datetime | None = None


@router.get("/reviews", response_model=list[AdminReviewResponse])
async def list_reviews(
    rating: int | None = Query(None, ge=1, le=5),
    db: AsyncSession = Depends(get_db),
):
    rows = await ReviewService(db).list_all(rating=rating)
    return [
        AdminReviewResponse(
            id=review.id,
            business_id=review.business_id,
            business_name=business_name,
            user_id=review.user_id,
            user_name=user_name,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )
        for review, user_name, business_name in rows
    ]


@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: uuid.UUID,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    deleted = await ReviewService(db).delete(review_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Yorum bulunamadı")

    await AuditService(db).record(admin_id, "review_deleted", "reviews", review_id)
    return None
