from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List, Optional
from uuid import UUID
import logging

from cinexplorer.database import get_db
from cinexplorer.models.purchase import Purchase
from cinexplorer.models.session import MovieSession
from cinexplorer.schemas.purchase import (
    PurchaseCreateSchema,
    PurchaseResponseSchema,
    PurchaseDetailSchema,
)
from cinexplorer.services.seat_ledger import SeatLedger, PurchaseRequest, get_seat_ledger
from cinexplorer.services.purchase_errors import PurchaseRejection, RejectionCode
from cinexplorer.auth.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/purchases",
    tags=["Purchases"]
)

REJECTION_STATUS = {
    RejectionCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RejectionCode.TICKET_TYPE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RejectionCode.INSUFFICIENT_CAPACITY: status.HTTP_400_BAD_REQUEST,
}


def _purchase_payload(purchase: Purchase) -> dict:
    ticket_type = purchase.ticket_type
    return {
        "id": purchase.id,
        "session_id": purchase.session_id,
        "user_email": purchase.user_email,
        "user_cpf": purchase.user_cpf,
        "quantity": purchase.quantity,
        "ticket_type": {
            "id": ticket_type.id,
            "name": ticket_type.name,
            "discount_percentage": ticket_type.discount_percentage,
        } if ticket_type is not None else None,
        "total_price": purchase.total_price,
        "purchase_date": purchase.created_at,
    }


@router.post(
    "",
    response_model=PurchaseResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Buy tickets for a session"
)
async def create_purchase(
    purchase_data: PurchaseCreateSchema,
    db: AsyncSession = Depends(get_db),
    ledger: SeatLedger = Depends(get_seat_ledger)
):
    request = PurchaseRequest(
        session_id=purchase_data.session_id,
        user_email=purchase_data.user_email,
        user_cpf=purchase_data.user_cpf,
        quantity=purchase_data.quantity,
        ticket_type_id=purchase_data.ticket_type_id,
    )
    try:
        outcome = await ledger.authorize(db, request)
    except Exception as e:
        logger.error(
            f"Unexpected error purchasing {request.quantity} seat(s) for session {request.session_id}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )

    if isinstance(outcome, PurchaseRejection):
        raise HTTPException(status_code=REJECTION_STATUS[outcome.code], detail=outcome.message)
    return _purchase_payload(outcome)


@router.get(
    "",
    response_model=List[PurchaseResponseSchema],
    summary="Admin: List purchases, optionally for one session",
    dependencies=[Depends(get_current_admin)]
)
async def list_purchases(
    db: AsyncSession = Depends(get_db),
    session_id: Optional[UUID] = Query(default=None, alias="sessionId"),
    skip: int = 0,
    limit: int = 100
):
    query = select(Purchase).options(selectinload(Purchase.ticket_type))
    if session_id is not None:
        query = query.where(Purchase.session_id == session_id)
    result = await db.execute(query.order_by(Purchase.created_at.desc()).offset(skip).limit(limit))
    return [_purchase_payload(purchase) for purchase in result.scalars().all()]


@router.get(
    "/{purchase_id}",
    response_model=PurchaseDetailSchema,
    summary="Get purchase details"
)
async def get_purchase(purchase_id: UUID, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Purchase)
        .options(
            selectinload(Purchase.ticket_type),
            selectinload(Purchase.session).selectinload(MovieSession.movie),
            selectinload(Purchase.session).selectinload(MovieSession.cinema),
        )
        .where(Purchase.id == purchase_id)
    )
    purchase = result.scalars().first()
    if not purchase:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Purchase not found")
    return {**_purchase_payload(purchase), "session": purchase.session}
