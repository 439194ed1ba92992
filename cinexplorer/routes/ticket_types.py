from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func
from typing import List
from uuid import UUID
import logging

from cinexplorer.database import get_db
from cinexplorer.models.purchase import Purchase
from cinexplorer.models.ticket_type import TicketType
from cinexplorer.schemas.ticket_type import (
    TicketTypeCreateSchema,
    TicketTypeUpdateSchema,
    TicketTypeResponseSchema,
)
from cinexplorer.auth.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ticket-types",
    tags=["Admin - Ticket Types"],
    dependencies=[Depends(get_current_admin)]
)


@router.post(
    "",
    response_model=TicketTypeResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new ticket type"
)
async def create_ticket_type(ticket_type_data: TicketTypeCreateSchema, db: AsyncSession = Depends(get_db)):
    db_ticket_type = TicketType(**ticket_type_data.model_dump())
    db.add(db_ticket_type)
    try:
        await db.commit()
        await db.refresh(db_ticket_type)
        logger.info(
            f"Ticket type '{db_ticket_type.name}' (ID: {db_ticket_type.id}) created with {db_ticket_type.discount_percentage}% discount."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Unexpected error creating ticket type '{ticket_type_data.name}': {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_ticket_type


@router.get("", response_model=List[TicketTypeResponseSchema], summary="List all ticket types")
async def list_ticket_types(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(TicketType).order_by(TicketType.name))
    return result.scalars().all()


@router.get("/{ticket_type_id}", response_model=TicketTypeResponseSchema, summary="Get a ticket type")
async def get_ticket_type(ticket_type_id: UUID, db: AsyncSession = Depends(get_db)):
    ticket_type = await db.get(TicketType, ticket_type_id)
    if not ticket_type:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket type not found")
    return ticket_type


@router.put("/{ticket_type_id}", response_model=TicketTypeResponseSchema, summary="Update a ticket type")
async def update_ticket_type(
    ticket_type_id: UUID,
    ticket_type_update: TicketTypeUpdateSchema,
    db: AsyncSession = Depends(get_db)
):
    db_ticket_type = await db.get(TicketType, ticket_type_id)
    if not db_ticket_type:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket type not found")

    for key, value in ticket_type_update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_ticket_type, key, value)
    try:
        await db.commit()
        await db.refresh(db_ticket_type)
        logger.info(f"Ticket type {ticket_type_id} updated.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating ticket type {ticket_type_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_ticket_type


@router.delete(
    "/{ticket_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a ticket type that no purchase references"
)
async def delete_ticket_type(ticket_type_id: UUID, db: AsyncSession = Depends(get_db)):
    db_ticket_type = await db.get(TicketType, ticket_type_id)
    if not db_ticket_type:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket type not found")

    purchase_count = await db.scalar(
        select(func.count(Purchase.id)).where(Purchase.ticket_type_id == ticket_type_id)
    )
    if purchase_count:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot delete ticket type referenced by {purchase_count} purchase(s)."
        )
    try:
        await db.delete(db_ticket_type)
        await db.commit()
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError deleting ticket type {ticket_type_id}: {str(e_integrity)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete ticket type as it is referenced by other records."
        )
    logger.info(f"Ticket type {ticket_type_id} deleted.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
