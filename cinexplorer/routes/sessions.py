from fastapi import APIRouter, Depends, HTTPException, status, Response, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from typing import List, Optional
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from uuid import UUID
import logging

from cinexplorer.database import get_db
from cinexplorer.models.cinema import Cinema
from cinexplorer.models.movie import Movie
from cinexplorer.models.purchase import Purchase
from cinexplorer.models.session import MovieSession
from cinexplorer.schemas.session import (
    SessionCreateSchema,
    SessionUpdateSchema,
    SessionResponseSchema,
    SessionListItemSchema,
    SessionDetailSchema,
    SessionAvailabilitySchema,
)
from cinexplorer.services.seat_ledger import SeatLedger, get_seat_ledger
from cinexplorer.auth.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"]
)


@router.get(
    "",
    response_model=List[SessionListItemSchema],
    summary="List sessions with filters (upcoming only unless a date is given)"
)
async def list_sessions(
    db: AsyncSession = Depends(get_db),
    cinema_id: Optional[UUID] = Query(default=None, alias="cinemaId"),
    movie_id: Optional[UUID] = Query(default=None, alias="movieId"),
    day: Optional[date] = Query(default=None, alias="date"),
    room_type: Optional[str] = Query(default=None, alias="roomType"),
    min_price: Optional[Decimal] = Query(default=None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(default=None, alias="maxPrice", ge=0),
):
    query = select(MovieSession).options(
        selectinload(MovieSession.cinema),
        selectinload(MovieSession.movie),
    )
    if cinema_id is not None:
        query = query.where(MovieSession.cinema_id == cinema_id)
    if movie_id is not None:
        query = query.where(MovieSession.movie_id == movie_id)
    if day is not None:
        day_start = datetime.combine(day, time.min)
        query = query.where(
            MovieSession.date_time >= day_start,
            MovieSession.date_time < day_start + timedelta(days=1),
        )
    else:
        query = query.where(MovieSession.date_time >= datetime.utcnow())
    if room_type:
        query = query.where(func.lower(MovieSession.room_type) == room_type.lower())
    if min_price is not None:
        query = query.where(MovieSession.price >= min_price)
    if max_price is not None:
        query = query.where(MovieSession.price <= max_price)

    result = await db.execute(query.order_by(MovieSession.date_time.asc()))
    return result.scalars().all()


async def _load_session_with_catalog(db: AsyncSession, session_id: UUID) -> MovieSession | None:
    result = await db.execute(
        select(MovieSession)
        .options(selectinload(MovieSession.cinema), selectinload(MovieSession.movie))
        .where(MovieSession.id == session_id)
    )
    return result.scalars().first()


@router.get(
    "/{session_id}",
    response_model=SessionDetailSchema,
    summary="Get session details including available seats"
)
async def get_session(
    session_id: UUID,
    db: AsyncSession = Depends(get_db),
    ledger: SeatLedger = Depends(get_seat_ledger)
):
    session = await _load_session_with_catalog(db, session_id)
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")

    available = await ledger.remaining_for(db, session)
    session_data = SessionListItemSchema.model_validate(session).model_dump()
    return SessionDetailSchema.model_validate({**session_data, "available_seats": available})


@router.get(
    "/{session_id}/availability",
    response_model=SessionAvailabilitySchema,
    summary="Get the number of seats still available for a session"
)
async def get_session_availability(
    session_id: UUID,
    db: AsyncSession = Depends(get_db),
    ledger: SeatLedger = Depends(get_seat_ledger)
):
    session = await db.get(MovieSession, session_id)
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    available = await ledger.remaining_for(db, session)
    return {"session_id": session.id, "capacity": session.capacity, "available_seats": available}


@router.post(
    "",
    response_model=SessionResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Admin: Create a new session",
    dependencies=[Depends(get_current_admin)]
)
async def create_session(session_data: SessionCreateSchema, db: AsyncSession = Depends(get_db)):
    if not await db.get(Cinema, session_data.cinema_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cinema not found")
    if not await db.get(Movie, session_data.movie_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")

    db_session = MovieSession(**session_data.model_dump())
    db.add(db_session)
    try:
        await db.commit()
        await db.refresh(db_session)
        logger.info(
            f"Session {db_session.id} created: movie {db_session.movie_id} at cinema {db_session.cinema_id}, {db_session.date_time}."
        )
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError creating session {session_data.model_dump_json()}: {str(e_integrity)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Could not create session due to a data conflict."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Unexpected error creating session: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_session


@router.put(
    "/{session_id}",
    response_model=SessionResponseSchema,
    summary="Admin: Update session time, room or price",
    dependencies=[Depends(get_current_admin)]
)
async def update_session(
    session_id: UUID,
    session_update: SessionUpdateSchema,
    db: AsyncSession = Depends(get_db)
):
    db_session = await db.get(MovieSession, session_id)
    if not db_session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")

    for key, value in session_update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_session, key, value)
    try:
        await db.commit()
        await db.refresh(db_session)
        logger.info(f"Session {session_id} updated.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating session {session_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_session


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Admin: Delete a session without purchases",
    dependencies=[Depends(get_current_admin)]
)
async def delete_session(
    session_id: UUID,
    db: AsyncSession = Depends(get_db),
    ledger: SeatLedger = Depends(get_seat_ledger)
):
    async with ledger.lock_for(session_id):
        db_session = await db.get(MovieSession, session_id)
        if not db_session:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")

        purchase_count = await db.scalar(
            select(func.count(Purchase.id)).where(Purchase.session_id == session_id)
        )
        if purchase_count:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Cannot delete session with {purchase_count} purchase(s)."
            )
        try:
            await db.delete(db_session)
            await db.commit()
        except IntegrityError as e_integrity:
            await db.rollback()
            logger.warning(f"IntegrityError deleting session {session_id}: {str(e_integrity)}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Cannot delete session as it is referenced by other records."
            )
    logger.info(f"Session {session_id} deleted.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
