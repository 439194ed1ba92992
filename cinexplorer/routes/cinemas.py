from fastapi import APIRouter, Depends, HTTPException, status, Response, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from typing import List, Optional
from datetime import datetime
from uuid import UUID
import logging

from cinexplorer.database import get_db
from cinexplorer.models.cinema import Cinema
from cinexplorer.models.session import MovieSession
from cinexplorer.schemas.cinema import (
    CinemaCreateSchema,
    CinemaUpdateSchema,
    CinemaResponseSchema,
    CinemaDetailSchema,
)
from cinexplorer.services.geo import within_radius
from cinexplorer.auth.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/cinemas",
    tags=["Cinemas"]
)


@router.get(
    "",
    response_model=List[CinemaResponseSchema],
    summary="List cinemas by city/state or by distance"
)
async def list_cinemas(
    db: AsyncSession = Depends(get_db),
    city: Optional[str] = None,
    state: Optional[str] = None,
    latitude: Optional[float] = Query(default=None, ge=-90, le=90),
    longitude: Optional[float] = Query(default=None, ge=-180, le=180),
    radius: float = Query(default=10, gt=0),
):
    if latitude is not None and longitude is not None:
        result = await db.execute(
            select(Cinema).where(Cinema.latitude.is_not(None), Cinema.longitude.is_not(None))
        )
        nearby = within_radius(result.scalars().all(), latitude, longitude, radius)
        return [
            CinemaResponseSchema.model_validate(cinema).model_copy(update={"distance": round(distance, 3)})
            for cinema, distance in nearby
        ]

    query = select(Cinema)
    if city:
        query = query.where(Cinema.city.ilike(f"%{city}%"))
    if state:
        query = query.where(func.lower(Cinema.state) == state.lower())
    result = await db.execute(query.order_by(Cinema.name))
    return result.scalars().all()


@router.get(
    "/{cinema_id}",
    response_model=CinemaDetailSchema,
    summary="Get cinema details with upcoming sessions"
)
async def get_cinema(cinema_id: UUID, db: AsyncSession = Depends(get_db)):
    cinema = await db.get(Cinema, cinema_id)
    if not cinema:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cinema not found")

    result = await db.execute(
        select(MovieSession)
        .options(selectinload(MovieSession.movie))
        .where(MovieSession.cinema_id == cinema_id, MovieSession.date_time >= datetime.utcnow())
        .order_by(MovieSession.date_time.asc())
    )
    upcoming = result.scalars().all()
    cinema_data = CinemaResponseSchema.model_validate(cinema).model_dump(exclude={"distance"})
    return CinemaDetailSchema.model_validate({**cinema_data, "sessions": upcoming})


@router.post(
    "",
    response_model=CinemaResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Admin: Create a new cinema",
    dependencies=[Depends(get_current_admin)]
)
async def create_cinema(cinema_data: CinemaCreateSchema, db: AsyncSession = Depends(get_db)):
    db_cinema = Cinema(**cinema_data.model_dump())
    db.add(db_cinema)
    try:
        await db.commit()
        await db.refresh(db_cinema)
        logger.info(f"Cinema '{db_cinema.name}' (ID: {db_cinema.id}) created.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Unexpected error creating cinema '{cinema_data.name}': {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_cinema


@router.put(
    "/{cinema_id}",
    response_model=CinemaResponseSchema,
    summary="Admin: Update a cinema",
    dependencies=[Depends(get_current_admin)]
)
async def update_cinema(
    cinema_id: UUID,
    cinema_update: CinemaUpdateSchema,
    db: AsyncSession = Depends(get_db)
):
    db_cinema = await db.get(Cinema, cinema_id)
    if not db_cinema:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cinema not found")

    for key, value in cinema_update.model_dump(exclude_unset=True).items():
        setattr(db_cinema, key, value)
    try:
        await db.commit()
        await db.refresh(db_cinema)
        logger.info(f"Cinema ID {cinema_id} updated.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating cinema {cinema_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_cinema


@router.delete(
    "/{cinema_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Admin: Delete a cinema without sessions",
    dependencies=[Depends(get_current_admin)]
)
async def delete_cinema(cinema_id: UUID, db: AsyncSession = Depends(get_db)):
    db_cinema = await db.get(Cinema, cinema_id)
    if not db_cinema:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cinema not found")

    session_count = await db.scalar(
        select(func.count(MovieSession.id)).where(MovieSession.cinema_id == cinema_id)
    )
    if session_count:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot delete cinema with {session_count} scheduled session(s)."
        )
    try:
        await db.delete(db_cinema)
        await db.commit()
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError deleting cinema {cinema_id}: {str(e_integrity)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete cinema as it is referenced by other records."
        )
    logger.info(f"Cinema {cinema_id} deleted.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
