from fastapi import APIRouter, Depends, HTTPException, status, Response, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List, Optional
from datetime import datetime
from uuid import UUID
import logging

from cinexplorer.database import get_db
from cinexplorer.models.cinema import Cinema
from cinexplorer.models.movie import Movie
from cinexplorer.models.promotion import Promotion
from cinexplorer.schemas.promotion import (
    PromotionCreateSchema,
    PromotionUpdateSchema,
    PromotionResponseSchema,
)
from cinexplorer.auth.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/promotions",
    tags=["Promotions"]
)


async def _load_promotion(db: AsyncSession, promotion_id: UUID) -> Promotion | None:
    result = await db.execute(
        select(Promotion)
        .options(selectinload(Promotion.cinema), selectinload(Promotion.movie))
        .where(Promotion.id == promotion_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


@router.get("", response_model=List[PromotionResponseSchema], summary="List active promotions")
async def list_active_promotions(
    db: AsyncSession = Depends(get_db),
    cinema_id: Optional[UUID] = Query(default=None, alias="cinemaId"),
    movie_id: Optional[UUID] = Query(default=None, alias="movieId"),
):
    now = datetime.utcnow()
    query = (
        select(Promotion)
        .options(selectinload(Promotion.cinema), selectinload(Promotion.movie))
        .where(Promotion.is_active.is_(True), Promotion.start_date <= now, Promotion.end_date >= now)
    )
    if cinema_id is not None:
        query = query.where(Promotion.cinema_id == cinema_id)
    if movie_id is not None:
        query = query.where(Promotion.movie_id == movie_id)
    result = await db.execute(query.order_by(Promotion.end_date.asc()))
    return result.scalars().all()


@router.post(
    "",
    response_model=PromotionResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Admin: Create a promotion",
    dependencies=[Depends(get_current_admin)]
)
async def create_promotion(promotion_data: PromotionCreateSchema, db: AsyncSession = Depends(get_db)):
    if promotion_data.cinema_id is not None and not await db.get(Cinema, promotion_data.cinema_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cinema not found")
    if promotion_data.movie_id is not None and not await db.get(Movie, promotion_data.movie_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")

    db_promotion = Promotion(**promotion_data.model_dump())
    db.add(db_promotion)
    try:
        await db.commit()
        logger.info(f"Promotion '{db_promotion.name}' (ID: {db_promotion.id}) created.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Unexpected error creating promotion '{promotion_data.name}': {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return await _load_promotion(db, db_promotion.id)


@router.put(
    "/{promotion_id}",
    response_model=PromotionResponseSchema,
    summary="Admin: Update a promotion",
    dependencies=[Depends(get_current_admin)]
)
async def update_promotion(
    promotion_id: UUID,
    promotion_update: PromotionUpdateSchema,
    db: AsyncSession = Depends(get_db)
):
    db_promotion = await _load_promotion(db, promotion_id)
    if not db_promotion:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Promotion not found")

    for key, value in promotion_update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_promotion, key, value)
    if db_promotion.end_date < db_promotion.start_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="endDate must not be before startDate")
    try:
        await db.commit()
        logger.info(f"Promotion {promotion_id} updated.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating promotion {promotion_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return await _load_promotion(db, promotion_id)


@router.delete(
    "/{promotion_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Admin: Delete a promotion",
    dependencies=[Depends(get_current_admin)]
)
async def delete_promotion(promotion_id: UUID, db: AsyncSession = Depends(get_db)):
    db_promotion = await db.get(Promotion, promotion_id)
    if not db_promotion:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Promotion not found")
    await db.delete(db_promotion)
    await db.commit()
    logger.info(f"Promotion {promotion_id} deleted.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
