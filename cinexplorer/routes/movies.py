from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from typing import List, Optional
from datetime import datetime
from uuid import UUID
import logging

from cinexplorer.database import get_db
from cinexplorer.models.movie import Movie
from cinexplorer.models.session import MovieSession
from cinexplorer.schemas.movie import (
    MovieCreateSchema,
    MovieUpdateSchema,
    MovieResponseSchema,
    MovieDetailSchema,
)
from cinexplorer.auth.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/movies",
    tags=["Movies"]
)


@router.get("", response_model=List[MovieResponseSchema], summary="List movies")
async def list_movies(
    db: AsyncSession = Depends(get_db),
    title: Optional[str] = None,
    genre: Optional[str] = None,
    rating: Optional[str] = None,
):
    query = select(Movie)
    if title:
        query = query.where(Movie.title.ilike(f"%{title}%"))
    if genre:
        query = query.where(Movie.genre.ilike(f"%{genre}%"))
    if rating:
        query = query.where(func.lower(Movie.rating) == rating.lower())
    result = await db.execute(query.order_by(Movie.title))
    return result.scalars().all()


@router.get(
    "/{movie_id}",
    response_model=MovieDetailSchema,
    summary="Get movie details with upcoming sessions"
)
async def get_movie(movie_id: UUID, db: AsyncSession = Depends(get_db)):
    movie = await db.get(Movie, movie_id)
    if not movie:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")

    result = await db.execute(
        select(MovieSession)
        .options(selectinload(MovieSession.cinema))
        .where(MovieSession.movie_id == movie_id, MovieSession.date_time >= datetime.utcnow())
        .order_by(MovieSession.date_time.asc())
    )
    movie_data = MovieResponseSchema.model_validate(movie).model_dump()
    return MovieDetailSchema.model_validate({**movie_data, "sessions": result.scalars().all()})


@router.post(
    "",
    response_model=MovieResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Admin: Create a new movie",
    dependencies=[Depends(get_current_admin)]
)
async def create_movie(movie_data: MovieCreateSchema, db: AsyncSession = Depends(get_db)):
    db_movie = Movie(**movie_data.model_dump(mode="json"))
    db.add(db_movie)
    try:
        await db.commit()
        await db.refresh(db_movie)
        logger.info(f"Movie '{db_movie.title}' (ID: {db_movie.id}) created.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Unexpected error creating movie '{movie_data.title}': {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_movie


@router.put(
    "/{movie_id}",
    response_model=MovieResponseSchema,
    summary="Admin: Update a movie",
    dependencies=[Depends(get_current_admin)]
)
async def update_movie(
    movie_id: UUID,
    movie_update: MovieUpdateSchema,
    db: AsyncSession = Depends(get_db)
):
    db_movie = await db.get(Movie, movie_id)
    if not db_movie:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")

    for key, value in movie_update.model_dump(mode="json", exclude_unset=True).items():
        setattr(db_movie, key, value)
    try:
        await db.commit()
        await db.refresh(db_movie)
        logger.info(f"Movie ID {movie_id} updated.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating movie {movie_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    return db_movie


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Admin: Delete a movie without sessions",
    dependencies=[Depends(get_current_admin)]
)
async def delete_movie(movie_id: UUID, db: AsyncSession = Depends(get_db)):
    db_movie = await db.get(Movie, movie_id)
    if not db_movie:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")

    session_count = await db.scalar(
        select(func.count(MovieSession.id)).where(MovieSession.movie_id == movie_id)
    )
    if session_count:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot delete movie with {session_count} scheduled session(s)."
        )
    try:
        await db.delete(db_movie)
        await db.commit()
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError deleting movie {movie_id}: {str(e_integrity)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete movie as it is referenced by other records."
        )
    logger.info(f"Movie {movie_id} deleted.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
