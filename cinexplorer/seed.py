"""Populate an empty database with a master admin and some catalog data.

Run with: python -m cinexplorer.seed
"""

import asyncio
import logging
from datetime import datetime, timedelta
from decimal import Decimal

from cinexplorer.auth import admin_crud
from cinexplorer.database import SessionLocal, engine
from cinexplorer.models import Base
from cinexplorer.models.cinema import Cinema
from cinexplorer.models.movie import Movie
from cinexplorer.models.session import MovieSession
from cinexplorer.schemas.admin import AdminCreateSchema

logger = logging.getLogger(__name__)

MASTER_ADMIN_EMAIL = "admin@cinema.com"


async def seed() -> bool:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        if await admin_crud.get_admin_by_email(db, MASTER_ADMIN_EMAIL):
            logger.info("Database already seeded, nothing to do.")
            return False

        await admin_crud.create_admin(
            db,
            AdminCreateSchema(name="Admin Master", email=MASTER_ADMIN_EMAIL, password="admin123"),
        )

        shopping = Cinema(
            name="Cinema Shopping Center",
            address="Av. Paulista, 1234",
            city="São Paulo",
            state="SP",
            latitude=-23.5639,
            longitude=-46.6544,
        )
        downtown = Cinema(
            name="Cinema Downtown",
            address="Rua Augusta, 567",
            city="São Paulo",
            state="SP",
            latitude=-23.5555,
            longitude=-46.6666,
        )
        interstellar = Movie(
            title="Interstellar",
            genre="Ficção Científica",
            duration=169,
            rating="12 anos",
            description="Um grupo de exploradores viaja através de um buraco de minhoca no espaço.",
            image_url="https://example.com/interstellar.jpg",
        )
        dark_knight = Movie(
            title="The Dark Knight",
            genre="Ação",
            duration=152,
            rating="14 anos",
            description="Batman enfrenta o Coringa, que mergulha Gotham City no caos.",
            image_url="https://example.com/darkknight.jpg",
        )
        db.add_all([shopping, downtown, interstellar, dark_knight])
        await db.flush()

        tomorrow = (datetime.utcnow() + timedelta(days=1)).replace(minute=0, second=0, microsecond=0)
        db.add_all([
            MovieSession(cinema_id=shopping.id, movie_id=interstellar.id,
                         date_time=tomorrow.replace(hour=14), room_type="IMAX", price=Decimal("35.90")),
            MovieSession(cinema_id=shopping.id, movie_id=interstellar.id,
                         date_time=tomorrow.replace(hour=19, minute=30), room_type="3D", price=Decimal("29.90")),
            MovieSession(cinema_id=downtown.id, movie_id=dark_knight.id,
                         date_time=tomorrow.replace(hour=16), room_type="Standard", price=Decimal("24.90")),
            MovieSession(cinema_id=downtown.id, movie_id=dark_knight.id,
                         date_time=tomorrow.replace(hour=21), room_type="VIP", price=Decimal("39.90")),
        ])
        await db.commit()

    logger.info("Seed data created.")
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
