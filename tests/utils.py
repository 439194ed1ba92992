from datetime import datetime, timedelta
from decimal import Decimal

from cinexplorer.auth import admin_crud
from cinexplorer.database import SessionLocal
from cinexplorer.models.cinema import Cinema
from cinexplorer.models.movie import Movie
from cinexplorer.models.session import MovieSession
from cinexplorer.models.ticket_type import TicketType
from cinexplorer.schemas.admin import AdminCreateSchema

ADMIN_EMAIL = "admin@cinema.com"
ADMIN_PASSWORD = "admin123"


async def create_admin(email: str, password: str, name: str = "Test Admin"):
    async with SessionLocal() as db:
        return await admin_crud.create_admin(
            db, AdminCreateSchema(name=name, email=email, password=password)
        )


async def create_session(db, price: Decimal = Decimal("24.90"), capacity: int = 50) -> MovieSession:
    cinema = Cinema(name="Cinema Downtown", address="Rua Augusta, 567", city="São Paulo", state="SP")
    movie = Movie(title="The Dark Knight", genre="Ação", duration=152, rating="14 anos")
    db.add_all([cinema, movie])
    await db.flush()
    session = MovieSession(
        cinema_id=cinema.id,
        movie_id=movie.id,
        date_time=datetime.utcnow() + timedelta(days=1),
        room_type="Standard",
        price=price,
        capacity=capacity,
    )
    db.add(session)
    await db.commit()
    return session


async def create_ticket_type(db, discount: Decimal = Decimal("50"), name: str = "Meia-entrada") -> TicketType:
    ticket_type = TicketType(
        name=name,
        description="Student half-price ticket",
        discount_percentage=discount,
        requires_proof=True,
    )
    db.add(ticket_type)
    await db.commit()
    return ticket_type


def upcoming_iso(days: int = 1, hour: int = 20) -> str:
    moment = (datetime.utcnow() + timedelta(days=days)).replace(hour=hour, minute=0, second=0, microsecond=0)
    return moment.isoformat()


def create_catalog(client, headers, price: float = 24.90, room_type: str = "IMAX") -> dict:
    cinema = client.post("/cinemas", headers=headers, json={
        "name": "Cinema Shopping Center",
        "address": "Av. Paulista, 1234",
        "city": "São Paulo",
        "state": "SP",
        "latitude": -23.5639,
        "longitude": -46.6544,
    })
    assert cinema.status_code == 201, cinema.text
    movie = client.post("/movies", headers=headers, json={
        "title": "Interstellar",
        "genre": "Ficção Científica",
        "duration": 169,
        "rating": "12 anos",
    })
    assert movie.status_code == 201, movie.text
    session = client.post("/sessions", headers=headers, json={
        "cinemaId": cinema.json()["id"],
        "movieId": movie.json()["id"],
        "dateTime": upcoming_iso(),
        "roomType": room_type,
        "price": price,
    })
    assert session.status_code == 201, session.text
    return {
        "cinema_id": cinema.json()["id"],
        "movie_id": movie.json()["id"],
        "session_id": session.json()["id"],
    }
