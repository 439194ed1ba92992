from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from cinexplorer.routes import auth_router, admins, cinemas, movies, sessions, ticket_types, promotions, purchases
from cinexplorer.models import Base
from cinexplorer.database import engine, supports_row_locks
from cinexplorer.config import settings
from cinexplorer.exception_handlers import register_exception_handlers
import logging
import sys

LOG_LEVEL = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)"
stream_handler = logging.StreamHandler(sys.stdout)
stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
logging.basicConfig(level=LOG_LEVEL, handlers=[stream_handler], force=True)

app = FastAPI(
    title="cineXplorer API",
    description="API for managing cinemas, sessions and ticket purchases",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router.router)
app.include_router(admins.router)
app.include_router(cinemas.router)
app.include_router(movies.router)
app.include_router(sessions.router)
app.include_router(ticket_types.router)
app.include_router(promotions.router)
app.include_router(purchases.router)


@app.get("/")
def root():
    return {"message": "cineXplorer API", "docs": "/docs"}

@app.on_event("startup")
async def startup():
    supports_row_locks(settings.DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

if __name__ == "__main__":
    uvicorn.run("cinexplorer.main:app", reload=True)
