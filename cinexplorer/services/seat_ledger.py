"""Seat ledger and purchase authorizer.

Remaining capacity is never stored: it is recomputed from the purchases of a
session on every read. Authorizations for the same session are serialized
so that the capacity check and the purchase write happen as one step:

- an ``asyncio.Lock`` per session id covers concurrent requests handled by
  this process;
- the session row is selected ``FOR UPDATE`` so that other processes sharing
  the database wait on the row lock (a no-op on SQLite).
"""

import asyncio
import logging
import uuid
import weakref
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from cinexplorer.models.purchase import Purchase
from cinexplorer.models.session import MovieSession
from cinexplorer.models.ticket_type import TicketType
from cinexplorer.services import pricing
from cinexplorer.services.purchase_errors import PurchaseRejection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseRequest:
    session_id: uuid.UUID
    user_email: str
    quantity: int
    user_cpf: Optional[str] = None
    ticket_type_id: Optional[uuid.UUID] = None


class SeatLedger:
    def __init__(self) -> None:
        # a lock lives only while some coroutine holds or awaits it
        self._locks: "weakref.WeakValueDictionary[uuid.UUID, asyncio.Lock]" = weakref.WeakValueDictionary()

    def lock_for(self, session_id: uuid.UUID) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def tracked_sessions(self) -> int:
        return len(self._locks)

    async def purchased_seats(self, db: AsyncSession, session_id: uuid.UUID) -> int:
        result = await db.execute(
            select(func.coalesce(func.sum(Purchase.quantity), 0)).where(Purchase.session_id == session_id)
        )
        return int(result.scalar_one())

    async def remaining_for(self, db: AsyncSession, session: MovieSession) -> int:
        return session.capacity - await self.purchased_seats(db, session.id)

    async def available_seats(self, db: AsyncSession, session_id: uuid.UUID) -> int | PurchaseRejection:
        session = await db.get(MovieSession, session_id)
        if session is None:
            return PurchaseRejection.session_not_found()
        return await self.remaining_for(db, session)

    async def authorize(self, db: AsyncSession, request: PurchaseRequest) -> Purchase | PurchaseRejection:
        """Persist a purchase if the session still has room for it.

        Returns the new ``Purchase`` (with ``ticket_type`` populated) or a
        ``PurchaseRejection``. Nothing is written when a rejection is returned.
        """
        async with self.lock_for(request.session_id):
            result = await db.execute(
                select(MovieSession).where(MovieSession.id == request.session_id).with_for_update()
            )
            session = result.scalars().first()
            if session is None:
                await db.rollback()
                logger.warning(f"Purchase rejected: session {request.session_id} not found.")
                return PurchaseRejection.session_not_found()

            ticket_type: TicketType | None = None
            if request.ticket_type_id is not None:
                ticket_type = await db.get(TicketType, request.ticket_type_id)
                if ticket_type is None:
                    await db.rollback()
                    logger.warning(f"Purchase rejected: ticket type {request.ticket_type_id} not found.")
                    return PurchaseRejection.ticket_type_not_found()

            available = await self.remaining_for(db, session)
            if request.quantity > available:
                await db.rollback()
                logger.warning(
                    f"Purchase rejected for session {request.session_id}: requested {request.quantity}, only {available} left."
                )
                return PurchaseRejection.insufficient_capacity(available)

            discount = ticket_type.discount_percentage if ticket_type is not None else None
            db_purchase = Purchase(
                id=uuid.uuid4(),
                session_id=session.id,
                ticket_type_id=ticket_type.id if ticket_type is not None else None,
                user_email=request.user_email,
                user_cpf=request.user_cpf,
                quantity=request.quantity,
                total_price=pricing.total_price(session.price, request.quantity, discount),
            )
            db_purchase.ticket_type = ticket_type
            db.add(db_purchase)
            try:
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        logger.info(
            f"Purchase {db_purchase.id} authorized: {db_purchase.quantity} seat(s) for session {db_purchase.session_id}, total {db_purchase.total_price}."
        )
        return db_purchase


seat_ledger = SeatLedger()


def get_seat_ledger() -> SeatLedger:
    return seat_ledger
