from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from uuid import UUID

from cinexplorer.models.admin import Admin
from cinexplorer.schemas.admin import AdminCreateSchema
from cinexplorer.auth.security import get_password_hash, verify_password

async def get_admin_by_id(db: AsyncSession, admin_id: UUID) -> Admin | None:
    return await db.get(Admin, admin_id)

async def get_admin_by_email(db: AsyncSession, email: str) -> Admin | None:
    result = await db.execute(select(Admin).filter(Admin.email == email))
    return result.scalars().first()

async def list_admins(db: AsyncSession) -> List[Admin]:
    result = await db.execute(select(Admin).order_by(Admin.created_at.desc()))
    return result.scalars().all()

async def create_admin(db: AsyncSession, admin_in: AdminCreateSchema) -> Admin:
    db_admin = Admin(
        name=admin_in.name,
        email=admin_in.email,
        hashed_password=get_password_hash(admin_in.password),
    )
    db.add(db_admin)
    await db.commit()
    await db.refresh(db_admin)
    return db_admin

async def authenticate_admin(db: AsyncSession, email: str, password: str) -> Admin | None:
    admin = await get_admin_by_email(db, email=email)
    if admin is None or not verify_password(password, admin.hashed_password):
        return None
    return admin

async def delete_admin(db: AsyncSession, db_admin: Admin) -> None:
    await db.delete(db_admin)
    await db.commit()
