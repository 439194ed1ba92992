from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from typing import List
from uuid import UUID
import logging

from cinexplorer.database import get_db
from cinexplorer.models.admin import Admin
from cinexplorer.schemas.admin import AdminCreateSchema, AdminResponseSchema, AdminListItemSchema
from cinexplorer.auth import admin_crud
from cinexplorer.auth.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/admins",
    tags=["Admin - Management"],
    dependencies=[Depends(get_current_admin)]
)

@router.post(
    "",
    response_model=AdminResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new admin"
)
async def create_admin(
    admin_data: AdminCreateSchema,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    existing_admin = await admin_crud.get_admin_by_email(db, email=admin_data.email)
    if existing_admin:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Admin already exists")
    try:
        db_admin = await admin_crud.create_admin(db=db, admin_in=admin_data)
        logger.info(f"Admin {db_admin.email} created by admin ID {current_admin.id}.")
        return db_admin
    except IntegrityError:
        await db.rollback()
        logger.warning(f"IntegrityError creating admin {admin_data.email} (concurrent creation).")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Admin already exists")
    except Exception as e:
        await db.rollback()
        logger.error(f"Unexpected error creating admin {admin_data.email}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )

@router.get("", response_model=List[AdminListItemSchema], summary="List all admins")
async def list_admins(db: AsyncSession = Depends(get_db)):
    return await admin_crud.list_admins(db)

@router.delete("/{admin_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an admin")
async def delete_admin(
    admin_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    if admin_id == current_admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete yourself")

    db_admin = await admin_crud.get_admin_by_id(db, admin_id=admin_id)
    if db_admin is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin not found")
    try:
        await admin_crud.delete_admin(db, db_admin)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting admin {admin_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred."
        )
    logger.info(f"Admin {admin_id} deleted by admin ID {current_admin.id}.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
