from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from cinexplorer.database import get_db
from cinexplorer.auth import schemas_auth, security
from cinexplorer.auth import admin_crud
from cinexplorer.auth.dependencies import get_current_admin
from cinexplorer.models.admin import Admin
from cinexplorer.schemas.admin import AdminResponseSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

invalid_credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid credentials",
    headers={"WWW-Authenticate": "Bearer"},
)

@router.post("/login", response_model=schemas_auth.LoginToken, summary="Admin login")
async def login(
    credentials: schemas_auth.AdminLoginSchema,
    db: AsyncSession = Depends(get_db)
):
    admin = await admin_crud.authenticate_admin(db, email=credentials.email, password=credentials.password)
    if admin is None:
        logger.warning(f"Failed login attempt for email: {credentials.email}")
        raise invalid_credentials_exception
    logger.info(f"Admin logged in successfully: {admin.email}")
    return {"token": security.create_admin_token(admin)}

@router.post("/token", response_model=schemas_auth.Token, summary="OAuth2 password flow (Swagger authorize)")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db)
):
    admin = await admin_crud.authenticate_admin(db, email=form_data.username, password=form_data.password)
    if admin is None:
        logger.warning(f"Failed login attempt for email: {form_data.username}")
        raise invalid_credentials_exception
    logger.info(f"Admin logged in successfully: {admin.email}")
    return {"access_token": security.create_admin_token(admin), "token_type": "bearer"}

@router.get("/me", response_model=AdminResponseSchema, summary="Get current admin info")
async def read_current_admin(current_admin: Admin = Depends(get_current_admin)):
    return current_admin
