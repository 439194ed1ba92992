from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from cinexplorer.database import get_db
from cinexplorer.models.admin import Admin
from cinexplorer.auth import security
from cinexplorer.auth import admin_crud

logger = logging.getLogger(__name__)

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)

async def get_current_admin(
    token: str = Depends(security.oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> Admin:
    token_data = security.decode_access_token(token)
    if token_data is None or token_data.admin_id is None:
        logger.warning("Token validation failed: invalid signature, expiry or 'sub' claim.")
        raise credentials_exception

    admin = await admin_crud.get_admin_by_id(db, admin_id=token_data.admin_id)
    if admin is None:
        logger.warning(f"Admin not found for ID {token_data.admin_id} from token.")
        raise credentials_exception
    return admin
