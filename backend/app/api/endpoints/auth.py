"""
Authentication API endpoints.

Single operator login. Failures answer 200 with `success: false` and a message.
"""

import logging
from fastapi import APIRouter
from backend.app.core.config import settings
from backend.app.core.jwt import create_access_token
from backend.app.core.security import get_operator_password_hash, verify_password
from backend.app.schemas.auth import UserLogin, LoginResponse

logger = logging.getLogger("ledger.auth")

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(credentials: UserLogin):
    """
    Login the operator and return a JWT token valid for
    `access_token_expire_days` days.
    """
    if credentials.username != settings.admin_username:
        logger.warning("Login failed: unknown username %r", credentials.username)
        return LoginResponse(success=False, msg="Invalid username")

    if not verify_password(credentials.password, get_operator_password_hash()):
        logger.warning("Login failed: wrong password for %r", credentials.username)
        return LoginResponse(success=False, msg="Invalid password")

    token = create_access_token(data={"user": credentials.username, "sub": credentials.username})

    logger.info("Login succeeded for %r", credentials.username)
    return LoginResponse(success=True, token=token)
