"""
Authentication Pydantic schemas.

Defines request and response schemas for the login endpoint.
"""

from pydantic import BaseModel, Field
from typing import Optional


class UserLogin(BaseModel):
    """
    Schema for operator login.

    Used by POST /auth/login endpoint.
    """
    username: str = Field(default="", description="Operator username")
    password: str = Field(default="", description="Password")


class LoginResponse(BaseModel):
    """
    Login outcome.

    Failures carry `msg` and no token; the HTTP status stays 200.
    """
    success: bool
    token: Optional[str] = Field(default=None, description="JWT access token")
    msg: Optional[str] = None
