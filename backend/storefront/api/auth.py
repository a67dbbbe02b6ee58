"""Back-office login endpoints.

The session is four plain cookies (user_id, user_name, user_email, user_role),
values percent-encoded.
Admin routes check only the role cookie.
"""

from urllib.parse import quote

import structlog
from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel

from storefront.api.dependencies import AuthServiceDep
from storefront.services.auth.exceptions import InvalidCredentials

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["auth"])

SESSION_COOKIES = ("user_id", "user_name", "user_email", "user_role")


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginUser(BaseModel):
    id: str
    name: str
    email: str
    role: str


class LoginResponse(BaseModel):
    success: bool = True
    user: LoginUser


class LogoutResponse(BaseModel):
    success: bool = True


@router.post("/login", response_model=LoginResponse, operation_id="login")
async def login(
    credentials: LoginRequest,
    service: AuthServiceDep,
    response: Response,
) -> LoginResponse:
    """Check credentials and start a cookie session."""
    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        user = await service.authenticate(credentials.email, credentials.password)
    except InvalidCredentials:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    for name, value in zip(SESSION_COOKIES, (user.id, user.name, user.email, user.role), strict=True):
        # Header values must be latin-1; names and emails may not be
        response.set_cookie(name, quote(value, safe=""), path="/", samesite="lax")

    return LoginResponse(user=LoginUser(id=user.id, name=user.name, email=user.email, role=user.role))


@router.post("/logout", response_model=LogoutResponse, operation_id="logout")
async def logout(response: Response) -> LogoutResponse:
    """End the cookie session."""
    for name in SESSION_COOKIES:
        response.delete_cookie(name, path="/")
    return LogoutResponse()
