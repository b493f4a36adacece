from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from docserver.core.modules.session.models import AuthToken
from docserver.web.deps import AppDep
from docserver.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    """Registration request, authorized by the administrative token."""

    token: str = Field(..., description="Administrative token")
    login: str = Field(..., description="Login: at least 8 latin letters or digits")
    pswd: str = Field(..., description="Password: at least 8 characters with upper, lower, digit and special")


class RegisterResult(BaseModel):
    login: str = Field(..., description="Registered login")


class RegisterResponse(BaseModel):
    response: RegisterResult


class LoginRequest(BaseModel):
    """Authentication request."""

    login: str = Field(..., description="Login for authentication")
    pswd: str = Field(..., description="Password for authentication")


class LoginResult(BaseModel):
    token: str = Field(..., description="Session token for subsequent requests")


class LoginResponse(BaseModel):
    """Authentication response."""

    response: LoginResult


@router.post(
    "/register",
    summary="Register user",
    description="Create a new user account. Requires the administrative token.",
    operation_id="register",
    responses={
        200: {"description": "User registered"},
        400: {"model": ErrorResponse, "description": "Invalid login or weak password"},
        403: {"model": ErrorResponse, "description": "Invalid admin token"},
    },
)
async def register(request: RegisterRequest, app: AppDep) -> RegisterResponse:
    user = await app.register(request.token, request.login, request.pswd)
    return RegisterResponse(response=RegisterResult(login=user.login))


@router.post(
    "/auth",
    summary="Authenticate user",
    description="Authenticate with login and password to receive a session token. A new login ends the previous session.",
    operation_id="authenticate",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def authenticate(request: LoginRequest, app: AppDep, response: Response) -> LoginResponse:
    """Authenticate user and create session."""
    token = await app.authenticate(request.login, request.pswd)

    # Set cookie for browser-based clients
    response.set_cookie(
        key="token",
        value=token,
        httponly=True,
        samesite="lax",
        secure=False,  # Set to True in production with HTTPS
        max_age=int(app.config.session_lifetime.total_seconds()),
    )

    return LoginResponse(response=LoginResult(token=token))


@router.delete(
    "/auth/{token}",
    summary="End session",
    description="Invalidate the session identified by the token.",
    operation_id="logout",
    responses={
        200: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Invalid token"},
    },
)
async def logout(token: str, app: AppDep, response: Response) -> dict[str, dict[str, bool]]:
    await app.logout(AuthToken(token))
    response.delete_cookie("token")
    return {"response": {token: True}}
