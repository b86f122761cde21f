from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from blogspace.app import AuthResult
from blogspace.core.modules.session.models import SESSION_TTL_SECONDS
from blogspace.web.deps import AppDep, AuthTokenDep
from blogspace.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])

AUTH_COOKIE = "auth_token"


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Account password")


class RegisterRequest(BaseModel):
    """Registration request."""

    email: str = Field(..., description="Account email, must be unique")
    username: str = Field(..., description="Unique username (3-30 letters, digits or underscores)")
    full_name: str = Field(..., min_length=1, description="Display name")
    password: str = Field(..., description="Password, at least 6 characters")
    confirm_password: str = Field(..., description="Must match password")


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        secure=False,  # Set to True in production with HTTPS
        max_age=SESSION_TTL_SECONDS,
    )


@router.post(
    "/auth/register",
    summary="Register account",
    description="Create a new user account and start a session for it.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Invalid data, email or username taken"},
    },
)
async def register(req: RegisterRequest, app: AppDep, response: Response) -> AuthResult:
    result = await app.register(req.email, req.username, req.full_name, req.password, req.confirm_password)
    _set_auth_cookie(response, result.token)
    return result


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, response: Response) -> AuthResult:
    result = await app.login(login_data.email, login_data.password)
    _set_auth_cookie(response, result.token)
    return result


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current authentication session.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, auth_token: AuthTokenDep, response: Response) -> None:
    await app.logout(auth_token)
    response.delete_cookie(AUTH_COOKIE)
