"""Authentication routes for registration, login, logout and the current identity."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.auth.identity import Identity
from app.configs import settings
from app.dependencies import AuthServiceDep, CurrentUserDep
from app.managers import limiter
from app.schemas import (
    ApiResponse,
    AuthPayload,
    LoginRequest,
    MessageEnvelope,
    UserCreate,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

AuthEnvelope = ApiResponse[AuthPayload]
UserEnvelope = ApiResponse[UserResponse]

USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "username": "johndoe",
    "email": "johndoe@example.com",
    "firstName": "John",
    "lastName": "Doe",
    "role": "member",
    "isActive": True,
}
AUTH_OK = {
    "content": {
        "application/json": {
            "example": {
                "success": True,
                "data": {
                    "user": USER_EXAMPLE,
                    "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                    "tokenType": "bearer",
                },
            },
        },
    },
}
ME_OK = {
    "content": {"application/json": {"example": {"success": True, "data": USER_EXAMPLE}}},
}
RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {
        "application/json": {
            "example": {"success": False, "error": "Rate limit exceeded"},
        },
    },
}


def set_token_cookie(response: Response, token: str) -> None:
    """Store the credential in an HTTP-only cookie the identity gate reads."""
    response.set_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def auth_payload(identity: Identity, token: str) -> AuthEnvelope:
    return AuthEnvelope(
        data=AuthPayload(user=UserResponse.model_validate(identity), token=token),
    )


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthEnvelope,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a member account and sign in. The role is never taken from input.",
    responses={
        201: AUTH_OK,
        400: {
            "description": "Bad Request",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "Email already exists",
                        "code": "DuplicateEntry",
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_register",
)
@limiter.limit("5/hour")
async def register_user(
    request: Request,
    response: Response,
    user_create: UserCreate,
    auth_service: AuthServiceDep,
) -> AuthEnvelope:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object; receives the credential cookie.
    user_create : UserCreate
        User registration data.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    ApiResponse[AuthPayload]
        The new identity and its credential.

    Raises
    ------
    DuplicateEntryError
        If the username or email is taken.
    """
    identity, token = await auth_service.register(user_create)
    set_token_cookie(response, token)
    return auth_payload(identity, token)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthEnvelope,
    response_model_exclude_none=True,
    summary="Login with email and password",
    responses={
        200: AUTH_OK,
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "Invalid credentials",
                        "code": "InvalidLogin",
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_login",
)
@limiter.limit("5/minute")
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    auth_service: AuthServiceDep,
) -> AuthEnvelope:
    """
    Login with email and password.

    Raises
    ------
    InvalidLoginError
        If the email is unknown or the password is wrong.
    AccountDeactivatedError
        If the account is deactivated.
    """
    identity, token = await auth_service.login(credentials)
    set_token_cookie(response, token)
    return auth_payload(identity, token)


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    response_model=MessageEnvelope,
    response_model_exclude_none=True,
    summary="Logout",
    description="Clear the credential cookie.",
    operation_id="auth_logout",
)
async def logout(request: Request, response: Response) -> MessageEnvelope:
    response.delete_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return MessageEnvelope(message="Logged out successfully")


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=UserEnvelope,
    response_model_exclude_none=True,
    summary="Get current user",
    description="Retrieve the currently authenticated identity.",
    responses={
        200: ME_OK,
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "Access denied. No token provided.",
                        "code": "MissingCredential",
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_me",
)
@limiter.limit("50/minute")
async def read_users_me(
    request: Request,
    response: Response,
    identity: CurrentUserDep,
) -> UserEnvelope:
    """
    Get current logged in user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    identity : Identity
        Authenticated identity (resolved by the gate).

    Returns
    -------
    ApiResponse[UserResponse]
        Current identity, without the password hash.
    """
    return UserEnvelope(data=UserResponse.model_validate(identity))
