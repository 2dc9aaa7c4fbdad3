"""Registration and authentication endpoints."""

from fastapi import APIRouter, Depends, status

from folio.dependencies import get_accounts
from folio.models.request_models import LoginRequest, RegisterRequest
from folio.models.response_models import (
    DataResponse,
    ErrorResponse,
    TokenResponse,
    ValidationErrorResponse,
)
from folio.services.accounts import AccountService
from folio.services.auth_gate import CurrentUser
from folio.utils.serialization import public

router = APIRouter(tags=["auth"])


@router.post(
    "/api/user",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Register user",
    description="Creates an account and returns a token so the user is signed in right away",
    responses={
        400: {"description": "Invalid input", "model": ValidationErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
)
async def register(request: RegisterRequest, accounts: AccountService = Depends(get_accounts)):
    token = await accounts.register(request.name, request.email, request.password)
    return TokenResponse(token=token)


@router.get(
    "/api/auth",
    response_model=DataResponse,
    summary="Current user",
    description="Returns the authenticated user without the password hash",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_authenticated_user(
    caller_id: CurrentUser,
    accounts: AccountService = Depends(get_accounts)
):
    return DataResponse(data=public(await accounts.current_user(caller_id)))


@router.post(
    "/api/auth",
    response_model=TokenResponse,
    summary="Sign in",
    description="Checks email and password and returns a token",
    responses={400: {"description": "Invalid credentials", "model": ValidationErrorResponse}},
)
async def login(request: LoginRequest, accounts: AccountService = Depends(get_accounts)):
    token = await accounts.login(request.email, request.password)
    return TokenResponse(token=token)
