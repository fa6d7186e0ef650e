"""
Auth Router - registration, login and the paginated user listing.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..auth import TokenIssuer
from ..db import get_db
from ..errors import SchoolAPIError
from ..schemas import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ErrorResponse,
    UserIdentity,
    UserListResponse,
    UserListItem,
    PageMeta,
)
from ..services import AuthService, ListingService
from ..store import UserStore
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(UserStore(db), tokens)


def get_listing_service(db: Session = Depends(get_db)) -> ListingService:
    return ListingService(UserStore(db))


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    summary="Register new user",
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(request: Request, payload: Optional[RegisterRequest] = None, service: AuthService = Depends(get_auth_service)):
    # An absent body is treated as an empty one
    if payload is None:
        payload = RegisterRequest()
    try:
        service.register(payload.name, payload.email, payload.password)
    except SchoolAPIError as e:
        log_auth_event("register_failure", payload.email, request, reason=e.message)
        raise

    log_auth_event("register_success", payload.email, request)
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login to user account",
    responses={400: {"description": "Missing fields or incorrect password"}, 404: {"description": "User not found"}},
)
def login(request: Request, payload: Optional[LoginRequest] = None, service: AuthService = Depends(get_auth_service)):
    if payload is None:
        payload = LoginRequest()
    try:
        result = service.login(payload.email, payload.password)
    except SchoolAPIError as e:
        log_auth_event("login_failure", payload.email, request, reason=e.message)
        raise

    log_auth_event("login_success", result.email, request)
    return LoginResponse(token=result.token, user=UserIdentity(email=result.email, name=result.name))


@router.get(
    "/users",
    response_model=UserListResponse,
    summary="Get paginated list of users",
    responses={500: {"model": ErrorResponse}},
)
def list_users(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: ListingService = Depends(get_listing_service),
):
    """
    Page through registered users.

    `page` defaults to 1 and `limit` to 10 when absent, zero, negative or
    not a number.
    """
    result = service.list_users(page=page, limit=limit)
    return UserListResponse(
        meta=PageMeta(totalItems=result.total_items, page=result.page, totalPages=result.total_pages),
        data=[UserListItem.model_validate(user) for user in result.items],
    )
