"""Endpoints for registration, login, logout and the current session."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.use_cases.activity import (
    describe_login,
    describe_logout,
    log_request_activity,
)
from expense_tracker.application.use_cases.authorization import (
    get_user_permissions,
    get_user_roles,
)
from expense_tracker.application.use_cases.security_events import record_security_event
from expense_tracker.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_user,
)
from expense_tracker.config import get_settings
from expense_tracker.domain.entities import (
    ActionType,
    ResourceType,
    SecurityEventType,
    User,
)
from expense_tracker.infrastructure.database import get_db
from expense_tracker.infrastructure.security import (
    compute_credential_signature,
    create_access_token,
)
from expense_tracker.interfaces.api.dependencies import (
    get_current_user,
    get_request_context,
    oauth2_scheme,
    resolve_current_user,
)
from expense_tracker.interfaces.api.error_handlers import to_http_exception
from expense_tracker.interfaces.api.schemas import (
    LoginRequest,
    MessageResponse,
    PermissionRead,
    RegisterRequest,
    RoleRead,
    SessionResponse,
    UserPermissionsRead,
    UserRead,
)

router = APIRouter(prefix="/api", tags=["auth"])
settings = get_settings()
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_DETAIL = "Invalid username or password"

_FAILURE_REASONS = {
    AuthenticationStatus.INVALID_CREDENTIALS: "invalid_credentials",
    AuthenticationStatus.SUSPENDED: "account_suspended",
    AuthenticationStatus.DELETED: "account_deleted",
}


def _issue_session(response: Response, user: User) -> SessionResponse:
    """Create a signed token for ``user`` and store it in the session cookie."""

    expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(
        data={
            "sub": str(user.id),
            "username": user.username,
            "sig": compute_credential_signature(user.password, user.status.value),
        },
        expires_delta=expires,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=access_token,
        max_age=int(expires.total_seconds()),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return SessionResponse(access_token=access_token, user=UserRead.model_validate(user))


@router.post(
    "/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED
)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
) -> SessionResponse:
    """Create an account and log it in straight away."""

    try:
        user = register_user(
            db,
            username=payload.username,
            email=payload.email,
            password=payload.password,
            name=payload.name,
            currency=payload.currency,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    context = context.with_user(user)
    log_request_activity(
        db,
        context,
        action_type=ActionType.CREATE,
        resource_type=ResourceType.USER,
        resource_id=user.id,
        description=f"User {user.username} registered",
    )
    log_request_activity(
        db,
        context,
        action_type=ActionType.LOGIN,
        resource_type=ResourceType.USER,
        resource_id=user.id,
        description=describe_login(user.username),
    )
    return _issue_session(response, user)


@router.post("/login", response_model=SessionResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
) -> SessionResponse:
    """Authenticate with username and password.

    Every failure looks the same to the caller; the real cause is only written
    to the security log.
    """

    user, auth_status = authenticate_user(db, payload.username, payload.password)

    if auth_status is not AuthenticationStatus.SUCCESS:
        record_security_event(
            db,
            context,
            SecurityEventType.LOGIN_FAILURE,
            user_id=user.id if user else None,
            details={
                "username": payload.username,
                "reason": _FAILURE_REASONS[auth_status],
            },
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )

    context = context.with_user(user)
    record_security_event(db, context, SecurityEventType.LOGIN_SUCCESS)
    log_request_activity(
        db,
        context,
        action_type=ActionType.LOGIN,
        resource_type=ResourceType.USER,
        resource_id=user.id,
        description=describe_login(user.username),
    )
    return _issue_session(response, user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
) -> MessageResponse:
    """End the session by discarding the cookie.

    The cookie is cleared even when it no longer resolves to a live session
    (expired token, suspended account, reset password), otherwise the browser
    would keep sending it.
    """

    response.delete_cookie(settings.session_cookie_name)
    token = token or request.cookies.get(settings.session_cookie_name)
    if not token:
        return MessageResponse(message="Logged out successfully")

    try:
        user = resolve_current_user(token, db)
    except HTTPException:
        logger.info("Cleared a stale session cookie on logout")
        return MessageResponse(message="Logged out successfully")

    context = context.with_user(user)
    log_request_activity(
        db,
        context,
        action_type=ActionType.LOGOUT,
        resource_type=ResourceType.USER,
        resource_id=user.id,
        description=describe_logout(user.username),
    )
    record_security_event(db, context, SecurityEventType.LOGOUT)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    """Return the authenticated user without the password hash."""

    return UserRead.model_validate(current_user)


@router.get("/user/permissions", response_model=UserPermissionsRead)
def read_current_user_permissions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserPermissionsRead:
    return UserPermissionsRead(
        user_id=current_user.id,
        roles=[RoleRead.model_validate(role) for role in get_user_roles(db, current_user.id)],
        permissions=[
            PermissionRead.model_validate(permission)
            for permission in get_user_permissions(db, current_user.id)
        ],
    )
