"""FastAPI dependency utilities."""

from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.use_cases.authorization import (
    has_all_permissions,
    has_any_permission,
)
from expense_tracker.config import get_settings
from expense_tracker.domain.entities import User
from expense_tracker.infrastructure.database import get_db
from expense_tracker.infrastructure.repositories import UserRepository
from expense_tracker.infrastructure.security import (
    credential_signature_matches,
    decode_access_token,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/login", auto_error=False)
settings = get_settings()

FORBIDDEN_DETAIL = "Forbidden: Insufficient permissions"


def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_request_context(request: Request) -> RequestContext:
    """Describe the caller's network origin; the user is attached later."""

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip_address = forwarded_for.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    return RequestContext(
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent"),
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token.

    Tokens stop working as soon as the account's password or status changes.
    """

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized("Invalid session") from exc

    subject = payload.get("sub")
    signature_claim = payload.get("sig")
    if not subject or not isinstance(signature_claim, str):
        raise _unauthorized("Invalid session")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _unauthorized("Invalid session") from exc

    user = UserRepository(db).get(user_id)
    if user is None or not user.is_active():
        raise _unauthorized("Invalid session")

    if not credential_signature_matches(signature_claim, user.password, user.status.value):
        raise _unauthorized("Invalid session")

    return user


def get_current_user(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the user behind the bearer token or, failing that, the session cookie."""

    token = token or request.cookies.get(settings.session_cookie_name)
    if not token:
        raise _unauthorized()
    return resolve_current_user(token, db)


def get_current_context(
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
) -> RequestContext:
    return context.with_user(current_user)


def require_permission(*permissions: str) -> Callable[..., User]:
    """Build a dependency that admits users holding every one of ``permissions``."""

    def dependency(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> User:
        if not has_all_permissions(db, current_user.id, permissions):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_DETAIL
            )
        return current_user

    return dependency


def require_any_permission(*permissions: str) -> Callable[..., User]:
    """Build a dependency that admits users holding at least one of ``permissions``."""

    def dependency(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> User:
        if not has_any_permission(db, current_user.id, permissions):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_DETAIL
            )
        return current_user

    return dependency
