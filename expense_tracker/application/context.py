"""Request-scoped information passed explicitly to use cases."""

from __future__ import annotations

from dataclasses import dataclass

from expense_tracker.domain.entities import User


@dataclass(frozen=True)
class RequestContext:
    """Who is calling and from where.

    Built once per request by the API layer instead of being read from a global.
    """

    user: User | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    @property
    def user_id(self) -> int | None:
        return self.user.id if self.user is not None else None

    def with_user(self, user: User) -> "RequestContext":
        return RequestContext(
            user=user, ip_address=self.ip_address, user_agent=self.user_agent
        )


__all__ = ["RequestContext"]
