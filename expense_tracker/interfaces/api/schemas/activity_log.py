"""Schemas for activity log endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.domain.entities import ActionType, ResourceType

from .common import PaginationRead


class ActivityLogRead(BaseModel):
    """Representation of an activity log entry returned by the API."""

    id: int
    user_id: int
    username: str | None = None
    action_type: ActionType
    resource_type: ResourceType
    resource_id: int | None = None
    description: str
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] | list[Any] | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ActivityLogListResponse(BaseModel):
    logs: list[ActivityLogRead]
    pagination: PaginationRead
    is_admin: bool
    current_user_id: int


class ActivityLogCreate(BaseModel):
    action_type: ActionType
    resource_type: ResourceType
    resource_id: int | None = None
    description: str = Field(..., min_length=1, max_length=1000)
    metadata: dict[str, Any] | None = None


__all__ = ["ActivityLogCreate", "ActivityLogListResponse", "ActivityLogRead"]
