"""Schemas shared by several endpoints."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class PaginationRead(BaseModel):
    page: int
    limit: int
    total_count: int
    total_pages: int


__all__ = ["MessageResponse", "PaginationRead"]
