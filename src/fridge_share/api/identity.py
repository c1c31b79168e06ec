"""Acting-user resolution for API requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from fridge_share.config import parse_user_id

if TYPE_CHECKING:
    from fridge_share.containers import AppContainer


def optional_viewer_id(request: Request) -> int | None:
    """Return the caller's user id, or None for anonymous callers."""
    container: AppContainer = request.app.state.container
    raw = request.headers.get(container.settings.acting_user_header)
    if raw is None:
        return None
    user_id = parse_user_id(raw)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid acting user id",
        )
    return user_id


def acting_user_id(request: Request) -> int:
    """Return the caller's user id, rejecting anonymous requests."""
    user_id = optional_viewer_id(request)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user_id
