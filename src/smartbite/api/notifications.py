"""Notification inbox and preference endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Query, Request, status

from smartbite.api.models import NotificationPreferencesPayload

if TYPE_CHECKING:
    from smartbite.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["notifications"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _not_found(entity: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found"
    )


@router.get("/notification-preferences")
async def get_preferences(user_id: UUID, request: Request) -> dict[str, object]:
    preferences = _container(request).profile_service.get_notification_preferences(
        user_id
    )
    if preferences is None:
        raise _not_found("User")
    return preferences.to_dict()


@router.put("/notification-preferences")
async def update_preferences(
    user_id: UUID, payload: NotificationPreferencesPayload, request: Request
) -> dict[str, object]:
    """Update channel and type toggles; omitted fields are left unchanged."""
    service = _container(request).profile_service
    preferences = service.update_notification_preferences(
        user_id, payload.to_update()
    )
    if preferences is None:
        raise _not_found("User")
    return preferences.to_dict()


@router.get("/notifications")
async def list_notifications(
    user_id: UUID,
    request: Request,
    limit: int = Query(default=20, ge=1, le=100),
    skip: int = Query(default=0, ge=0),
    unread_only: bool = False,
) -> dict[str, object]:
    page = _container(request).alert_inbox_service.list_alerts(
        user_id, limit=limit, skip=skip, unread_only=unread_only
    )
    if page is None:
        raise _not_found("User")
    return {
        "notifications": [alert.to_dict() for alert in page.alerts],
        "total": page.total,
        "unread_count": page.unread_count,
    }


@router.get("/notifications/stats")
async def notification_stats(user_id: UUID, request: Request) -> dict[str, object]:
    stats = _container(request).alert_inbox_service.stats(user_id)
    if stats is None:
        raise _not_found("User")
    return stats.to_dict()


@router.patch("/notifications/read-all")
async def mark_all_read(user_id: UUID, request: Request) -> dict[str, int]:
    updated = _container(request).alert_inbox_service.mark_all_read(user_id)
    if updated is None:
        raise _not_found("User")
    return {"updated": updated}


@router.patch("/notifications/{alert_id}/read")
async def mark_read(user_id: UUID, alert_id: UUID, request: Request) -> dict[str, bool]:
    if not _container(request).alert_inbox_service.mark_read(user_id, alert_id):
        raise _not_found("Notification")
    return {"read": True}


@router.delete("/notifications/{alert_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(user_id: UUID, alert_id: UUID, request: Request) -> None:
    if not _container(request).alert_inbox_service.delete_alert(user_id, alert_id):
        raise _not_found("Notification")


@router.delete("/notifications", status_code=status.HTTP_204_NO_CONTENT)
async def clear_notifications(user_id: UUID, request: Request) -> None:
    if not _container(request).alert_inbox_service.clear_alerts(user_id):
        raise _not_found("User")
