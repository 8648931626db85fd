"""
Notification API routes.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from splyt.application.use_cases.get_unread_notification_count import (
    GetUnreadNotificationCount,
)
from splyt.application.use_cases.list_notifications import ListNotifications
from splyt.application.use_cases.mark_all_notifications_read import (
    MarkAllNotificationsRead,
)
from splyt.application.use_cases.mark_notification_read import (
    MarkNotificationRead,
)
from splyt.di.dependencies import (
    get_current_wallet,
    get_get_unread_notification_count,
    get_list_notifications,
    get_mark_all_notifications_read,
    get_mark_notification_read,
)
from splyt.domain.entities.notification import NotificationType
from splyt.presentation.schemas.common import ApiResponse
from splyt.presentation.schemas.notification_schemas import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=ApiResponse[List[NotificationResponse]],
    summary="List my notifications",
)
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    type: Optional[NotificationType] = Query(None),
    limit: Optional[int] = Query(50, ge=1, le=100),
    skip: int = Query(0, ge=0),
    wallet_address: str = Depends(get_current_wallet),
    use_case: ListNotifications = Depends(get_list_notifications),
) -> ApiResponse[List[NotificationResponse]]:
    notifications = await use_case.execute(
        wallet_address,
        unread_only=unread_only,
        type=type,
        limit=limit,
        skip=skip,
    )
    return ApiResponse(
        message=f"Found {len(notifications)} notifications",
        data=[NotificationResponse.from_entity(n) for n in notifications],
    )


@router.get(
    "/unread-count",
    response_model=ApiResponse[UnreadCountResponse],
    summary="Count unread notifications",
)
async def unread_count(
    wallet_address: str = Depends(get_current_wallet),
    use_case: GetUnreadNotificationCount = Depends(
        get_get_unread_notification_count
    ),
) -> ApiResponse[UnreadCountResponse]:
    count = await use_case.execute(wallet_address)
    return ApiResponse(data=UnreadCountResponse(count=count))


@router.post(
    "/read-all",
    response_model=ApiResponse[MarkAllReadResponse],
    summary="Mark all notifications read",
)
async def mark_all_read(
    wallet_address: str = Depends(get_current_wallet),
    use_case: MarkAllNotificationsRead = Depends(get_mark_all_notifications_read),
) -> ApiResponse[MarkAllReadResponse]:
    updated = await use_case.execute(wallet_address)
    return ApiResponse(
        message=f"Marked {updated} notifications as read",
        data=MarkAllReadResponse(updated=updated),
    )


@router.post(
    "/{notification_id}/read",
    response_model=ApiResponse[NotificationResponse],
    summary="Mark notification read",
)
async def mark_read(
    notification_id: UUID,
    wallet_address: str = Depends(get_current_wallet),
    use_case: MarkNotificationRead = Depends(get_mark_notification_read),
) -> ApiResponse[NotificationResponse]:
    notification = await use_case.execute(notification_id, wallet_address)
    return ApiResponse(
        message="Notification marked as read",
        data=NotificationResponse.from_entity(notification),
    )
