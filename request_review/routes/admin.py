"""
Admin feed routes.
Notification log from the EventBus and application logs from the log collector.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_event_bus, get_notification_panel
from ..event_bus import EventBus
from ..notifications import NotificationPanel
from ..utils.log_collector import application_log_collector

router = APIRouter()


@router.get("/notifications")
async def get_notifications(
    limit: int = 100,
    filter: Optional[str] = None,
    event_bus: EventBus = Depends(get_event_bus),
):
    """
    Получить уведомления из event_bus.

    Args:
        limit: Максимальное количество записей (по умолчанию 100)
        filter: Фильтр по имени события (поддерживает wildcards, например "request.*")
    """
    logs = event_bus.get_logs(limit=limit, event_filter=filter)
    return JSONResponse({
        "status": "ok",
        "data": {
            "notifications": logs,
            "count": len(logs)
        }
    })


@router.get("/notifications/stats")
async def get_notification_stats(event_bus: EventBus = Depends(get_event_bus)):
    return JSONResponse({
        "status": "ok",
        "data": event_bus.get_stats()
    })


@router.post("/notifications/clear")
async def clear_notifications(
    event_bus: EventBus = Depends(get_event_bus),
    panel: NotificationPanel = Depends(get_notification_panel),
):
    event_bus.clear_log()
    panel.clear()
    return JSONResponse({
        "status": "ok",
        "message": "Notification log cleared"
    })


@router.get("/logs")
async def get_application_logs(
    limit: int = 100,
    level: Optional[str] = None,
    search: Optional[str] = None,
    logger_name: Optional[str] = None
):
    """
    Получить логи приложения.

    Args:
        limit: Максимальное количество записей (по умолчанию 100)
        level: Фильтр по уровню (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        search: Поиск по сообщению
        logger_name: Фильтр по имени логгера
    """
    logs = application_log_collector.get_logs(
        limit=limit,
        level=level,
        search=search,
        logger_name=logger_name
    )
    return JSONResponse({
        "status": "ok",
        "data": {
            "logs": logs,
            "count": len(logs)
        }
    })


@router.get("/logs/stats")
async def get_application_logs_stats():
    return JSONResponse({
        "status": "ok",
        "data": application_log_collector.get_stats()
    })


@router.post("/logs/clear")
async def clear_application_logs():
    application_log_collector.clear()
    return JSONResponse({
        "status": "ok",
        "message": "Application logs cleared"
    })
