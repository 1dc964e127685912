"""
Dependency Injection для сервиса.

Depends-функции для получения контроллера и EventBus из app.state.
"""
import logging

from fastapi import Request, HTTPException

from .controller import RegisterRequestsController
from .event_bus import EventBus
from .notifications import NotificationPanel

logger = logging.getLogger(__name__)


def get_controller(request: Request) -> RegisterRequestsController:
    """
    Использование:
        @router.get("/register-requests")
        async def list_requests(controller: RegisterRequestsController = Depends(get_controller)):
            return controller.to_list()
    """
    if not hasattr(request.app.state, 'controller'):
        logger.error("Controller not available in app.state")
        raise HTTPException(
            status_code=503,
            detail="Controller not initialized. Please wait for application startup."
        )
    return request.app.state.controller


def get_event_bus(request: Request) -> EventBus:
    if not hasattr(request.app.state, 'event_bus'):
        logger.error("Event bus not available in app.state")
        raise HTTPException(
            status_code=503,
            detail="Event bus not initialized. Please wait for application startup."
        )
    return request.app.state.event_bus



def get_notification_panel(request: Request) -> NotificationPanel:
    if not hasattr(request.app.state, 'notification_panel'):
        logger.error("Notification panel not available in app.state")
        raise HTTPException(
            status_code=503,
            detail="Notification panel not initialized. Please wait for application startup."
        )
    return request.app.state.notification_panel


__all__ = [
    'get_controller',
    'get_event_bus',
    'get_notification_panel',
]
