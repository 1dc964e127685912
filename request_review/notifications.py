"""
Панель уведомлений страницы заявок.

Подписывается на EventBus и держит последние сообщения для показа оператору:
подтверждения ("Request approved!"), ошибки backend, результаты загрузки.
"""
from collections import deque
from typing import Any, Dict, List

from .constants import PAGE_NOTIFICATIONS_LIMIT
from .event_bus import EventBus, EventLogEntry

PANEL_PATTERN = "*"


class NotificationPanel:
    def __init__(self, limit: int = PAGE_NOTIFICATIONS_LIMIT):
        self.entries: deque = deque(maxlen=limit)

    def on_event(self, event_name: str, data: Dict[str, Any]) -> None:
        self.entries.append(EventLogEntry(event_name, data))

    def recent(self) -> List[EventLogEntry]:
        return list(self.entries)

    def clear(self) -> None:
        self.entries.clear()

    async def attach(self, event_bus: EventBus) -> None:
        await event_bus.subscribe(PANEL_PATTERN, self.on_event)

    async def detach(self, event_bus: EventBus) -> None:
        await event_bus.unsubscribe(PANEL_PATTERN, self.on_event)
