"""
Event Bus для уведомлений оператора.
Контроллер публикует события ("request.approved", "request.failed", ...),
слой представления подписывается и показывает их. Поддерживает wildcard-паттерны.
"""

from typing import Dict, Iterator, List, Callable, Any, Optional, Tuple
from datetime import datetime, timezone
from collections import Counter, deque
from fnmatch import fnmatchcase
import inspect
import logging

from .constants import NOTIFICATION_MAX_LOG_SIZE

logger = logging.getLogger(__name__)


class EventLogEntry:
    """Запись в логе уведомлений."""
    def __init__(self, event_name: str, data: Dict[str, Any], timestamp: Optional[datetime] = None):
        self.event_name = event_name
        self.data = data
        self.timestamp = timestamp or datetime.now(timezone.utc)

    @property
    def message(self) -> str:
        return str(self.data.get("message", self.event_name))

    @property
    def level(self) -> str:
        return str(self.data.get("level", "info"))

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать в словарь для JSON."""
        return {
            "event_name": self.event_name,
            "data": self.data,
            "timestamp": self.timestamp.isoformat()
        }


class EventBus:
    """
    Простой in-process Event Bus.

    Паттерны подписки:
    - "request.*" - все события, начинающиеся с "request."
    - "*" - все события
    - "request.approved" - точное совпадение

    Пример использования:

    ```python
    async def on_approved(event_name, data):
        print(data["message"])

    await event_bus.subscribe("request.approved", on_approved)
    await event_bus.emit("request.approved", {"username": "a", "message": "Request approved!"})
    ```
    """

    def __init__(self, max_log_size: int = NOTIFICATION_MAX_LOG_SIZE):
        self.subscribers: Dict[str, List[Callable]] = {}
        self.event_log: deque = deque(maxlen=max_log_size)
        self.counts: Counter = Counter()

    async def emit(self, event_name: str, data: Dict[str, Any]):
        """
        Записать событие в лог и доставить его подписчикам.

        Ошибка одного подписчика логируется и не мешает остальным.
        """
        logger.info(f"📢 {event_name}: {data.get('message', '')}")
        self.event_log.append(EventLogEntry(event_name, data))
        self.counts[event_name] += 1

        for pattern, handler in self._handlers_for(event_name):
            try:
                result = handler(event_name, data)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"❌ Subscriber '{pattern}' failed on {event_name}: {e}", exc_info=True)

    def get_entries(self, limit: int = 100, event_filter: Optional[str] = None) -> List[EventLogEntry]:
        """Последние записи лога (объекты), с опциональным фильтром."""
        if limit <= 0:
            return []
        entries = [e for e in self.event_log if not event_filter or self._match_pattern(e.event_name, event_filter)]
        return entries[-limit:]

    def get_logs(self, limit: int = 100, event_filter: Optional[str] = None) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self.get_entries(limit, event_filter)]

    def get_stats(self) -> Dict[str, Any]:
        return {
            "total_events": sum(self.counts.values()),
            "events_by_type": dict(self.counts),
            "log_size": len(self.event_log),
            "subscribers_count": sum(map(len, self.subscribers.values())),
            "subscribers_patterns": sorted(self.subscribers),
        }

    def clear_log(self):
        self.event_log.clear()
        self.counts.clear()

    async def subscribe(self, event_pattern: str, handler: Callable):
        """Подписать handler(event_name, data) на паттерн; handler может быть async."""
        self.subscribers.setdefault(event_pattern, []).append(handler)
        logger.debug(f"✅ Subscribed to '{event_pattern}'")

    async def unsubscribe(self, event_pattern: str, handler: Callable):
        handlers = self.subscribers.get(event_pattern, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            self.subscribers.pop(event_pattern, None)

    def _handlers_for(self, event_name: str) -> Iterator[Tuple[str, Callable]]:
        # Снимок: подписчик может отписаться во время доставки
        for pattern, handlers in list(self.subscribers.items()):
            if self._match_pattern(event_name, pattern):
                for handler in list(handlers):
                    yield pattern, handler

    @staticmethod
    def _match_pattern(event_name: str, pattern: str) -> bool:
        # "*" - всё, "request.*" - префикс, без "*" - точное совпадение
        return fnmatchcase(event_name, pattern)
