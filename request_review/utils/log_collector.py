"""
Application Log Collector - собирает логи сервиса в память для просмотра через API.
"""
import logging
import traceback
from collections import deque
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..constants import APPLICATION_LOG_MAX_SIZE


class LogEntry:
    """Запись лога приложения."""
    def __init__(
        self,
        level: str,
        logger_name: str,
        message: str,
        timestamp: Optional[datetime] = None,
        exc_info: Optional[str] = None
    ):
        self.level = level
        self.logger_name = logger_name
        self.message = message
        self.timestamp = timestamp or datetime.now(timezone.utc)
        self.exc_info = exc_info

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "logger_name": self.logger_name,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "exc_info": self.exc_info
        }


class ApplicationLogHandler(logging.Handler):
    """Handler, складывающий записи в ограниченную очередь."""

    def __init__(self, max_size: int = APPLICATION_LOG_MAX_SIZE):
        super().__init__()
        self.logs: deque = deque(maxlen=max_size)

    def emit(self, record: logging.LogRecord):
        try:
            exc_info = None
            if record.exc_info:
                exc_info = ''.join(traceback.format_exception(*record.exc_info))

            entry = LogEntry(
                level=record.levelname,
                logger_name=record.name,
                message=record.getMessage(),
                timestamp=datetime.fromtimestamp(record.created),
                exc_info=exc_info
            )
            # Handler.handle() уже держит self.lock
            self.logs.append(entry)
        except Exception:
            # Не логируем ошибки в лог-хэндлере, чтобы избежать рекурсии
            self.handleError(record)

    def get_logs(
        self,
        limit: int = 100,
        level: Optional[str] = None,
        search: Optional[str] = None,
        logger_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Получить логи с фильтрацией.

        Args:
            limit: Максимальное количество записей
            level: Фильтр по уровню (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            search: Поиск по сообщению
            logger_name: Фильтр по имени логгера
        """
        with self.lock:
            filtered = list(self.logs)

        if level:
            filtered = [log for log in filtered if log.level == level.upper()]

        if logger_name:
            logger_lower = logger_name.lower()
            filtered = [log for log in filtered if logger_lower in log.logger_name.lower()]

        if search:
            search_lower = search.lower()
            filtered = [log for log in filtered if search_lower in log.message.lower()]

        if limit <= 0:
            return []
        return [log.to_dict() for log in filtered[-limit:]]

    def get_stats(self) -> Dict[str, Any]:
        with self.lock:
            logs = list(self.logs)

        by_level: Dict[str, int] = {}
        for log in logs:
            by_level[log.level] = by_level.get(log.level, 0) + 1
        return {"total_logs": len(logs), "by_level": by_level}

    def clear(self):
        with self.lock:
            self.logs.clear()


# Глобальный экземпляр коллектора логов
application_log_collector = ApplicationLogHandler()
