"""Success and failure notifications raised by the catalog cache.

The UI layer receives these through a Notifier it supplies; LogNotifier
is the default and writes them to the structured log.
"""

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, ConfigDict

from stockroom.observability.logging import get_logger

logger = get_logger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """One user-facing outcome of a cache operation."""

    model_config = ConfigDict(frozen=True)

    level: NotificationLevel
    operation: str
    message: str


class Notifier(ABC):
    """Receives notifications from a CatalogCache."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        pass


class LogNotifier(Notifier):
    """Writes notifications to the structured log."""

    def notify(self, notification: Notification) -> None:
        if notification.level is NotificationLevel.ERROR:
            logger.warning(
                "cache_notification",
                operation=notification.operation,
                message=notification.message,
            )
        else:
            logger.info(
                "cache_notification",
                operation=notification.operation,
                message=notification.message,
            )
