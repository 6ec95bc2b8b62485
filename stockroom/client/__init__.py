"""Python client for the Stockroom API and its local catalog mirror."""

from stockroom.client.cache import CatalogCache
from stockroom.client.client import StockroomClient, StockroomClientError
from stockroom.client.notifications import (
    LogNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)

__all__ = [
    "CatalogCache",
    "LogNotifier",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "StockroomClient",
    "StockroomClientError",
]
