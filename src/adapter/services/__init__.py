from .notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
)
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "CompositeNotificationService",
    "LoggingNotificationService",
    "SqlAlchemyUnitOfWork",
    "WebhookNotificationService",
    "create_notification_service",
]
