from taskboard.services import (
    analytics_service,
    export_service,
    notification_service,
    query_service,
    task_service,
)


__all__ = [
    "analytics_service",
    "export_service",
    "notification_service",
    "query_service",
    "task_service",
]
