from tasklist.services import (
    confirmation_service,
    notification_service,
    weather_service,
)


__all__ = [
    "confirmation_service",
    "notification_service",
    "weather_service",
]
