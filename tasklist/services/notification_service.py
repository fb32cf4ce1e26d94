"""Notification service collecting transient notices (toasts) for the user."""

import logging
from collections import deque

from tasklist.core.config import constants
from tasklist.domain.notice import Notice, NoticeLevel

logger = logging.getLogger(__name__)

class NotificationService:
    """Keeps the most recent notices until the view drains them.

    Older notices are dropped once `max_notices` is reached; nothing is
    acknowledged or retried.
    """

    def __init__(self, *, max_notices: int = constants.MAX_NOTICES) -> None:
        self._notices: deque[Notice] = deque(maxlen=max_notices)

    def notify(self, level: NoticeLevel, message: str) -> Notice:
        """Record a notice and log it."""
        notice = Notice(level=level, message=message)
        self._notices.append(notice)
        logger.info("notice", extra={"level": level.value, "notice_message": message})
        return notice

    def success(self, message: str) -> Notice:
        return self.notify(NoticeLevel.SUCCESS, message)

    def info(self, message: str) -> Notice:
        return self.notify(NoticeLevel.INFO, message)

    @property
    def notices(self) -> list[Notice]:
        """Pending notices, oldest first."""
        return list(self._notices)

    def drain(self) -> list[Notice]:
        """Return pending notices and forget them."""
        pending = list(self._notices)
        self._notices.clear()
        return pending
