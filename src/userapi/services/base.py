"""BaseService — foundation for userapi services.

Every service receives its repository and a logger at construction time.
Nothing in the service layer reaches for process-wide logging state.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

import structlog

from userapi.services._helpers import today_utc

if TYPE_CHECKING:
    from userapi.infrastructure.repositories import UserRepository


class BaseService:
    """Base for service-layer classes.

    Usage::

        service = UserService(UserRepository(engine), logger=structlog.get_logger("userapi"))
        result = service.get_user(1)
    """

    def __init__(
        self,
        repository: UserRepository,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        clock: Callable[[], date] = today_utc,
    ) -> None:
        self._repo = repository
        self._log = logger or structlog.get_logger(__name__)
        self._clock = clock
