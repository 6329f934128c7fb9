"""Parameter Validation — request parameter checks with accumulated messages.

Invariants:
    - One ParameterValidator per request; never shared
    - require_* never raise: failures only append messages
    - require_many returns ALL raw values even when some fail the pattern
      (failures block the request through reject(), not the values)
    - Message = localize(template) THEN interpolate the offending value
    - reject(): messages present -> 400 with the FIRST message, True;
      no messages -> response untouched, False

Design Decisions:
    - Standalone class with explicit dependencies (request params, localize function)
      instead of reaching into endpoint state
    - Patterns match the whole value (fullmatch), str patterns compiled on use
"""

import logging
import re
from collections.abc import Callable
from functools import partial
from typing import Any, Protocol

from console_api.core.domain_types import Locale
from console_api.core.format_messages import format_message
from console_api.core.language_strings import translate
from console_api.core.resources import ParameterSource, first_param

logger = logging.getLogger(__name__)

HTTP_400_BAD_REQUEST = 400

Pattern = re.Pattern | str | None


class ValidatedRequest(Protocol):
    """What validation needs from a request."""
    params: ParameterSource
    locale: Locale


class ErrorSink(Protocol):
    """Response side of reject(): a plain error answer."""
    def send_error(self, status_code: int, message: str | None = None) -> None: ...


class ParameterValidator:
    """Validates named request parameters, collecting failure messages."""

    def __init__(
        self, request: ValidatedRequest,
        localize: Callable[[str], str] | None = None,
    ):
        self._params = request.params
        self._localize = localize or partial(translate, request.locale)
        self._messages: list[str] = []

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    @property
    def has_errors(self) -> bool:
        return bool(self._messages)

    def add_message(self, message: str, value: Any) -> None:
        self._messages.append(format_message(self._localize(message), value))

    def require_one(
        self, name: str, pattern: Pattern = None,
        error_message: str = "invalid value '{}'",
    ) -> str | None:
        """The single parameter `name`, or None after recording a message."""
        value = first_param(self._params, name)
        if value is not None and _matches(pattern, value):
            return value
        self.add_message(error_message, value)
        return None

    def require_many(
        self, name: str, pattern: Pattern = None,
        error_message: str = "invalid value '{}'",
    ) -> list[str] | None:
        """All values of `name`; None (one message) if there are none."""
        values = list(self._params.getlist(name))
        if not values:
            self.add_message(error_message, None)
            return None
        for value in values:
            if not _matches(pattern, value):
                self.add_message(error_message, value)
        return values

    def reject(self, response: ErrorSink) -> bool:
        """Answer 400 with the first message if any check failed."""
        if not self._messages:
            return False
        logger.warning(
            f"Rejecting request: {len(self._messages)} invalid parameter(s)",
            extra={"status_code": HTTP_400_BAD_REQUEST},
        )
        response.send_error(HTTP_400_BAD_REQUEST, self._messages[0])
        return True


def _matches(pattern: Pattern, value: str) -> bool:
    if pattern is None:
        return True
    return re.fullmatch(pattern, value) is not None
