"""Collector for non-fatal warnings raised during a computation.

A single ephemeris computation can legitimately produce several warnings
(for example "UT1-UTC not available" followed by a prediction notice)
without failing.  Instead of raising, the library appends them to a
:class:`Diagnostics` sink that callers own and can inspect afterwards.
Every message is also emitted on the module logger at ``WARNING`` level.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class Diagnostics:
    """Ordered sink of warning messages.

    Examples:
        ```python
        from astroframe.diagnostics import Diagnostics
        diag = Diagnostics()
        diag.warn("UT1-UTC not available")
        diag.messages  # ['UT1-UTC not available']
        ```
    """

    def __init__(self) -> None:
        self._messages: list[str] = []

    def warn(self, message: str, *args: object) -> None:
        """Record a warning.

        Args:
            message: ``%``-style format string, as for :mod:`logging`.
            *args: Arguments merged into *message*.
        """
        text = message % args if args else message
        self._messages.append(text)
        logger.warning(text)

    @property
    def messages(self) -> list[str]:
        """Copy of the recorded messages, oldest first."""
        return list(self._messages)

    def drain(self) -> list[str]:
        """Return all recorded messages and clear the sink."""
        messages, self._messages = self._messages, []
        return messages

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, text: object) -> bool:
        return any(text == m or (isinstance(text, str) and text in m) for m in self._messages)
