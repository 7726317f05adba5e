from __future__ import annotations

"""
Log Event Model.

Defines the immutable event produced by a logging call site and the
message-template renderer used to turn it into text.

Templates use named holes ('{P1}', '{Email}') that are filled positionally
from the call arguments. Doubled braces ('{{', '}}') render as literal braces.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence, Tuple

from splitlog.domain.severity import Severity

_HOLE_PATTERN = re.compile(r"\{\{|\}\}|\{([^{}]+)\}")


@dataclass(frozen=True)
class LogEvent:
    """
    A single log event, immutable once constructed.

    Attributes:
        severity: Ordered severity of the event.
        template: Message template with named holes.
        args: Positional values for the template holes.
        exception: Optional failure associated with the event.
        timestamp: Local time of creation, millisecond precision.
    """
    severity: Severity
    template: str
    args: Tuple[Any, ...] = ()
    exception: Optional[BaseException] = None
    timestamp: datetime = field(default_factory=lambda: _now_ms())

    def render(self) -> str:
        """Return the template with its holes substituted."""
        return render_template(self.template, self.args)


def render_template(template: str, args: Sequence[Any]) -> str:
    """
    Substitute the holes of a message template positionally.

    Holes without a matching argument are kept verbatim; surplus arguments
    are ignored.

    Args:
        template: Message template, e.g. "Found user {P1}".
        args: Values for the holes, in order of appearance.

    Returns:
        str: Rendered message.
    """
    if not template:
        return ""

    values = list(args)
    position = 0

    def _substitute(match: re.Match) -> str:
        nonlocal position
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        if position >= len(values):
            return token
        value = values[position]
        position += 1
        return str(value)

    return _HOLE_PATTERN.sub(_substitute, template)


def _now_ms() -> datetime:
    now = datetime.now()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
