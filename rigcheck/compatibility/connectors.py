"""GPU power-connector requirement parsing.

Catalog parts describe what a card needs as free text (``"8-pin + 8-pin"``,
``"2x 8-pin"``, ``"12VHPWR"``).  :func:`parse_power_connectors` turns that
into a :class:`ConnectorRequirement` before any comparison happens.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel

# 16-pin family: 12VHPWR, its 12V-2x6 revision, or "16-pin"
_HPWR_RE = re.compile(r"12\s*v\s*hpwr|12\s*v\s*-?\s*2\s*x\s*6|16\s*-?\s*pin", re.IGNORECASE)
# "6+2-pin" is an 8-pin connector
_SIX_PLUS_TWO_RE = re.compile(r"6\s*\+\s*2")
_PIN_RE = re.compile(
    r"(?:(\d+)\s*[x×]\s*)?(\d+)\s*-?\s*pins?(?:\s*[x×]\s*(\d+))?",
    re.IGNORECASE,
)


class ConnectorRequirement(BaseModel):
    """Auxiliary power connectors a GPU needs."""

    needs_12vhpwr: bool = False
    needs_8pin: int = 0
    needs_6pin: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.needs_12vhpwr or self.needs_8pin or self.needs_6pin)

    def describe(self) -> str:
        """Short human form, e.g. ``"2x 8-pin + 1x 6-pin"``."""
        parts: list[str] = []
        if self.needs_12vhpwr:
            parts.append("12VHPWR")
        if self.needs_8pin:
            parts.append(f"{self.needs_8pin}x 8-pin")
        if self.needs_6pin:
            parts.append(f"{self.needs_6pin}x 6-pin")
        return " + ".join(parts) or "none"


def parse_power_connectors(value: Any) -> ConnectorRequirement:
    """Parse a connector requirement string.

    Unrecognised text yields an empty requirement rather than an error.
    """
    if value is None or isinstance(value, bool):
        return ConnectorRequirement()

    text = str(value)
    needs_12vhpwr = bool(_HPWR_RE.search(text))
    text = _HPWR_RE.sub(" ", text)
    text = _SIX_PLUS_TWO_RE.sub("8", text)

    counts = {6: 0, 8: 0}
    for match in _PIN_RE.finditer(text):
        pins = int(match.group(2))
        if pins not in counts:
            continue
        multiplier = match.group(1) or match.group(3) or "1"
        counts[pins] += int(multiplier)

    return ConnectorRequirement(
        needs_12vhpwr=needs_12vhpwr,
        needs_8pin=counts[8],
        needs_6pin=counts[6],
    )
