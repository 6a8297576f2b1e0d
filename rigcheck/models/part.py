"""Part — a purchasable PC component snapshot from the external catalog.

Parts are read-only inputs: the engines never mutate them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

PartCategory = Literal["cpu", "gpu", "motherboard", "ram", "storage", "psu", "case", "cooler"]


class Part(BaseModel):
    """A component with a loosely shaped spec payload.

    Spec values may sit directly in ``data``, one level down under a spec
    group (``data["power"]["tdp_watts"]``), or (legacy) as extra fields on
    the part itself.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str | None = None
    name: str
    category: PartCategory
    price: float | None = None

    data: dict[str, Any] = Field(default_factory=dict)
    """Spec payload addressed by spec key."""


# A loaded build is category -> Part (or the equivalent plain dict).
SelectedParts = Mapping[str, Union[Part, Mapping[str, Any], None]]


def selected(parts: SelectedParts, category: str) -> Any:
    """Return the part selected for *category*, or None when unfilled."""
    part = parts.get(category)
    return part or None
