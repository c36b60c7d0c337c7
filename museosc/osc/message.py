"""OscMessage: a parsed inbound OSC message plus the source it came from."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any


class _SingleDevice:
    """Source key used by connectionless transports (one headband per port)."""

    def __repr__(self) -> str:
        return "SINGLE_DEVICE"


SINGLE_DEVICE = _SingleDevice()


@dataclass(frozen=True)
class OscMessage:
    address: str
    args: tuple[Any, ...] = field(default_factory=tuple)
    source: Hashable = SINGLE_DEVICE

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
