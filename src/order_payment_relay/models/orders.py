from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OrderResult:
    """Processor response relayed to the caller as-is."""
    body: Any
    status: int
