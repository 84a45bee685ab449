from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

"""Ranked crop models (regional top crops dataset)."""

__all__ = [
    "NOT_AVAILABLE",
    "RankedCrop",
    "RankedCropList",
]

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class RankedCrop:
    """One entry of the top crops list.

    rank is the 1-based position in the truncated list (source row order).
    yield_ carries the trailing underscore because `yield` is a keyword.
    """
    rank: int
    name: Any
    area: Any = NOT_AVAILABLE
    production: Any = NOT_AVAILABLE
    yield_: Any = NOT_AVAILABLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "name": self.name,
            "area": self.area,
            "production": self.production,
            "yield": self.yield_,
        }


@dataclass(frozen=True)
class RankedCropList:
    crops: list[RankedCrop] = field(default_factory=list)
    total_crops: int = 0  # data rows before truncation
    headers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["crops"] = [c.to_dict() for c in self.crops]
        return d
