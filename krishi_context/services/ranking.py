from __future__ import annotations

from typing import Any

from ..models.crops import NOT_AVAILABLE, RankedCrop, RankedCropList
from ..models.tables import DetectedTable

"""Top crops list from a ranking sheet.

"Top N" is the first N data rows of the sheet in source order; nothing is
sorted. Columns are positional: name, area, production, yield.
"""

__all__ = [
    "TOP_CROPS_LIMIT",
    "build_ranked_crops",
]

TOP_CROPS_LIMIT = 10


def _or_na(row: tuple[Any, ...], index: int) -> Any:
    if index >= len(row):
        return NOT_AVAILABLE
    value = row[index]
    # 0 / 空文字 / None は値なし扱い
    if value is None or value == "" or (value == 0 and not isinstance(value, bool)):
        return NOT_AVAILABLE
    return value


def build_ranked_crops(table: DetectedTable | None, limit: int = TOP_CROPS_LIMIT) -> RankedCropList:
    if table is None:
        return RankedCropList()
    crops = [
        RankedCrop(
            rank=i + 1,
            name=row[0],
            area=_or_na(row, 1),
            production=_or_na(row, 2),
            yield_=_or_na(row, 3),
        )
        for i, row in enumerate(table.data_rows[:limit])
    ]
    return RankedCropList(crops=crops, total_crops=table.row_count, headers=list(table.headers))
