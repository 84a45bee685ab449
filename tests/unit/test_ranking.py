from __future__ import annotations

from krishi_context.excel.schema import detect_ranking_table
from krishi_context.models.crops import NOT_AVAILABLE
from krishi_context.models.tables import DetectedTable, RawSheet
from krishi_context.services.ranking import build_ranked_crops


def test_fifteen_rows_give_first_ten_in_source_order():
    rows = [["Crop", "Area", "Production", "Yield"]]
    # 面積は昇順: ソートされていれば順序が変わる
    rows += [[f"Crop{i}", i * 10, i * 100, 1.5] for i in range(1, 16)]
    table = detect_ranking_table(RawSheet.from_rows("S", rows))
    result = build_ranked_crops(table)
    assert len(result.crops) == 10
    assert [c.rank for c in result.crops] == list(range(1, 11))
    assert [c.name for c in result.crops] == [f"Crop{i}" for i in range(1, 11)]
    assert result.total_crops == 15
    assert result.headers == ["Crop", "Area", "Production", "Yield"]


def test_missing_cells_default_to_na():
    table = DetectedTable(
        header_row_index=0,
        headers=["Crop", "Area", "Production", "Yield"],
        data_rows=[("Rice",), ("Banana", "", None, 0), ("Pepper", 85000, 40000, 0.47)],
    )
    crops = build_ranked_crops(table).crops
    assert (crops[0].area, crops[0].production, crops[0].yield_) == (NOT_AVAILABLE,) * 3
    assert (crops[1].area, crops[1].production, crops[1].yield_) == (NOT_AVAILABLE,) * 3
    assert (crops[2].area, crops[2].production, crops[2].yield_) == (85000, 40000, 0.47)


def test_ranked_crops_from_sheet(ranking_sheet: RawSheet):
    result = build_ranked_crops(detect_ranking_table(ranking_sheet))
    assert [c.name for c in result.crops] == ["Coconut", "Rice", "Rubber"]
    assert result.crops[0].to_dict() == {
        "rank": 1, "name": "Coconut", "area": 760000, "production": 5500, "yield": 7.2,
    }


def test_no_table_gives_empty_list():
    result = build_ranked_crops(None)
    assert result.crops == []
    assert result.total_crops == 0
