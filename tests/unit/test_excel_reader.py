from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from conftest import MARKET_ROWS, make_excel
from krishi_context.excel.reader import WorkbookReadError, frame_to_raw_sheet, read_workbook
from krishi_context.excel.schema import detect_market_table
from krishi_context.services.datasets import DatasetStore, load_market_report


def test_read_workbook_keeps_sheet_order(temp_workdir: Path):
    p = make_excel(temp_workdir, "RICE.xlsx", {"March": [["a"]], "January": [["b"]], "February": [["c"]]})
    sheets = read_workbook(p)
    assert list(sheets) == ["March", "January", "February"]
    assert sheets["January"].name == "January"


def test_read_workbook_target_sheets(temp_workdir: Path):
    p = make_excel(temp_workdir, "RICE.xlsx", {"January": [["a"]], "February": [["b"]]})
    sheets = read_workbook(p, target_sheets=["February"])
    assert list(sheets) == ["February"]


def test_read_workbook_header_less_market_sheet(temp_workdir: Path):
    p = make_excel(temp_workdir, "RICE.xlsx", {"January": MARKET_ROWS})
    sheet = read_workbook(p)["January"]
    # 空行も () として残る
    assert sheet.rows[0] == ("District-wise prices of RICE (January)",)
    assert sheet.rows[1] == ()
    assert sheet.rows[2][0] == "District"
    assert sheet.rows[3] == ("Ernakulam", 120, 110, 100, 9.1, 20)
    assert sheet.rows[4][1] == "x"
    assert len(sheet) == 5


def test_read_workbook_corrupt_file(temp_workdir: Path):
    p = temp_workdir / "broken.xlsx"
    p.write_bytes(b"not a zip file")
    with pytest.raises(WorkbookReadError):
        read_workbook(p)


def test_frame_to_raw_sheet_cleans_cells():
    df = pd.DataFrame([
        ["District", "Jan", None],
        ["Ernakulam", np.int64(120), np.nan],
        [None, None, None],
    ])
    sheet = frame_to_raw_sheet(df, "January")
    assert sheet.rows[0] == ("District", "Jan")
    assert sheet.rows[1] == ("Ernakulam", 120)
    assert type(sheet.rows[1][1]) is int
    assert sheet.rows[2] == ()
    assert len(sheet) == 3


def test_minimum_market_sheet_from_file(data_dir: Path):
    # title + blank + header + 1 data row: exactly the market minimum
    rows = [["Rice prices"], [], ["District", "Jan", "Dec", "LastJan", "M%", "Y%"], ["Ernakulam", 120, 110, 100, 9.1, 20]]
    p = make_excel(data_dir, "RICE.xlsx", {"January": rows})
    sheet = read_workbook(p)["January"]
    assert len(sheet) == 4
    assert sheet.rows[1] == ()

    table = detect_market_table(sheet)
    assert table is not None
    assert table.header_row_index == 2

    report = load_market_report(DatasetStore(data_dir), "RICE")
    assert report is not None
    assert report.summary.total_districts == 1
    assert report.summary.avg_price == 120.0


def test_three_row_market_sheet_from_file_has_no_table(data_dir: Path):
    p = make_excel(data_dir, "RICE.xlsx", {"January": [["Rice prices"], ["District", "Jan"], ["Ernakulam", 120]]})
    assert detect_market_table(read_workbook(p)["January"]) is None
