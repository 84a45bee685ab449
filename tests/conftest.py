# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from krishi_context.models.context import FarmingRecord
from krishi_context.models.tables import RawSheet


def make_excel(directory: Path, name: str, sheets: dict[str, list[list[Any]]]) -> Path:
    """Write a real .xlsx file; each sheet is written header-less, row by row."""
    p = directory / name
    with pd.ExcelWriter(p, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


MARKET_ROWS: list[list[Any]] = [
    ["District-wise prices of RICE (January)"],
    [],
    ["District", "Jan", "Dec", "LastJan", "M%", "Y%"],
    ["Ernakulam", 120, 110, 100, 9.1, 20],
    ["Kottayam", "x", 90, 95, 0, -5.3],
]

RANKING_ROWS: list[list[Any]] = [
    ["Top crops of Kerala"],
    [],
    ["Crop", "Area", "Production", "Yield"],
    ["Coconut", 760000, 5500, 7.2],
    ["Rice", 191000, 560000, 2.9],
    ["Rubber", 550000, 540000, 1.0],
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """data_directory: ./data
ranking_dataset: top10_crops_kerala
region: Kerala
language: en
database:
  host: localhost
  port: 5432
  user: farmer
  password: secret
  database: krishi
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "krishi.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def data_dir(temp_workdir: Path) -> Path:
    return temp_workdir / "data"


@pytest.fixture()
def sample_datasets(data_dir: Path) -> Path:
    """Ranking workbook plus a two-month RICE market workbook."""
    make_excel(data_dir, "top10_crops_kerala.xlsx", {"Top10": RANKING_ROWS})
    december = [list(r) for r in MARKET_ROWS]
    december[3] = ["Ernakulam", 130, 120, 110, 8.3, 18]
    make_excel(data_dir, "RICE.xlsx", {"January": MARKET_ROWS, "December": december})
    return data_dir


@pytest.fixture()
def market_sheet() -> RawSheet:
    return RawSheet.from_rows("January", MARKET_ROWS)


@pytest.fixture()
def ranking_sheet() -> RawSheet:
    return RawSheet.from_rows("Top10", RANKING_ROWS)


@pytest.fixture()
def sample_records() -> list[FarmingRecord]:
    # newest first
    return [
        FarmingRecord(
            crop_name="RICE",
            planting_date="2024-06-01",
            expected_harvest="2024-10-15",
            notes="Short duration variety",
            soil_type="Laterite",
        ),
        FarmingRecord(crop_name="BANANA", planting_date="2024-02-10", soil_type="Not specified"),
        FarmingRecord(crop_name="TAPIOCA", planting_date="2023-11-20", notes="Intercropped"),
    ]
