#!/usr/bin/env python3
"""Sample dataset generation script.

Generates Excel workbooks in the layouts the context engine reads:

Ranking workbook (<ranking>.xlsx, one sheet):
- Row 1: Title row
- Row 2: blank
- Row 3: Header row starting with "Crop"
- Row 4+: one crop per row (name, area, production, yield)

Market workbook (<CROP>.xlsx, one sheet per month):
- Row 1: Title row
- Row 2: blank
- Row 3: Header row starting with "District"
- Row 4+: district, current, previous month, previous year, month %, year %
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

KERALA_DISTRICTS = [
    "Thiruvananthapuram", "Kollam", "Pathanamthitta", "Alappuzha", "Kottayam",
    "Idukki", "Ernakulam", "Thrissur", "Palakkad", "Malappuram",
    "Kozhikode", "Wayanad", "Kannur", "Kasaragod",
]

DEFAULT_CROPS = [
    "RICE", "BANANA", "COCONUT", "BLACK_PEPPER", "CARDAMOMS", "RUBBER", "COFFEE", "TAPIOCA",
]

# Base price per quintal used to draw plausible values
BASE_PRICES = {
    "RICE": 2800.0,
    "BANANA": 3500.0,
    "COCONUT": 2600.0,
    "BLACK_PEPPER": 52000.0,
    "CARDAMOMS": 150000.0,
    "RUBBER": 17000.0,
    "COFFEE": 21000.0,
    "TAPIOCA": 2400.0,
}


def _write_sheets(output_path: Path, sheets: dict[str, list[list[Any]]]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)


def market_rows(crop: str, month: str, rng: np.random.Generator, missing_rate: float) -> list[list[Any]]:
    """Rows of one month sheet, with some price cells left empty or non-numeric."""
    base = BASE_PRICES.get(crop, 3000.0)
    rows: list[list[Any]] = [
        [f"District-wise prices of {crop} ({month})"],
        [],
        ["District", month, "Previous Month", "Previous Year", "Change over Month (%)", "Change over Year (%)"],
    ]
    for district in KERALA_DISTRICTS:
        current, prev_month, prev_year = np.round(base * rng.uniform(0.8, 1.2, 3), 2).tolist()
        month_pct = round((current - prev_month) / prev_month * 100, 2)
        year_pct = round((current - prev_year) / prev_year * 100, 2)
        row: list[Any] = [district, current, prev_month, prev_year, month_pct, year_pct]
        if rng.random() < missing_rate:
            # 欠損 / 非数値セルを混ぜる
            row[int(rng.integers(1, 4))] = rng.choice(["", "NA", "-"])
        rows.append(row)
    return rows


def ranking_rows(crops: list[str], rng: np.random.Generator) -> list[list[Any]]:
    rows: list[list[Any]] = [
        ["Top crops of Kerala by area"],
        [],
        ["Crop", "Area (ha)", "Production (t)", "Yield (kg/ha)"],
    ]
    for crop in crops:
        area = int(rng.integers(5_000, 800_000))
        production = int(rng.integers(10_000, 2_000_000))
        rows.append([crop.replace("_", " ").title(), area, production, round(production * 1000 / area, 1)])
    return rows


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate sample ranking and market workbooks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s public/data
  %(prog)s public/data --crops RICE BANANA --months January February --seed 7
        """,
    )
    parser.add_argument("output_dir", type=Path, help="Directory to write .xlsx files into")
    parser.add_argument("--crops", nargs="+", default=DEFAULT_CROPS, help="Crop workbook names")
    parser.add_argument("--months", nargs="+", default=["January", "December"], help="Month sheet names")
    parser.add_argument("--ranking", default="top10_crops_kerala", help="Ranking workbook name")
    parser.add_argument("--missing-rate", type=float, default=0.1, help="Share of rows with a bad price cell")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing files")
    args = parser.parse_args(argv)

    if not 0.0 <= args.missing_rate <= 1.0:
        print("Error: --missing-rate must be between 0 and 1", file=sys.stderr)
        return 1

    print("Sample dataset plan:")
    print(f"  Output directory: {args.output_dir}")
    print(f"  Ranking workbook: {args.ranking}.xlsx")
    print(f"  Market workbooks: {len(args.crops)} ({', '.join(args.crops)})")
    print(f"  Months per workbook: {', '.join(args.months)}")
    if args.dry_run:
        print("\n[DRY RUN] Would generate files but not creating them.")
        return 0

    rng = np.random.default_rng(args.seed)
    try:
        _write_sheets(args.output_dir / f"{args.ranking}.xlsx", {"Top10": ranking_rows(args.crops, rng)})
        for crop in args.crops:
            sheets = {m: market_rows(crop, m, rng, args.missing_rate) for m in args.months}
            _write_sheets(args.output_dir / f"{crop}.xlsx", sheets)
            print(f"Created {crop}.xlsx")
    except OSError as e:
        print(f"\nError generating datasets: {e}", file=sys.stderr)
        return 1
    print("\nSample datasets generated successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
