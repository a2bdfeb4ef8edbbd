"""
Export the course catalog, in course-number order, to a CSV or xlsx file.

Usage:
    python scripts/export_catalog.py [--src PATH] [--out PATH]

Defaults:
    --src  CATALOG_PATH, or data/CS 300 ABCU_Advising_Program_Input.csv
    --out  catalog_sorted.csv                (repo root)

An --out path ending in .xlsx is written with openpyxl; anything else is CSV.
"""

import argparse
import os
import sys

import pandas as pd
from dotenv import load_dotenv

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(REPO_ROOT, "backend"))

from catalog import Catalog
from catalog_loader import CatalogSourceError, load_catalog
from settings import resolve_catalog_path


def catalog_export_frame(catalog: Catalog) -> pd.DataFrame:
    """Sorted listing with prerequisites flattened to a space-separated string."""
    df = catalog.to_frame()
    df["prerequisites"] = df["prerequisites"].apply(lambda p: " ".join(p))
    return df


def write_frame(df: pd.DataFrame, out_path: str) -> None:
    if out_path.lower().endswith(".xlsx"):
        with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="courses", index=False)
    else:
        df.to_csv(out_path, index=False)


def export(src: str, out_path: str) -> int:
    catalog = Catalog()
    try:
        report = load_catalog(catalog, src)
    except CatalogSourceError as exc:
        print(f"[FATAL] {exc}")
        return 1
    print(report.summary())

    out_dir = os.path.dirname(os.path.abspath(out_path))
    os.makedirs(out_dir, exist_ok=True)

    df = catalog_export_frame(catalog)
    write_frame(df, out_path)
    print(f"[OK]   {len(df)} courses → {out_path}")
    return 0


def main(args=None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Export the course catalog in sorted order.")
    parser.add_argument(
        "--src",
        default=None,
        help="Catalog source file (default: CATALOG_PATH or the bundled catalog)",
    )
    parser.add_argument(
        "--out",
        default=os.path.join(REPO_ROOT, "catalog_sorted.csv"),
        help="Output file (.csv or .xlsx)",
    )
    opts = parser.parse_args(args)
    src = os.path.abspath(opts.src) if opts.src else resolve_catalog_path()
    return export(src, opts.out)


if __name__ == "__main__":
    sys.exit(main())
