#!/usr/bin/env python3
"""
Renders diff HTML for a CSV of phone fixes.
- Uses the project's DiffRenderer, so the output matches the API.
- CSV schema (columns):
  original, suggested            (required)
  key, new_key                   (optional, tag rename)
- Adds columns: old_diff, new_diff, old_tag_diff, new_tag_diff
"""
import sys
from typing import Optional
import pandas as pd

from app.services.renderer import DiffRenderer

REQUIRED_COLS = ["original", "suggested"]

def _ensure_cols(df: pd.DataFrame):
    missing = [c for c in REQUIRED_COLS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV missing required columns: {missing}")

def _cell(row: pd.Series, col: str) -> Optional[str]:
    value = row.get(col)
    if value is None or pd.isna(value):
        return None
    return str(value)

def render_row(renderer: DiffRenderer, row: pd.Series) -> pd.Series:
    old_diff, new_diff = renderer.get_diff_html(_cell(row, "original"), _cell(row, "suggested"))
    key, new_key = _cell(row, "key"), _cell(row, "new_key")
    old_tag_diff = new_tag_diff = None
    if key and new_key and key != new_key:
        old_tag_diff, new_tag_diff = renderer.get_diff_tags_html(key, new_key)
    return pd.Series({
        "old_diff": old_diff,
        "new_diff": new_diff,
        "old_tag_diff": old_tag_diff,
        "new_tag_diff": new_tag_diff,
    })

def render_csv(csv_path: str, out_path: Optional[str] = None) -> pd.DataFrame:
    # keep values as text, leading zeros matter
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, na_values=[""])
    _ensure_cols(df)

    renderer = DiffRenderer()
    rendered = df.apply(lambda r: render_row(renderer, r), axis=1) if len(df) else pd.DataFrame(
        columns=["old_diff", "new_diff", "old_tag_diff", "new_tag_diff"]
    )
    result = pd.concat([df, rendered], axis=1)

    if out_path:
        result.to_csv(out_path, index=False)
        print(f"Rendered {len(result)} rows -> {out_path}")
    return result

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python render_diffs_csv.py <csv_path> [out_csv_path]")
        sys.exit(1)
    render_csv(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None)
