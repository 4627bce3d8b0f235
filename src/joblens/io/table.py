# src/joblens/io/table.py
from __future__ import annotations

from pathlib import Path
from typing import List, Union

import pandas as pd

from joblens.models import RawTable


def _read_csv(path: Union[str, Path]) -> pd.DataFrame:
    # Every cell as text; blank cells stay "" instead of NaN
    return pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)


def frame_to_table(df: pd.DataFrame) -> RawTable:
    """
    Turn a DataFrame into the header + rows shape the engine expects.
    Trailing empty cells are dropped, as a Sheets values export would.
    """
    headers = [str(c) for c in df.columns]
    rows: List[List[str]] = []
    for values in df.astype(str).itertuples(index=False, name=None):
        row = list(values)
        while row and row[-1] == "":
            row.pop()
        rows.append(row)
    return {"headers": headers, "rows": rows}


def read_table(path: Union[str, Path]) -> RawTable:
    """
    Load a local CSV export (e.g. File > Download > CSV from Google Sheets).

    - Raises FileNotFoundError if the file is missing.
    - A file with only a header row gives an empty `rows` list.
    - A completely empty file gives an empty table.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No such file: {path}")
    try:
        df = _read_csv(path)
    except pd.errors.EmptyDataError:
        return {"headers": [], "rows": []}
    return frame_to_table(df)
