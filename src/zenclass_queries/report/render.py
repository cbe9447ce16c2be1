"""Console rendering of question results with pandas."""

from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd
from pydantic import BaseModel

EMPTY = "(no rows)"


def render_table(rows: Iterable[BaseModel], columns: Sequence[str]) -> str:
    """Render `rows` as a plain-text table restricted to `columns`.

    Columns are looked up by alias, so `_id` selects a model's `id` field.
    """
    records = [row.model_dump(by_alias=True) for row in rows]
    if not records:
        return EMPTY
    frame = pd.DataFrame(records, columns=list(columns))
    return frame.to_string(index=False)
