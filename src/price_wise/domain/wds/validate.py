from __future__ import annotations

import pandas as pd

from price_wise.domain.wds.errors import DataQualityError


def validate_price_rows(df: pd.DataFrame) -> None:

    required = ["vector_id", "year", "month", "value", "product"]
    missing = [c for c in required if c not in df.columns]

    if missing:
        raise DataQualityError(f"Missing columns: {missing}")

    if df.empty:
        return

    if df["vector_id"].isna().any():
        raise DataQualityError("vector_id has nulls")

    if df["value"].isna().any():
        raise DataQualityError("value has nulls")

    if df["product"].isna().any():
        raise DataQualityError("product has nulls")

    if not df["month"].between(1, 12).all():
        raise DataQualityError("month out of range 1..12")

    # uma linha por (vector, year, month); duplicata indica fan-out repetido
    dup = df.duplicated(subset=["vector_id", "year", "month"]).any()
    if dup:
        raise DataQualityError("Found duplicates on (vector_id, year, month)")
