"""Local spreadsheet output for collected videos."""

import logging
from pathlib import Path

import pandas as pd

from tubeharvest.models.youtube import OutputRow

logger = logging.getLogger(__name__)

SHEET_NAME = "Videos"


def output_columns() -> list[str]:
    """Field names of an output row, in declaration order."""
    return list(OutputRow.model_fields)


def output_header() -> list[str]:
    return [name.upper() for name in output_columns()]


def rows_to_values(rows: list[OutputRow]) -> list[list]:
    """Flatten rows into cell values, with absent fields as empty cells."""
    columns = output_columns()
    values = []
    for row in rows:
        data = row.model_dump()
        values.append(["" if data[c] is None else data[c] for c in columns])
    return values


def write_videos_excel(path: Path, rows: list[OutputRow]) -> Path | None:
    """Write all rows to a single-sheet xlsx file in one go.

    Returns the written path, or None when there was nothing to write.
    """
    if not rows:
        logger.info("No video data to save.")
        return None

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([row.model_dump() for row in rows], columns=output_columns(), dtype=object)
    df.columns = output_header()
    df.to_excel(path, sheet_name=SHEET_NAME, index=False, engine="openpyxl")
    logger.info("Data successfully written to %s (%d rows)", path, len(df))
    return path
