"""
CSV ingestion and export for leads and scored results.
"""

import csv
import io
from typing import List, Sequence

import pandas as pd

from .config.settings import LEAD_FIELDS, EXPORT_COLUMNS
from .errors import LeadImportError, NoResultsError
from .models.schemas import Lead, ScoredLead


def read_leads_csv(contents: bytes) -> List[Lead]:
    """
    Parse uploaded CSV bytes into leads, in file order.

    Column names are matched case-insensitively; missing columns and blank
    cells become empty strings.
    """
    try:
        # index_col=False: rows with trailing extra fields must not shift columns
        df = pd.read_csv(
            io.BytesIO(contents),
            dtype=str,
            keep_default_na=False,
            index_col=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise LeadImportError(f"Could not parse CSV: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    for column in LEAD_FIELDS:
        if column not in df.columns:
            df[column] = ""

    return [Lead(**row) for row in df[LEAD_FIELDS].to_dict(orient="records")]


def results_to_csv(results: Sequence[ScoredLead]) -> str:
    """
    Render results as CSV with every field quoted.

    Raises:
        NoResultsError: when there is nothing to export
    """
    if not results:
        raise NoResultsError("No results to export.")

    df = pd.DataFrame(
        [r.model_dump(mode="json") for r in results],
        columns=EXPORT_COLUMNS,
    )
    body = df.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    return ",".join(EXPORT_COLUMNS) + "\n" + body
