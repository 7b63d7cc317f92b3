"""Loading flowchart data from the PRISMA CSV template.

The template has one row per metric with the columns ``data`` (metric
name), ``node``, ``box`` (logical box name), ``boxtext``, ``tooltips``,
``url`` and ``n``.  Header boxes have no metric and are matched on
``box`` instead.  Exclusion tables are written in a single ``n`` cell as
``"Reason 1, 10; Reason 2, 8"``.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import IO, Dict, List, Optional, Union

import pandas as pd

from ..core.errors import TemplateFormatError
from ..core.ids import BoxName, HEADER_BOXES
from ..core.models import FlowData, PrismaData, Tooltips, UrlMap, parse_count
from ..utils.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_COLUMNS = ("data", "node", "box", "boxtext", "tooltips", "url", "n")

EXCLUSION_METRICS = ("dbr_excluded", "other_excluded")

METRICS = (
    "previous_studies",
    "previous_reports",
    "register_results",
    "database_results",
    "website_results",
    "organisation_results",
    "citations_results",
    "duplicates",
    "excluded_automatic",
    "excluded_other",
    "records_screened",
    "records_excluded",
    "dbr_sought_reports",
    "dbr_notretrieved_reports",
    "other_sought_reports",
    "other_notretrieved_reports",
    "dbr_assessed",
    "dbr_excluded",
    "other_assessed",
    "other_excluded",
    "new_studies",
    "new_reports",
    "total_studies",
    "total_reports",
)

Source = Union[str, Path, IO, pd.DataFrame]


def template_path() -> Path:
    """Path of the blank template bundled with the package."""
    return Path(__file__).resolve().parent.parent / "data" / "PRISMA.csv"


def write_template(path: Union[str, Path]) -> Path:
    """Copy the bundled template to ``path`` and return the destination."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(template_path(), path)
    logger.info(f"Wrote PRISMA template to {path}")
    return path


def load_frame(source: Source) -> pd.DataFrame:
    """Read the template into a string-only frame with blanks as ``""``."""
    if isinstance(source, pd.DataFrame):
        frame = source.copy()
    else:
        try:
            frame = pd.read_csv(source, dtype=str)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise TemplateFormatError(f"Cannot read template: {e}") from e
    frame.columns = [str(c).strip() for c in frame.columns]
    missing = [c for c in TEMPLATE_COLUMNS if c not in frame.columns]
    if missing:
        raise TemplateFormatError(f"Template is missing columns: {', '.join(missing)}")
    frame = frame.fillna("")
    for column in frame.columns:
        frame[column] = frame[column].astype(str).str.strip()
    return frame


def _tooltips(frame: pd.DataFrame) -> Tooltips:
    values = [v for v in frame["tooltips"].tolist() if v]
    try:
        return Tooltips.from_sequence(values)
    except ValueError as e:
        raise TemplateFormatError(str(e)) from e


def _urls(frame: pd.DataFrame) -> UrlMap:
    firsts = frame[frame["box"] != ""].drop_duplicates(subset="box", keep="first")
    known = {box.value for box in BoxName}
    unknown = sorted(set(firsts["box"]) - known)
    if unknown:
        raise TemplateFormatError(f"Unknown box names: {', '.join(unknown)}")
    return UrlMap.from_mapping(dict(zip(firsts["box"], firsts["url"])))


def _flow(frame: pd.DataFrame) -> FlowData:
    counts: Dict[str, int] = {}
    labels: Dict[str, str] = {}
    exclusions: Dict[str, Optional[str]] = {m: None for m in EXCLUSION_METRICS}

    rows = frame[frame["data"].isin(METRICS)].drop_duplicates(subset="data", keep="first")
    for metric, text, n in zip(rows["data"], rows["boxtext"], rows["n"]):
        if text:
            labels[metric] = text
        if metric in EXCLUSION_METRICS:
            exclusions[metric] = n or None
        elif n:
            counts[metric] = parse_count(metric, n)

    for box in HEADER_BOXES:
        texts: List[str] = [t for t in frame.loc[frame["box"] == box.value, "boxtext"] if t]
        if texts:
            labels[box.value] = texts[0]

    return FlowData(
        counts=counts,
        labels=labels,
        dbr_excluded=exclusions["dbr_excluded"],
        other_excluded=exclusions["other_excluded"],
    )


def read_prisma_data(source: Source) -> PrismaData:
    """Load counts, texts, tooltips and URLs from a filled-in template.

    Args:
        source: CSV path, open file or an already loaded ``DataFrame``.

    Raises:
        TemplateFormatError: Required columns or box names are wrong.
        InvalidCountError: A scalar ``n`` is not a non-negative integer.
        MalformedExclusionTableError: An exclusion cell cannot be parsed.
    """
    frame = load_frame(source)
    flow = _flow(frame)
    data = PrismaData(flow=flow, tooltips=_tooltips(frame), urls=_urls(frame))
    logger.info(
        f"Loaded PRISMA data: {len(flow.counts)} counts, "
        f"{len(data.tooltips.entries)} tooltips, {len(data.urls)} URLs"
    )
    return data


def preview_table(source: Source) -> pd.DataFrame:
    """The ``box`` to ``n`` columns of the template, for display."""
    frame = load_frame(source)
    return frame[list(TEMPLATE_COLUMNS[2:])]
