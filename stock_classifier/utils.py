import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional
import pandas as pd

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def coerce_number(value: Any) -> Optional[float]:
    """
    Converts a loosely typed field into a finite float.
    Returns None for anything that is not a number: None, NaN, infinity,
    booleans and strings that do not parse.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def clean_text(value: Any, default: str = "") -> str:
    """Stringifies a text field, mapping None, NaN and blanks to the default."""
    if value is None:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    text = str(value).strip()
    return text or default


def format_percentage(value: float, decimals: int = 2) -> str:
    """Formats a share as e.g. '12.34%'."""
    return f"{value:.{decimals}f}%"


def display_number(value: float) -> int | float:
    """Shows integral quantities without a trailing '.0' in exports."""
    return int(value) if float(value).is_integer() else value


def find_latest_report(directory: Path, prefix: str) -> tuple[Path, date] | None:
    """
    Finds the most recently modified CSV in `directory` whose name starts
    with `prefix`. Returns the path and the file's modification date.
    """
    if not directory.exists():
        return None

    candidates = sorted(
        directory.glob(f"{prefix}*.csv"), key=lambda p: p.stat().st_mtime
    )
    if not candidates:
        return None

    latest = candidates[-1]
    return latest, date.fromtimestamp(latest.stat().st_mtime)


def load_csv(file_path: Path, skiprows: int = 0) -> pd.DataFrame | None:
    """
    A CSV loader with an encoding fallback.
    It tries UTF-8 with BOM support ('utf-8-sig') first and falls back to
    latin-1, which can decode any byte.
    """
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", skiprows=skiprows)

    except UnicodeDecodeError:
        logger.info(
            f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return pd.read_csv(file_path, encoding="latin-1", skiprows=skiprows)
        except (OSError, ValueError, pd.errors.ParserError) as e_latin1:
            logger.error(
                f"Could not read {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"Report not found at {file_path}, skipping.")
        return None

    except (OSError, ValueError, pd.errors.ParserError) as e_general:
        # EmptyDataError is a ValueError subclass.
        logger.error(
            f"An unexpected error occurred while reading {file_path.name}. Reason: {e_general}"
        )
        return None
