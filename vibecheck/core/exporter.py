"""Export utilities for profile results."""

from pathlib import Path
from typing import TYPE_CHECKING

from vibecheck.models.result import ProfileResult

if TYPE_CHECKING:
    import pandas as pd

try:
    import pandas as pd
    PANDAS_AVAILABLE = True
except ImportError:
    PANDAS_AVAILABLE = False


def to_json(result: ProfileResult, indent: int = 2) -> str:
    """
    Convert ProfileResult to JSON string.

    Args:
        result: ProfileResult to serialize
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return result.model_dump_json(indent=indent)


def to_dict(result: ProfileResult) -> dict:
    """Convert ProfileResult to a JSON-compatible dictionary."""
    return result.model_dump(mode="json")


def save_json(
    result: ProfileResult,
    filepath: str | Path,
    indent: int = 2,
) -> Path:
    """
    Save ProfileResult to JSON file.

    Args:
        result: ProfileResult to save
        filepath: Output file path
        indent: JSON indentation level

    Returns:
        Path to saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.model_dump_json(indent=indent), encoding="utf-8")
    return path


def load_json(filepath: str | Path) -> ProfileResult:
    """Load ProfileResult from JSON file."""
    path = Path(filepath)
    return ProfileResult.model_validate_json(path.read_text(encoding="utf-8"))


def _check_pandas():
    """Raise ImportError if pandas is not available."""
    if not PANDAS_AVAILABLE:
        raise ImportError(
            "pandas is required for DataFrame export. Install with: pip install pandas"
        )


def results_to_profiles_df(results: list[ProfileResult]) -> "pd.DataFrame":
    """
    Convert successful results to a DataFrame, one row per profile.

    Each row carries the profile fields plus streak and score_delta.

    Raises:
        ImportError: If pandas is not installed
    """
    _check_pandas()

    rows = []
    for result in results:
        if result.success and result.profile:
            row = result.profile.model_dump(mode="json")
            row["streak"] = result.streak
            row["score_delta"] = result.score_delta
            rows.append(row)

    return pd.DataFrame(rows)
