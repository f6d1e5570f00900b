"""Schema drift check for the explorer's GraphQL schema."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from explorer_harness.config import DEFAULT_SCHEMA_PATH

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def have_the_same_content(left: Path, right: Path) -> bool:
    if not left.exists() or not right.exists():
        return False
    return left.read_bytes() == right.read_bytes()


def compare_schema(actual_schema_path: PathLike, expected_schema_path: Optional[PathLike] = None) -> bool:
    """
    Compare a freshly introspected schema with the checked-in copy.

    On mismatch the checked-in copy is overwritten with the actual one and a
    warning asks for it to be committed. Never raises on drift. The default
    expected path is relative to the working directory.

    Raises:
        FileNotFoundError: if the actual schema does not exist; the expected
            copy is left untouched.

    Returns:
        True if both files were identical, False if the expected copy was updated.
    """
    actual = Path(actual_schema_path)
    expected = Path(expected_schema_path) if expected_schema_path is not None else DEFAULT_SCHEMA_PATH

    if not actual.is_file():
        logger.error(f"Introspected schema {actual} does not exist, cannot compare with {expected}")
        raise FileNotFoundError(f"introspected schema not found: {actual}")

    if have_the_same_content(actual, expected):
        logger.debug(f"Schema {expected} is up to date")
        return True

    expected.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(actual, expected)
    logger.warning(
        f"[DRIFT] discrepancies detected, already replaced {expected} with new content. "
        "Please commit to update schema"
    )
    return False
