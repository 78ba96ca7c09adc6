"""
CSV table loading for the two source tables.

Files are read with pandas as plain text so that parsing, and its error
reporting, stays in ``parsers``. Both tables are loaded concurrently.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Union

import pandas as pd
import structlog

from ..errors import MissingDataError

logger = structlog.get_logger(__name__)

PathLike = Union[str, Path]


def read_rows(path: PathLike, encoding: str = "utf-8-sig") -> list[dict[str, str]]:
    """
    Read a CSV file into header-keyed text rows.

    Args:
        path: CSV file path
        encoding: File encoding; the default strips a UTF-8 byte order mark

    Returns:
        One dictionary per non-blank line, every value a string

    Raises:
        MissingDataError: If the file does not exist
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise MissingDataError(f"CSV file not found: {csv_path}", data_type="csv")

    frame = pd.read_csv(
        csv_path,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding=encoding,
    )
    frame.columns = [str(column).strip() for column in frame.columns]

    logger.debug("Read CSV table", path=str(csv_path), rows=len(frame), columns=list(frame.columns))
    return frame.to_dict(orient="records")


def load_tables(price_path: PathLike, oi_path: PathLike) -> tuple[list[dict[str, str]], list[dict[str, str]]]:
    """
    Load the price and open-interest tables concurrently.

    Returns:
        Tuple of (price_rows, oi_rows)
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="csv-load") as pool:
        price_future = pool.submit(read_rows, price_path)
        oi_future = pool.submit(read_rows, oi_path)
        price_rows = price_future.result()
        oi_rows = oi_future.result()

    logger.info(
        "Loaded source tables",
        price_path=str(price_path),
        price_rows=len(price_rows),
        oi_path=str(oi_path),
        oi_rows=len(oi_rows)
    )
    return price_rows, oi_rows
