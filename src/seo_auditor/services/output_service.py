# src/seo_auditor/services/output_service.py
import logging
import os
from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Union

import pandas as pd

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["file", "rule_index", "result"]


def write_console(results: Iterable[str]) -> None:
    """Prints the results between a header and a footer line."""
    print("=== Results ===")
    for r in results:
        print(r)
    print("===============")


def write_file(results: Iterable[str], dest_path: Union[str, Path], encoding: str = "utf-8") -> Path:
    """Writes one result per line to `dest_path`, replacing existing content."""
    path = Path(dest_path)
    with open(path, "w", encoding=encoding, newline="") as f:
        for r in results:
            f.write(r)
            f.write(os.linesep)
    logger.info("Results written to %s", path)
    return path


def write_stream(results: Iterable[str], stream: IO[str]) -> IO[str]:
    """Writes one result per line to an open text stream and returns it."""
    for r in results:
        stream.write(r)
        stream.write(os.linesep)
    stream.flush()
    return stream


def export_results(records: List[Dict[str, Any]], dest_path: Union[str, Path]) -> Path:
    """
    Exports evaluation records to a table. The format follows the file
    extension: .csv, .json or .xlsx.

    Args:
        records: Dicts with the keys 'file', 'rule_index' and 'result'.
        dest_path: Target file.

    Returns:
        Path: The written file.
    """
    path = Path(dest_path)
    df = pd.DataFrame(records, columns=EXPORT_COLUMNS)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix == ".json":
        df.to_json(path, orient="records", indent=2)
    elif suffix == ".xlsx":
        df.to_excel(path, index=False)
    else:
        raise ValueError(f"Unsupported export format '{suffix}'. Use .csv, .json or .xlsx.")

    logger.info("Exported %d row(s) to %s", len(df), path)
    return path
