"""
D2 Catalog - TSV Reader
Reads the game's tab-separated data files (itemtypes.txt, armor.txt, ...).
"""

import csv
import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


class Row(dict):
    """One data row keyed by header, with typed getters."""

    def get_str(self, key: str, default: str = "") -> str:
        val = self.get(key, "")
        return val if val else default

    def get_int(self, key: str, default: int = 0) -> int:
        val = self.get(key, "")
        if not val:
            return default
        try:
            return int(val)
        except ValueError:
            return default

    def get_bool(self, key: str) -> bool:
        """1 / true -> True; 0, empty or anything else -> False."""
        val = self.get(key, "")
        return val == "1" or val.lower() == "true"


def read_tsv(path: Union[str, Path]) -> List[Row]:
    """
    Parse a TSV file. The first line holds the headers.

    Blank lines and rows whose first cell is empty (comments / separators)
    are skipped; cells are stripped. Raises FileNotFoundError if the file
    doesn't exist.
    """
    path = Path(path)
    rows: List[Row] = []

    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        reader = csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE)
        headers = None
        for fields in reader:
            if not fields or not "".join(fields).strip():
                continue
            if headers is None:
                headers = fields
                continue
            if not fields[0].strip():
                continue
            rows.append(Row(
                (headers[i], field.strip()) for i, field in enumerate(fields) if i < len(headers)
            ))

    logger.debug(f"Read {len(rows)} rows from {path.name}")
    return rows
