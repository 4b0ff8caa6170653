"""
Line-oriented parsing of the tables virsh prints.

virsh has no machine-readable output for ``list`` or ``domblklist``, so the
rest of the package only ever sees the rows returned from here.
"""

from typing import Iterable, List, Union

from kvmconfigurator.logging import get_logger

log = get_logger(__name__)

DOMAIN_LIST_HEADERS = ("Id",)
BLOCK_LIST_HEADERS = ("Type", "Target")


def _is_separator(line: str) -> bool:
    return line.startswith("---") or set(line) <= {"-", " "}


def parse_tabular_output(
    raw: Union[str, bytes],
    min_fields: int,
    header_prefixes: Iterable[str] = DOMAIN_LIST_HEADERS,
) -> List[List[str]]:
    """
    Split a virsh table into rows of whitespace-separated fields.

    Header lines, separator rules and blank lines are skipped. Rows with fewer
    than ``min_fields`` fields are dropped without raising.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    headers = tuple(header_prefixes)
    rows: List[List[str]] = []
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith(headers) or _is_separator(line):
            continue
        fields = line.split()
        if len(fields) < min_fields:
            log.debug("table.row_dropped", line=line, fields=len(fields), min_fields=min_fields)
            continue
        rows.append(fields)
    return rows
