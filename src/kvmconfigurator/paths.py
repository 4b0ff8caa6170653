"""
Canonical path helpers for XML definitions and disk images.

Every module that needs to locate a domain's saved XML or derive a new disk
file name should import from here instead of computing paths inline.
"""

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def xml_definition_path(xml_dir: PathLike, domain_name: str) -> Path:
    """``<xml_dir>/<domain_name>.xml``."""
    return Path(xml_dir) / f"{domain_name}.xml"


def converted_disk_path(source: PathLike, target_format: str) -> str:
    """Same directory and stem as ``source``, extension swapped for the format."""
    return str(Path(source).with_suffix(f".{target_format}"))


def renamed_disk_path(disk: PathLike, new_name: str) -> str:
    """Disk named after the domain, keeping its directory and extension."""
    disk = Path(disk)
    return str(disk.parent / f"{new_name}{disk.suffix}")
