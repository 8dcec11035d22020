"""Lenient ``key = "value"`` line parser for tfvars and backend-config files.

This is not an HCL parser. A line contributes a value only when it matches::

    <key> = "<value>" [anything]

where ``<key>`` starts with a letter or underscore and ``<value>`` contains
no double quote. Leading and trailing whitespace around the key, the equals
sign and the quoted value is ignored. Every other line (comments, blocks,
lists, unquoted values) is skipped. When a key appears more than once the
first occurrence wins.
"""

# Standard Library
import re
from pathlib import Path
from typing import Dict, Optional, Union

# Third Party
from aws_lambda_powertools import Logger

# Local Modules
from landing_zone.exceptions import ConfigurationError

# Initialize logger
logger = Logger(service="tfvars-parser")

LINE_PATTERN = re.compile(
    r'^\s*(?P<key>[A-Za-z_][A-Za-z0-9_-]*)\s*=\s*"(?P<value>[^"]*)"'
)


def parse_tfvars(text: str) -> Dict[str, str]:
    """Parse ``key = "value"`` lines from ``text``.

    Parameters
    ----------
    text : str
        File contents.

    Returns
    -------
    Dict[str, str]
        Values keyed by name, with surrounding whitespace stripped.
    """
    values: Dict[str, str] = {}
    for line in text.splitlines():
        match = LINE_PATTERN.match(line)
        if match is None:
            continue
        key = match.group("key")
        if key not in values:
            values[key] = match.group("value").strip()
    return values


def read_tfvars(path: Union[str, Path]) -> Dict[str, str]:
    """Read and parse a tfvars-style file.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigurationError
        If ``path`` is not valid UTF-8.
    """
    path = Path(path)
    logger.debug(f"Reading values from {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.error(f"Could not decode {path}: {e}")
        raise ConfigurationError(f"{path} is not valid UTF-8") from e
    return parse_tfvars(text)


def read_value(path: Union[str, Path], key: str) -> Optional[str]:
    """Return the value of ``key`` in ``path``, or ``None`` when absent.

    A missing file is treated like a missing key.
    """
    path = Path(path)
    if not path.is_file():
        return None
    return read_tfvars(path).get(key)
