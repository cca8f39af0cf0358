"""
Severity definitions and level mask parsing.

Level constants form a bitmask the caller ORs together to pick a verbosity
floor: Trace=1, Info=2, Warning=4, Error=8.
"""

import logging
from enum import Enum
from typing import Iterable, Union

LEVEL_NONE = 0
LEVEL_TRACE = 1
LEVEL_INFO = 2
LEVEL_WARNING = 4
LEVEL_ERROR = 8
LEVEL_ALL = LEVEL_TRACE | LEVEL_INFO | LEVEL_WARNING | LEVEL_ERROR


class Severity(Enum):
    """Classification of a log call, ordered Trace < Info < Warning < Error."""

    TRACE = (LEVEL_TRACE, "TRACE: ", "stdout", 5)
    INFO = (LEVEL_INFO, "INFO: ", "stdout", logging.INFO)
    WARNING = (LEVEL_WARNING, "WARNING: ", "stdout", logging.WARNING)
    ERROR = (LEVEL_ERROR, "ERROR: ", "stderr", logging.ERROR)

    def __init__(self, bit: int, prefix: str, stream: str, levelno: int):
        self.bit = bit
        self.prefix = prefix
        self.stream = stream
        self.levelno = levelno

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.bit < other.bit


_ALIASES = {
    "trace": LEVEL_TRACE,
    "debug": LEVEL_TRACE,
    "info": LEVEL_INFO,
    "warning": LEVEL_WARNING,
    "warn": LEVEL_WARNING,
    "error": LEVEL_ERROR,
    "all": LEVEL_ALL,
    "none": LEVEL_NONE,
    "off": LEVEL_NONE,
}

LevelSpec = Union[int, str, Iterable[Union[int, str]], None]


def _check_mask(mask: int) -> int:
    if mask < LEVEL_NONE or mask > LEVEL_ALL:
        raise ValueError(f"Level mask {mask} is outside [{LEVEL_NONE}, {LEVEL_ALL}]")
    return mask


def parse_level_mask(value: LevelSpec) -> int:
    """
    Convert a configuration value into a level bitmask.

    Accepts an int, a severity name, a string of names separated by "|" or ","
    (digits are read as ints), or a list of any of those. None means no levels.

    Raises:
        ValueError: unknown name or a mask outside [0, 15]
    """
    if value is None:
        return LEVEL_NONE
    if isinstance(value, bool):
        raise ValueError(f"Invalid level value: {value!r}")
    if isinstance(value, int):
        return _check_mask(value)
    if isinstance(value, str):
        parts = [p.strip() for p in value.replace(",", "|").split("|")]
        mask = LEVEL_NONE
        for part in parts:
            if not part:
                continue
            if part.isdigit():
                mask |= _check_mask(int(part))
            elif part.lower() in _ALIASES:
                mask |= _ALIASES[part.lower()]
            else:
                raise ValueError(f"Unknown severity name: {part!r}")
        return mask

    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError(f"Invalid level value: {value!r}")

    mask = LEVEL_NONE
    for item in value:
        mask |= parse_level_mask(item)
    return mask
