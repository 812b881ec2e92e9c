from .block import DEFAULT_MODE, Block, SubtractMode
from .core import merge, span, total_length
from .errors import (
    BlockError,
    EmptyIntersection,
    InsufficientBoundaryPoints,
    InvalidInterval,
)

__all__ = [
    "Block",
    "SubtractMode",
    "DEFAULT_MODE",
    "merge",
    "span",
    "total_length",
    "BlockError",
    "InvalidInterval",
    "EmptyIntersection",
    "InsufficientBoundaryPoints",
]
