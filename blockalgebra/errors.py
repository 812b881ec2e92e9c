"""Errors raised by block operations.

Every operation either returns well-formed Blocks or raises one of these;
malformed intervals are never handed back to the caller.
"""

from typing import Any


class BlockError(Exception):
    """Base class for all blockalgebra errors."""


class InvalidInterval(BlockError, TypeError):
    """Endpoints that cannot be ordered against each other."""

    def __init__(self, start: Any, end: Any):
        super().__init__(
            f"Block endpoints must be mutually ordered values.\n"
            f"Got start={start!r} ({type(start).__name__}), "
            f"end={end!r} ({type(end).__name__})\n"
            f"Hint: Convert both endpoints to the same numeric scale first:\n"
            f"  Block(int(dt_a.timestamp()), int(dt_b.timestamp()))"
        )
        self.start: Any = start
        self.end: Any = end


class EmptyIntersection(BlockError, ValueError):
    """Limiting a block by another block it does not overlap."""

    def __init__(self, block: Any, limiter: Any):
        super().__init__(
            f"Cannot limit {block} to {limiter}: the blocks do not overlap.\n"
            f"Hint: Check block.overlaps(limiter) before calling limited()"
        )
        self.block: Any = block
        self.limiter: Any = limiter


class InsufficientBoundaryPoints(BlockError, ValueError):
    """subtract_many() found the wrong number of boundary points."""

    def __init__(self, block: Any, points: list[Any], required: int):
        super().__init__(
            f"subtract_many() needs exactly {required} boundary points "
            f"inside {block}, found {len(points)}: {points!r}\n"
            f"Hint: Use block - other for each subtracted block, or merge() "
            f"the results of single subtractions"
        )
        self.block: Any = block
        self.points: list[Any] = points
        self.required: int = required
