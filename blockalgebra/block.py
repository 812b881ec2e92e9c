"""The Block value type: a closed interval on an ordered numeric scale.

Blocks are used to work out how free and busy periods of a schedule
interact. Callers convert their domain values (timestamps, offsets) to plain
numbers first; a Block knows nothing about units or time zones.

    >>> Block(3, 8) + Block(5, 12)
    [Block(start=3, end=12)]
    >>> Block(5, 25) - Block(10, 20)
    [Block(start=5, end=10), Block(start=20, end=25)]
"""

import logging
import warnings
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Any, Literal, TypeAlias

from typing_extensions import override

from blockalgebra.errors import (
    EmptyIntersection,
    InsufficientBoundaryPoints,
    InvalidInterval,
)

logger = logging.getLogger(__name__)

SubtractMode: TypeAlias = Literal["exact", "legacy"]
DEFAULT_MODE: SubtractMode = "exact"

# subtract_many() rebuilds two blocks from this many boundary points
BOUNDARY_POINTS = 4


def _check_mode(mode: str) -> None:
    if mode not in ("exact", "legacy"):
        raise ValueError(
            f"mode must be 'exact' or 'legacy', got {mode!r}.\n"
            f"Hint: 'legacy' reproduces the historical results, "
            f"'exact' is the corrected behaviour"
        )


@dataclass(frozen=True, order=True)
class Block:
    """An immutable closed interval ``[start, end]`` with ``start <= end``.

    Endpoints passed in reverse order are swapped, so ``Block(8, 3)`` equals
    ``Block(3, 8)``. Blocks compare and sort by ``(start, end)``.
    """

    start: float
    end: float

    def __post_init__(self) -> None:
        try:
            ordered = self.start <= self.end
            reversed_ = self.end < self.start
        except TypeError as exc:
            raise InvalidInterval(self.start, self.end) from exc
        if not (ordered or reversed_):
            # NaN and friends compare false both ways
            raise InvalidInterval(self.start, self.end)
        if reversed_:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @property
    def top(self) -> float:
        return self.start

    @property
    def bottom(self) -> float:
        return self.end

    def length(self) -> float:
        return self.end - self.start

    @override
    def __str__(self) -> str:
        """Human-friendly string showing range and length."""
        return f"Block({self.start}→{self.end}, length {self.length()})"

    def as_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end}

    # Position

    def include(self, n: Any) -> bool:
        """True if the scalar ``n`` lies within the closed interval."""
        return self.start <= n <= self.end

    def __contains__(self, n: Any) -> bool:
        return self.include(n)

    def surrounds(self, other: "Block") -> bool:
        """This block strictly contains the other, sharing no boundary."""
        return other.start > self.start and other.end < self.end

    def covers(self, other: "Block") -> bool:
        """This block contains the other; boundaries may coincide."""
        return other.start >= self.start and other.end <= self.end

    def intersects_top(self, other: "Block") -> bool:
        """This block overlaps the start side of the other block."""
        return self.start <= other.start and other.include(self.end)

    def intersects_bottom(self, other: "Block") -> bool:
        """This block overlaps the end side of the other block."""
        return self.end >= other.end and other.include(self.start)

    def overlaps(self, other: "Block") -> bool:
        """The blocks share at least one point, touching included."""
        return self.include(other.start) or other.include(self.start)

    # Derivations

    def union(self, other: "Block") -> "Block":
        """The smallest block enclosing both, whether or not they overlap."""
        return Block(min(self.start, other.start), max(self.end, other.end))

    def split(self, other: "Block") -> tuple["Block", "Block"]:
        """Cut the other block's span out of this one.

        Only the bounds are used; check ``surrounds`` or ``covers`` first.
        """
        return Block(self.start, other.start), Block(other.end, self.end)

    def trim_from(self, new_top: float) -> "Block":
        return Block(new_top, self.end)

    def trim_to(self, new_bottom: float) -> "Block":
        return Block(self.start, new_bottom)

    def limited(self, limiter: "Block") -> "Block":
        """The part of this block that lies within ``limiter``.

        Raises:
            EmptyIntersection: If the two blocks do not overlap.
        """
        start = max(self.start, limiter.start)
        end = min(self.end, limiter.end)
        if start > end:
            raise EmptyIntersection(self, limiter)
        return Block(start, end)

    def padded(self, top_padding: float, bottom_padding: float) -> "Block":
        """Grow the block outward; negative paddings count as zero."""
        return Block(
            self.start - max(top_padding, 0), self.end + max(bottom_padding, 0)
        )

    # Operators

    def add(self, other: "Block") -> list["Block"]:
        """Combine with the other block.

        Overlapping blocks collapse into their union. Disjoint blocks come
        back as ``[other, self]``, in that order and unsorted.
        """
        if self.overlaps(other):
            return [self.union(other)]
        return [other, self]

    def subtract(
        self, other: "Block", *, mode: SubtractMode = DEFAULT_MODE
    ) -> list["Block"]:
        """Remove the other block's span from this one.

        Returns between zero and two blocks. Boundary points are kept, so
        ``Block(5, 25) - Block(10, 20)`` leaves ``[5, 10]`` and ``[20, 25]``.

        Args:
            other: Block to remove
            mode: ``"exact"`` returns the true difference. ``"legacy"``
                reproduces the historical results, which drop this block
                entirely when ``other`` misses it or only partly overlaps it.
        """
        _check_mode(mode)
        if self == other:
            return []
        if self.surrounds(other):
            return list(self.split(other))
        if self.covers(other):
            if self.intersects_top(other):
                return [self.trim_to(other.start)]
            return [self.trim_from(other.end)]

        if not self.overlaps(other):
            if mode == "legacy":
                logger.debug("legacy subtract dropped %s (no overlap)", self)
                return []
            return [self]
        if mode == "exact" and other.covers(self):
            return []
        if other.end == self.start:
            return [self]
        if mode == "legacy":
            logger.debug("legacy subtract dropped %s (partial overlap)", self)
            return []

        if other.start <= self.start:
            return [self.trim_from(other.end)]
        return [self.trim_to(other.start)]

    def subtract_many(self, others: Iterable["Block"]) -> list["Block"]:
        """Rebuild two blocks from boundary points of ``others`` inside self.

        The start and end of each block in ``others`` that falls within this
        block is collected in order; the first two points form one block and
        the next two the other.

        Raises:
            InsufficientBoundaryPoints: Unless exactly four points qualify.
        """
        points: list[float] = []
        for block in others:
            if self.include(block.start):
                points.append(block.start)
            if self.include(block.end):
                points.append(block.end)

        if len(points) != BOUNDARY_POINTS:
            raise InsufficientBoundaryPoints(self, points, BOUNDARY_POINTS)
        return [Block(points[0], points[1]), Block(points[2], points[3])]

    def __add__(self, other: "Block") -> list["Block"]:
        if not isinstance(other, Block):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Block | Sequence[Block]") -> list["Block"]:
        if isinstance(other, Block):
            return self.subtract(other)
        if isinstance(other, Sequence) and not isinstance(other, str):
            return self.subtract_many(other)
        return NotImplemented

    # Merging

    @staticmethod
    def merge(blocks: Iterable["Block"]) -> list["Block"]:
        """Reduce blocks to the minimal sorted, pairwise disjoint cover.

        Touching blocks are joined, since they share a boundary point.
        """

        def reducer(acc: list[Block], block: Block) -> list[Block]:
            if acc and acc[-1].overlaps(block):
                return acc[:-1] + (acc[-1] + block)
            return acc + [block]

        return reduce(reducer, sorted(blocks, key=lambda b: b.start), [])

    def merge_with(
        self, others: Sequence["Block"], *, mode: SubtractMode = DEFAULT_MODE
    ) -> list["Block"]:
        """Merge this block with ``others``.

        ``"exact"`` is ``Block.merge([self, *others])``. ``"legacy"`` runs the
        historical neighbour-by-neighbour comparison, which only gives a
        correct cover for particular layouts and is deprecated.
        """
        _check_mode(mode)
        if mode == "exact":
            return Block.merge([self, *others])

        warnings.warn(
            "merge_with(mode='legacy') compares positional neighbours only and "
            "is deprecated; use Block.merge([block, *others]) instead",
            DeprecationWarning,
            stacklevel=2,
        )
        logger.debug("legacy merge of %s with %d blocks", self, len(others))
        blocks: list[Block] = []
        isolated = 0
        last = len(others) - 1
        for i, block in enumerate(others):
            if i == 0:
                current, neighbour = self, block
            elif i == last:
                current, neighbour = block, others[i - 1]
            else:
                current, neighbour = block, others[i + 1]

            if current.overlaps(neighbour):
                blocks.append(Block(current.start, neighbour.end))
            else:
                isolated += 1
            if isolated == 2:
                blocks.append(Block(block.start, block.end))
        return blocks
