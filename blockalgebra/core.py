from collections.abc import Iterable
from functools import reduce

from blockalgebra.block import Block


def merge(blocks: Iterable[Block]) -> list[Block]:
    """Return the minimal start-sorted, pairwise disjoint cover of ``blocks``.

    Overlapping and touching blocks are joined into single spans. The
    result is stable under a second merge.

    Example:
        >>> merge([Block(1, 5), Block(4, 10), Block(20, 25)])
        [Block(start=1, end=10), Block(start=20, end=25)]
    """
    return Block.merge(blocks)


def span(*blocks: Block) -> Block:
    """The smallest block enclosing every argument (chained ``union``)."""

    if not blocks:
        raise ValueError(
            f"span() requires at least one block argument.\n"
            f"Example: span(Block(1, 5), Block(8, 12))"
        )

    def reducer(acc: Block, nxt: Block) -> Block:
        return acc.union(nxt)

    return reduce(reducer, blocks)


def total_length(blocks: Iterable[Block]) -> float:
    """Length covered by ``blocks``, counting overlapping stretches once."""
    return sum(block.length() for block in merge(blocks))
