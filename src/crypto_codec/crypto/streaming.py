"""Chunked streaming over incremental cipher and hash contexts.

Large inputs are fed to the underlying primitive in bounded slices and the
event loop gets control back between two slices. The slice size never
changes the output: contexts only see the concatenation of their updates.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Protocol, Sequence, TypeVar, Union

from crypto_codec.errors import InvalidChunkSize

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 64

T_co = TypeVar("T_co", covariant=True)
Piece = Union[bytes, str]


class IncrementalContext(Protocol[T_co]):
    def update(self, piece: Piece) -> None: ...

    def finalize(self) -> T_co: ...


def validate_chunk_size(chunk_size: object) -> int:
    """Return ``chunk_size`` if it is an integer of at least 1."""

    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        raise InvalidChunkSize(chunk_size)
    return chunk_size


async def consume(context: IncrementalContext[T_co], data: Sequence, step: int) -> T_co:
    """Feed ``data`` to ``context`` in ``step``-sized slices and finalize it.

    The loop body runs at least once so empty input still reaches the
    context. Updates are strictly sequential; the yield between slices only
    lets other tasks run.
    """

    total = len(data)
    cursor = 0
    steps = 0
    while True:
        context.update(data[cursor : cursor + step])
        cursor += step
        steps += 1
        if cursor >= total:
            break
        await asyncio.sleep(0)

    logger.debug("Streamed %d units in %d step(s) of %d", total, steps, step)
    return context.finalize()


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "IncrementalContext",
    "consume",
    "validate_chunk_size",
]
