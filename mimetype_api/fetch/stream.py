from __future__ import annotations

from collections.abc import AsyncIterator

from mimetype_api.fetch.errors import PayloadTooLargeError


class ByteBudget:
    """Running byte count that refuses to grow past ``max_bytes``."""

    def __init__(self, max_bytes: int) -> None:
        if max_bytes < 0:
            raise ValueError("max_bytes must not be negative")
        self.max_bytes = max_bytes
        self.used = 0

    def charge(self, size: int) -> None:
        self.used += size
        if self.used > self.max_bytes:
            raise PayloadTooLargeError(self.used, self.max_bytes, declared=False)

    def check_declared(self, content_length: str | None) -> None:
        if not content_length:
            return
        value = content_length.strip()
        if not (value.isascii() and value.isdigit()):
            return
        declared = int(value)
        if declared > self.max_bytes:
            raise PayloadTooLargeError(declared, self.max_bytes, declared=True)


async def read_bounded(chunks: AsyncIterator[bytes], max_bytes: int) -> bytes:
    """Collect ``chunks`` into one buffer, stopping as soon as the cap is passed.

    The iterator is not drained past the chunk that crosses ``max_bytes``;
    closing the underlying response is left to the caller's context manager.
    """
    budget = ByteBudget(max_bytes)
    buffer = bytearray()
    async for chunk in chunks:
        if not chunk:
            continue
        budget.charge(len(chunk))
        buffer.extend(chunk)
    return bytes(buffer)
