"""The one-way side effect performed once the gate opens."""
from __future__ import annotations

import logging

from quorum_gate.errors import ContentTooLarge, InvalidContent

_logger = logging.getLogger(__name__)

INITIAL_CONTENT = "Before upgrading"
UPGRADED_CONTENT = "Successfully implemented upgrading file"


def _encode(content: str | bytes) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    data = bytes(content)
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidContent(f"Content is not valid UTF-8: {exc.reason}") from exc
    return data


class ContentBuffer:
    """Fixed-capacity byte buffer, zero padded.

    Content is validated as UTF-8 and measured before the first byte is written.
    """

    def __init__(self, capacity: int = 64, initial: str | bytes = INITIAL_CONTENT) -> None:
        self.capacity = capacity
        self._data = bytearray(capacity)
        self._length = 0
        self.write(initial)

    def write(self, content: str | bytes) -> None:
        data = _encode(content)
        if len(data) > self.capacity:
            raise ContentTooLarge(
                f"{len(data)} bytes do not fit into a {self.capacity}-byte buffer"
            )
        self._data[: len(data)] = data
        self._data[len(data) :] = bytes(self.capacity - len(data))
        self._length = len(data)

    def raw(self) -> bytes:
        return bytes(self._data)

    def content(self) -> bytes:
        return bytes(self._data[: self._length])

    def read(self) -> str:
        return self.content().decode("utf-8")


class UpgradeExecutor:
    """Overwrite the buffer with the upgrade payload."""

    def __init__(self, buffer: ContentBuffer | None = None, payload: str | bytes = UPGRADED_CONTENT) -> None:
        self.buffer = buffer if buffer is not None else ContentBuffer()
        self.payload = payload

    def execute(self, content: str | bytes | None = None) -> str:
        data = _encode(self.payload if content is None else content)
        self.buffer.write(data)
        _logger.info("upgrade applied (%d bytes)", len(data))
        return self.buffer.read()


__all__ = ["ContentBuffer", "INITIAL_CONTENT", "UPGRADED_CONTENT", "UpgradeExecutor"]
