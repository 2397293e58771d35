from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable


# InputSource port defines how program input text enters the system.
@runtime_checkable
class InputSource(Protocol):
    async def read_all(self) -> str:
        """Return the whole input stream once end-of-stream is reached."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("InputSource is a port; use a concrete adapter.")

    def iter_lines(self) -> AsyncIterator[str]:
        """Yield input lines without terminators as they arrive."""
        raise NotImplementedError("InputSource is a port; use a concrete adapter.")
