"""Log transport writing structured entries as JSON lines.

The flexible runtime's logging agent collects JSON objects written one per
line to the container's stderr, reading ``severity`` and ``message`` as the
entry's level and payload.
"""

import json
import sys
from collections.abc import Sequence
from typing import TextIO

from gae_support.interfaces.log_transport import LogEntry, LogTransport


class JsonLinesTransport(LogTransport):
    """Write each entry of a batch as a JSON line, flushing once per batch."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # resolved lazily so that redirected/captured stderr is honoured
        return self._stream if self._stream is not None else sys.stderr

    def write_batch(self, entries: Sequence[LogEntry]) -> None:
        stream = self.stream
        for entry in entries:
            stream.write(json.dumps(entry, default=str) + "\n")
        stream.flush()

    def close(self) -> None:
        self.stream.flush()
