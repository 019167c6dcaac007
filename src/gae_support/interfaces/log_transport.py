"""Remote log transport port."""

import abc
from collections.abc import Mapping, Sequence
from typing import Any

LogEntry = Mapping[str, Any]


class LogTransport(abc.ABC):
    """Ships batches of structured log entries to a remote sink."""

    @abc.abstractmethod
    def write_batch(self, entries: Sequence[LogEntry]) -> None:
        """Send a batch of entries.

        Args:
            entries: Structured entries in emission order. Never empty.
        """

    def close(self) -> None:
        """Release transport resources. The default does nothing."""
