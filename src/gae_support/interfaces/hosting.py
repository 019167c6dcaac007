"""Hosting context DTO and the hosting-environment detection port."""

import abc
import enum
from dataclasses import dataclass


class HostingKind(enum.Enum):
    """Where the process runs."""

    NOT_HOSTED = "not-hosted"
    STANDARD = "standard"
    FLEXIBLE = "flexible"


class InvalidHostingContextError(ValueError):
    """Raised when identifiers are partially set for a hosting context."""


@dataclass(frozen=True)
class HostingContext:
    """Immutable snapshot of the hosting environment taken at startup.

    Identifiers are either all ``None`` (not hosted) or all set (hosted).
    An empty string counts as set.
    """

    kind: HostingKind = HostingKind.NOT_HOSTED
    project_id: str | None = None
    service: str | None = None
    version: str | None = None

    def __post_init__(self) -> None:
        identifiers = (self.project_id, self.service, self.version)
        if self.kind is HostingKind.NOT_HOSTED:
            if any(value is not None for value in identifiers):
                raise InvalidHostingContextError(
                    "A context that is not hosted cannot carry identifiers."
                )
        elif any(value is None for value in identifiers):
            raise InvalidHostingContextError(
                f"A {self.kind.value} context needs project id, service and version."
            )

    @classmethod
    def not_hosted(cls) -> "HostingContext":
        """Return the context of a process running outside App Engine."""
        return cls()

    @property
    def is_hosted(self) -> bool:
        return self.kind is not HostingKind.NOT_HOSTED

    @property
    def is_standard(self) -> bool:
        return self.kind is HostingKind.STANDARD

    @property
    def is_flexible(self) -> bool:
        return self.kind is HostingKind.FLEXIBLE


class HostingEnvironment(abc.ABC):
    """Port for querying the hosting environment."""

    @abc.abstractmethod
    def detect(self) -> HostingContext:
        """Detect the hosting context of the current process.

        Absence of hosting signals is the normal "not hosted" case and must
        not raise.

        Returns:
            HostingContext: The detected context.
        """
