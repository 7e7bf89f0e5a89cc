from dataclasses import dataclass
from enum import Enum
from typing import Iterable


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """Represents one `-Ss` search result entry.

    Attributes:
        repository: Source repository (e.g. "core", "extra", "aur").
        name: Package name.
        version: Version string as printed by the search tool.
        description: One-line summary (may be empty).
        installed: Installed flag. Provisional until resolved against the local
            package database.
    """

    repository: str
    name: str
    version: str = ""
    description: str = ""
    installed: bool = False


@dataclass(frozen=True, slots=True)
class SearchSummary:
    """Aggregate counts shown in the status line."""

    total: int = 0
    installed: int = 0

    @classmethod
    def from_records(cls, records: Iterable[PackageRecord]) -> "SearchSummary":
        total = 0
        installed = 0
        for record in records:
            total += 1
            if record.installed:
                installed += 1
        return cls(total=total, installed=installed)


class OperationStatus(Enum):
    SUCCESS = "success"
    NO_CREDENTIAL = "no-credential"
    INVALID_PACKAGE = "invalid-package"
    AUTH_FAILED = "auth-failed"
    COMMAND_FAILED = "command-failed"
    SPAWN_FAILED = "spawn-failed"


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a privileged package operation.

    Truthy iff the operation succeeded, so it can be used where a plain
    success flag is expected.
    """

    label: str
    status: OperationStatus

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.SUCCESS

    def __bool__(self) -> bool:
        return self.ok
