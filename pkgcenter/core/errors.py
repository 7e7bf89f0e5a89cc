from typing import Sequence


class PackageCenterError(Exception):
    """Base class for pkgcenter errors."""


class SpawnFailedError(PackageCenterError):
    """Raised when a subprocess could not be started at all.

    Args:
        argv: Argument vector that failed to spawn.
        reason: Short description of the underlying OS error.
    """

    def __init__(self, argv: Sequence[str], reason: str = "") -> None:
        self.argv = list(argv)
        self.reason = reason
        program = self.argv[0] if self.argv else "<empty argv>"
        message = f"could not start {program}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
