from dataclasses import replace
from typing import Iterable

from logly import logger

from pkgcenter.core.errors import SpawnFailedError
from pkgcenter.core.package_types import PackageRecord
from pkgcenter.infra.commands import CommandSet
from pkgcenter.infra.process_runner import ProcessRunner


class InstalledStateResolver:
    """Answers "is this package installed?" from the local package database.

    The search tool's own `[installed]` annotation is not trusted; every record is
    re-checked with `pacman -Qi <name>`.
    """

    def __init__(self, runner: ProcessRunner, commands: CommandSet) -> None:
        self._runner = runner
        self._commands = commands

    def is_installed(self, name: str) -> bool:
        """Returns True iff the local query for `name` exits with 0.

        Any failure, including a missing database tool, counts as not installed.
        """
        try:
            return self._runner.run_status(self._commands.query_installed(name))
        except SpawnFailedError as e:
            logger.warning(f"Installed check for {name} failed: {e}")
            return False

    def resolve(self, records: Iterable[PackageRecord]) -> list[PackageRecord]:
        """Returns new records whose `installed` flag reflects the local database."""
        return [
            replace(record, installed=self.is_installed(record.name))
            for record in records
        ]
