from logly import logger

from pkgcenter.application.installed_state import InstalledStateResolver
from pkgcenter.core.ansi import strip_control_sequences
from pkgcenter.core.errors import SpawnFailedError
from pkgcenter.core.package_types import PackageRecord
from pkgcenter.core.search_parser import parse_search_output
from pkgcenter.infra.commands import CommandSet
from pkgcenter.infra.process_runner import ProcessRunner


class SearchPipeline:
    """Runs a package search end to end.

    Stages run strictly in order: capture the search tool output, strip terminal
    control sequences, parse the listing, then resolve installed state per record.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        resolver: InstalledStateResolver,
        commands: CommandSet,
    ) -> None:
        self._runner = runner
        self._resolver = resolver
        self._commands = commands

    def search(self, query: str) -> list[PackageRecord]:
        """Searches packages matching `query`.

        Args:
            query: Free-text search terms.

        Returns:
            A new list of records in the tool's listing order. Empty for a blank query
            or when the search tool cannot be started.
        """
        if not query.strip():
            return []

        try:
            raw = self._runner.run_capture(self._commands.search(query))
        except SpawnFailedError as e:
            logger.error(f"Search failed: {e}")
            return []

        records = parse_search_output(strip_control_sequences(raw))
        resolved = self._resolver.resolve(records)
        logger.info(f"Search '{query.strip()}' returned {len(resolved)} packages")
        return resolved
