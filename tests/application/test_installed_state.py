from pkgcenter.application.installed_state import InstalledStateResolver
from pkgcenter.core.errors import SpawnFailedError
from pkgcenter.core.package_types import PackageRecord
from pkgcenter.infra.commands import CommandSet


class _StatusRunner:
    def __init__(self, answers: dict[str, bool], spawn_fails: bool = False) -> None:
        self._answers = answers
        self._spawn_fails = spawn_fails
        self.calls: list[list[str]] = []

    def run_status(self, argv: list[str]) -> bool:
        self.calls.append(argv)
        if self._spawn_fails:
            raise SpawnFailedError(argv, "not found")
        return self._answers.get(argv[-1], False)


def test_is_installed_queries_local_database_by_exact_name() -> None:
    runner = _StatusRunner({"vim": True})
    resolver = InstalledStateResolver(runner, CommandSet(package_db_tool="pacman"))

    assert resolver.is_installed("vim") is True
    assert resolver.is_installed("vi") is False
    assert runner.calls == [["pacman", "-Qi", "vim"], ["pacman", "-Qi", "vi"]]


def test_is_installed_is_false_when_database_tool_cannot_start() -> None:
    resolver = InstalledStateResolver(_StatusRunner({}, spawn_fails=True), CommandSet())

    assert resolver.is_installed("vim") is False


def test_resolve_overrides_provisional_flags() -> None:
    records = [
        PackageRecord(repository="extra", name="claimed", installed=True),
        PackageRecord(repository="extra", name="unclaimed", installed=False),
    ]
    runner = _StatusRunner({"unclaimed": True})

    resolved = InstalledStateResolver(runner, CommandSet()).resolve(records)

    assert [(r.name, r.installed) for r in resolved] == [
        ("claimed", False),
        ("unclaimed", True),
    ]
    # Inputs are left untouched.
    assert records[0].installed is True
