from pkgcenter.application.installed_state import InstalledStateResolver
from pkgcenter.application.search_pipeline import SearchPipeline
from pkgcenter.core.errors import SpawnFailedError
from pkgcenter.core.package_types import PackageRecord
from pkgcenter.infra.commands import CommandSet
from pkgcenter.infra.process_runner import ProcessRunner

_YAY_OUTPUT = (
    "\x1b[1;35mcore\x1b[0m/\x1b[1mfoo\x1b[0m \x1b[1;32m1.0-1\x1b[0m "
    "\x1b[1;36m[installed]\x1b[0m\n"
    "    A sample package\n"
    "\x1b]8;;https://aur.archlinux.org/packages/bar\x07aur/bar\x1b]8;;\x07 2.0-1\n"
    "    Another package\n"
)


class _FakeRunner:
    """Runner double that counts invocations and serves canned answers."""

    def __init__(
        self,
        capture_output: str = "",
        installed: set[str] | None = None,
        spawn_fails: bool = False,
    ) -> None:
        self._capture_output = capture_output
        self._installed = installed or set()
        self._spawn_fails = spawn_fails
        self.capture_calls: list[list[str]] = []
        self.status_calls: list[list[str]] = []

    @property
    def call_count(self) -> int:
        return len(self.capture_calls) + len(self.status_calls)

    def run_capture(self, argv: list[str]) -> str:
        self.capture_calls.append(argv)
        if self._spawn_fails:
            raise SpawnFailedError(argv, "not found")
        return self._capture_output

    def run_status(self, argv: list[str]) -> bool:
        self.status_calls.append(argv)
        return argv[-1] in self._installed


def _pipeline(runner: _FakeRunner) -> SearchPipeline:
    commands = CommandSet()
    return SearchPipeline(runner, InstalledStateResolver(runner, commands), commands)


def test_search_with_empty_query_runs_no_subprocess() -> None:
    runner = _FakeRunner(capture_output=_YAY_OUTPUT)

    assert _pipeline(runner).search("") == []
    assert _pipeline(runner).search("   \t ") == []
    assert runner.call_count == 0


def test_search_strips_parses_and_resolves_in_order() -> None:
    runner = _FakeRunner(capture_output=_YAY_OUTPUT, installed={"bar"})

    results = _pipeline(runner).search("foo bar")

    assert runner.capture_calls == [["yay", "-Ss", "--", "foo", "bar"]]
    assert runner.status_calls == [
        ["pacman", "-Qi", "foo"],
        ["pacman", "-Qi", "bar"],
    ]
    assert results == [
        PackageRecord(
            repository="core",
            name="foo",
            version="1.0-1",
            description="A sample package",
            installed=False,
        ),
        PackageRecord(
            repository="aur",
            name="bar",
            version="2.0-1",
            description="Another package",
            installed=True,
        ),
    ]


def test_search_returns_empty_list_when_search_tool_cannot_start() -> None:
    runner = _FakeRunner(spawn_fails=True)

    assert _pipeline(runner).search("foo") == []
    assert runner.status_calls == []


def test_search_returns_new_list_each_time() -> None:
    runner = _FakeRunner(capture_output=_YAY_OUTPUT)
    pipeline = _pipeline(runner)

    first = pipeline.search("foo")
    second = pipeline.search("foo")

    assert first == second
    assert first is not second


def test_search_with_nul_byte_in_query_returns_empty_list() -> None:
    commands = CommandSet(search_tool="yay", package_db_tool="pacman")
    runner = ProcessRunner()
    pipeline = SearchPipeline(runner, InstalledStateResolver(runner, commands), commands)

    assert pipeline.search("foo\x00bar") == []
