from pkgcenter.infra import commands
from pkgcenter.infra.commands import CommandSet, find_executable


def test_find_executable_returns_resolved_path(monkeypatch) -> None:
    def fake_which(name: str) -> str | None:
        mapping = {"yay": "/usr/bin/yay"}
        return mapping.get(name)

    monkeypatch.setattr(commands.shutil, "which", fake_which)

    assert find_executable("yay") == "/usr/bin/yay"


def test_find_executable_uses_literal_name_when_not_found(monkeypatch) -> None:
    monkeypatch.setattr(commands.shutil, "which", lambda _: None)

    assert find_executable("yay") == "yay"


def test_search_argv_passes_terms_as_separate_arguments() -> None:
    argv = CommandSet().search("  web   browser ")

    assert argv == ["yay", "-Ss", "--", "web", "browser"]


def test_search_argv_does_not_interpret_shell_metacharacters() -> None:
    argv = CommandSet().search("foo; rm -rf ~")

    assert argv == ["yay", "-Ss", "--", "foo;", "rm", "-rf", "~"]


def test_search_argv_keeps_option_like_terms_after_separator() -> None:
    argv = CommandSet().search("--save --sudo /tmp/evil foo")

    assert argv == ["yay", "-Ss", "--", "--save", "--sudo", "/tmp/evil", "foo"]
    assert argv.index("--") < argv.index("--sudo")


def test_install_argv_skips_interactive_prompts() -> None:
    argv = CommandSet(search_tool="/usr/bin/yay").install("firefox")

    assert argv == [
        "/usr/bin/yay",
        "-S",
        "--noconfirm",
        "--answerclean",
        "None",
        "--answerdiff",
        "None",
        "--answeredit",
        "None",
        "firefox",
    ]


def test_remove_and_cleanup_argv() -> None:
    cmds = CommandSet()

    assert cmds.remove("firefox") == ["yay", "-Rns", "--noconfirm", "firefox"]
    assert cmds.clean_orphans() == ["yay", "-Yc", "--noconfirm"]


def test_privilege_and_local_query_argv_use_their_own_tools() -> None:
    cmds = CommandSet(package_db_tool="/usr/bin/pacman", sudo_tool="/usr/bin/sudo")

    assert cmds.validate_credentials() == ["/usr/bin/sudo", "-S", "-v"]
    assert cmds.query_installed("vim") == ["/usr/bin/pacman", "-Qi", "vim"]
