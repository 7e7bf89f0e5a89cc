from pathlib import Path

import pytest

from pkgcenter import config
from pkgcenter.config import DEFAULT_CHUNK_SIZE, DEFAULT_LOG_DIR, AppConfig
from pkgcenter.infra import commands
from pkgcenter.infra.commands import CommandSet


def test_from_env_discovers_tools_on_path(monkeypatch) -> None:
    monkeypatch.setattr(commands.shutil, "which", lambda name: f"/usr/bin/{name}")

    cfg = AppConfig.from_env({})

    assert cfg.search_tool == "/usr/bin/yay"
    assert cfg.package_db_tool == "/usr/bin/pacman"
    assert cfg.sudo_tool == "/usr/bin/sudo"
    assert cfg.chunk_size == DEFAULT_CHUNK_SIZE
    assert cfg.log_level == "INFO"
    assert cfg.log_dir == DEFAULT_LOG_DIR


def test_from_env_falls_back_to_bare_names(monkeypatch) -> None:
    monkeypatch.setattr(commands.shutil, "which", lambda _: None)

    cfg = AppConfig.from_env({})

    assert (cfg.search_tool, cfg.package_db_tool, cfg.sudo_tool) == (
        "yay",
        "pacman",
        "sudo",
    )


def test_from_env_reads_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(commands.shutil, "which", lambda _: None)
    environ = {
        "PKGCENTER_SEARCH_TOOL": "paru",
        "PKGCENTER_DB_TOOL": "/opt/bin/pacman",
        "PKGCENTER_SUDO_TOOL": "doas",
        "PKGCENTER_CHUNK_SIZE": "512",
        "PKGCENTER_LOG_LEVEL": "debug",
        "PKGCENTER_LOG_DIR": str(tmp_path),
    }

    cfg = AppConfig.from_env(environ)

    assert cfg == AppConfig(
        search_tool="paru",
        package_db_tool="/opt/bin/pacman",
        sudo_tool="doas",
        chunk_size=512,
        log_level="DEBUG",
        log_dir=tmp_path,
    )


def test_log_dir_defaults_to_user_state_directory(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(commands.shutil, "which", lambda _: None)

    cfg = AppConfig.from_env({"XDG_STATE_HOME": str(tmp_path)})

    assert cfg.log_dir == tmp_path / "pkgcenter" / "logs"
    assert DEFAULT_LOG_DIR.is_relative_to(Path.home())
    assert not DEFAULT_LOG_DIR.is_relative_to(Path(config.__file__).parent)


@pytest.mark.parametrize("value", ["", "zero", "0", "-5"])
def test_invalid_chunk_size_uses_default(value: str) -> None:
    assert config._parse_chunk_size(value) == DEFAULT_CHUNK_SIZE


def test_command_set_uses_configured_tools() -> None:
    cfg = AppConfig(search_tool="paru", package_db_tool="pacman", sudo_tool="doas")

    assert cfg.command_set() == CommandSet(
        search_tool="paru", package_db_tool="pacman", sudo_tool="doas"
    )
