import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Mapping

from pkgcenter.infra.commands import CommandSet, find_executable
from pkgcenter.infra.process_runner import DEFAULT_CHUNK_SIZE

DEFAULT_SEARCH_TOOL: Final[str] = "yay"
DEFAULT_PACKAGE_DB_TOOL: Final[str] = "pacman"
DEFAULT_SUDO_TOOL: Final[str] = "sudo"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_LOG_DIR: Final[Path] = Path.home() / ".local" / "state" / "pkgcenter" / "logs"

ENV_PREFIX: Final[str] = "PKGCENTER_"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Runtime settings for one process. Nothing here is persisted.

    Attributes:
        search_tool: Tool used for search/install/remove/cleanup (yay-compatible).
        package_db_tool: Tool used to query the local package database.
        sudo_tool: Tool used for privilege pre-authentication.
        chunk_size: Maximum bytes read from a subprocess per chunk.
        log_level: logly level name.
        log_dir: Directory for the rotating log file.
    """

    search_tool: str = DEFAULT_SEARCH_TOOL
    package_db_tool: str = DEFAULT_PACKAGE_DB_TOOL
    sudo_tool: str = DEFAULT_SUDO_TOOL
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Path = field(default=DEFAULT_LOG_DIR)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Builds a config from `PKGCENTER_*` environment variables.

        Tools that are not set explicitly are looked up on PATH and fall back to
        their bare name.
        """
        env = os.environ if environ is None else environ

        def get(key: str) -> str:
            return env.get(ENV_PREFIX + key, "").strip()

        log_dir = get("LOG_DIR")
        return cls(
            search_tool=get("SEARCH_TOOL") or find_executable(DEFAULT_SEARCH_TOOL),
            package_db_tool=get("DB_TOOL") or find_executable(DEFAULT_PACKAGE_DB_TOOL),
            sudo_tool=get("SUDO_TOOL") or find_executable(DEFAULT_SUDO_TOOL),
            chunk_size=_parse_chunk_size(get("CHUNK_SIZE")),
            log_level=(get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            log_dir=Path(log_dir).expanduser() if log_dir else _default_log_dir(env),
        )

    def command_set(self) -> CommandSet:
        return CommandSet(
            search_tool=self.search_tool,
            package_db_tool=self.package_db_tool,
            sudo_tool=self.sudo_tool,
        )


def _parse_chunk_size(value: str) -> int:
    """Parses a positive chunk size, falling back to the default."""
    try:
        size = int(value)
    except ValueError:
        return DEFAULT_CHUNK_SIZE
    return size if size > 0 else DEFAULT_CHUNK_SIZE


def _default_log_dir(env: Mapping[str, str]) -> Path:
    """`$XDG_STATE_HOME/pkgcenter/logs`, or `DEFAULT_LOG_DIR` when it is unset."""
    state_home = env.get("XDG_STATE_HOME", "").strip()
    if not state_home:
        return DEFAULT_LOG_DIR
    return Path(state_home).expanduser() / "pkgcenter" / "logs"
