import shutil
from dataclasses import dataclass


def find_executable(name: str) -> str:
    """Finds an executable on PATH.

    Args:
        name: Program name (e.g. `yay`).

    Returns:
        The resolved path, or `name` itself when it is not on PATH so the spawn
        failure surfaces at call time.
    """
    return shutil.which(name) or name


@dataclass(frozen=True, slots=True)
class CommandSet:
    """Builds argument vectors for every external command the app runs.

    Arguments are always passed as separate argv entries, never through a shell.

    Attributes:
        search_tool: yay-compatible helper used for search and package changes.
        package_db_tool: Tool that answers `-Qi` from the local database.
        sudo_tool: Tool used for credential pre-authentication.
    """

    search_tool: str = "yay"
    package_db_tool: str = "pacman"
    sudo_tool: str = "sudo"

    def search(self, query: str) -> list[str]:
        """`<search-tool> -Ss -- <terms...>`; whitespace separates search terms.

        `--` ends option parsing so a term such as `--sudo` stays a search term.
        """
        return [self.search_tool, "-Ss", "--", *query.split()]

    def install(self, package: str) -> list[str]:
        return [
            self.search_tool,
            "-S",
            "--noconfirm",
            "--answerclean",
            "None",
            "--answerdiff",
            "None",
            "--answeredit",
            "None",
            package,
        ]

    def remove(self, package: str) -> list[str]:
        return [self.search_tool, "-Rns", "--noconfirm", package]

    def clean_orphans(self) -> list[str]:
        return [self.search_tool, "-Yc", "--noconfirm"]

    def validate_credentials(self) -> list[str]:
        """`sudo -S -v`: reads the password from stdin and refreshes the timestamp."""
        return [self.sudo_tool, "-S", "-v"]

    def query_installed(self, name: str) -> list[str]:
        return [self.package_db_tool, "-Qi", name]
