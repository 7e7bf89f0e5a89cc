class PrivilegeSession:
    """Holds the sudo password for the lifetime of the process.

    Created from the startup prompt and cleared on exit. The value is kept in memory
    only and never appears in `repr()` or logs.
    """

    def __init__(self, credential: str = "") -> None:
        self._credential = credential

    @property
    def has_credential(self) -> bool:
        return bool(self._credential)

    @property
    def credential(self) -> str:
        return self._credential

    def clear(self) -> None:
        self._credential = ""

    def __enter__(self) -> "PrivilegeSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    def __repr__(self) -> str:
        state = "set" if self.has_credential else "empty"
        return f"PrivilegeSession(credential=<{state}>)"
