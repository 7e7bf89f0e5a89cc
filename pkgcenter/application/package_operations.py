from typing import Callable, Sequence

from logly import logger

from pkgcenter.application.privilege_session import PrivilegeSession
from pkgcenter.core.errors import SpawnFailedError
from pkgcenter.core.package_types import OperationResult, OperationStatus
from pkgcenter.infra.commands import CommandSet
from pkgcenter.infra.process_runner import ProcessRunner


class PackageOperations:
    """Installs, removes and cleans packages through the search tool.

    Each operation first refreshes the sudo timestamp with the session credential
    (`sudo -S -v`), then runs the tool as the normal user so it can reuse the cached
    sudo credentials internally.
    """

    def __init__(self, runner: ProcessRunner, commands: CommandSet) -> None:
        self._runner = runner
        self._commands = commands

    def authenticate(self, session: PrivilegeSession) -> OperationResult:
        """Checks the session credential with `sudo -S -v`."""
        label = "authenticate"
        if not session.has_credential:
            return OperationResult(label, OperationStatus.NO_CREDENTIAL)
        try:
            ok = self._runner.run_with_stdin(
                session.credential, self._commands.validate_credentials()
            )
        except SpawnFailedError as e:
            logger.error(f"Authentication could not run: {e}")
            return OperationResult(label, OperationStatus.SPAWN_FAILED)

        if not ok:
            logger.warning("sudo pre-authentication failed")
            return OperationResult(label, OperationStatus.AUTH_FAILED)
        return OperationResult(label, OperationStatus.SUCCESS)

    def install(self, name: str, session: PrivilegeSession) -> OperationResult:
        return self._run_for_package(
            f"install {name}", name, self._commands.install, session
        )

    def remove(self, name: str, session: PrivilegeSession) -> OperationResult:
        return self._run_for_package(
            f"remove {name}", name, self._commands.remove, session
        )

    def clean_orphans(self, session: PrivilegeSession) -> OperationResult:
        return self._run_privileged(
            "clean orphans", self._commands.clean_orphans(), session
        )

    def _run_for_package(
        self,
        label: str,
        name: str,
        build_argv: Callable[[str], list[str]],
        session: PrivilegeSession,
    ) -> OperationResult:
        package = name.strip()
        if not package or package.startswith("-"):
            logger.warning(f"Refusing {label}: invalid package name")
            return OperationResult(label, OperationStatus.INVALID_PACKAGE)
        return self._run_privileged(label, build_argv(package), session)

    def _run_privileged(
        self, label: str, argv: Sequence[str], session: PrivilegeSession
    ) -> OperationResult:
        auth = self.authenticate(session)
        if not auth.ok:
            return OperationResult(label, auth.status)

        try:
            ok = self._runner.run_status(argv)
        except SpawnFailedError as e:
            logger.error(f"{label} could not run: {e}")
            return OperationResult(label, OperationStatus.SPAWN_FAILED)

        if not ok:
            logger.warning(f"{label} failed")
            return OperationResult(label, OperationStatus.COMMAND_FAILED)

        logger.info(f"{label} finished")
        return OperationResult(label, OperationStatus.SUCCESS)
