from typing import Callable, TypeVar

from PySide6.QtCore import QObject, Signal

from pkgcenter.application.package_operations import PackageOperations
from pkgcenter.application.privilege_session import PrivilegeSession
from pkgcenter.application.search_pipeline import SearchPipeline
from pkgcenter.core.package_types import (
    OperationResult,
    OperationStatus,
    SearchSummary,
)

T = TypeVar("T")

_FAILURE_MESSAGES = {
    OperationStatus.NO_CREDENTIAL: "no sudo password cached",
    OperationStatus.INVALID_PACKAGE: "invalid package name",
    OperationStatus.AUTH_FAILED: "sudo authentication failed",
    OperationStatus.COMMAND_FAILED: "command exited with an error",
    OperationStatus.SPAWN_FAILED: "command could not be started",
}


class PackageController(QObject):
    """Runs searches and package operations and exposes results via Qt signals.

    Jobs run synchronously on the GUI thread; the process runner keeps the window
    responsive by dispatching pending events between output chunks. Only one job
    runs at a time, and requests made while busy are rejected, not queued.
    """

    log = Signal(str)
    error = Signal(str)
    searched = Signal(object)  # list[PackageRecord]
    summary_changed = Signal(object)  # SearchSummary
    busy_changed = Signal(bool)
    job_started = Signal(str)
    job_finished = Signal(str, bool)  # label, ok
    operation_finished = Signal(object)  # OperationResult

    def __init__(
        self,
        pipeline: SearchPipeline,
        operations: PackageOperations,
        session: PrivilegeSession,
        parent: QObject | None = None,
    ):
        """Initializes the controller.

        Args:
            pipeline: Search pipeline used by `search_packages`.
            operations: Privileged install/remove/cleanup operations.
            session: Credential holder passed to every privileged operation.
            parent: Optional Qt parent object.
        """
        super().__init__(parent)
        self._pipeline = pipeline
        self._operations = operations
        self._session = session
        self._busy = False
        self._last_query = ""

    def is_busy(self) -> bool:
        return self._busy

    @property
    def last_query(self) -> str:
        return self._last_query

    def search_packages(self, query: str) -> None:
        """Searches packages and emits `searched` and `summary_changed`."""
        q = query.strip()
        if not q:
            self._last_query = ""
            self.searched.emit([])
            self.summary_changed.emit(SearchSummary())
            return

        records = self._run_job(f"search {q}", lambda: self._pipeline.search(q))
        if records is None:
            return

        self._last_query = q
        self.log.emit(f"[loaded] {len(records)} packages")
        self.searched.emit(records)
        self.summary_changed.emit(SearchSummary.from_records(records))

    def install_package(self, name: str) -> None:
        """Installs `name`, then refreshes the current search whatever the outcome."""
        self._run_operation(
            f"install {name}",
            lambda: self._operations.install(name, self._session),
            refresh_after=True,
        )

    def remove_package(self, name: str) -> None:
        """Removes `name` and its unused dependencies, then refreshes the search."""
        self._run_operation(
            f"remove {name}",
            lambda: self._operations.remove(name, self._session),
            refresh_after=True,
        )

    def clean_orphans(self) -> None:
        """Removes orphaned dependencies."""
        self._run_operation(
            "clean orphans",
            lambda: self._operations.clean_orphans(self._session),
            refresh_after=False,
        )

    def _run_operation(
        self,
        label: str,
        job: Callable[[], OperationResult],
        refresh_after: bool,
    ) -> None:
        result = self._run_job(label, job, ok=lambda r: r.ok)
        if result is None:
            return

        if not result.ok:
            reason = _FAILURE_MESSAGES.get(result.status, result.status.value)
            self.error.emit(f"[error] {label} failed ({reason})")
        self.operation_finished.emit(result)

        if refresh_after and self._last_query:
            self.search_packages(self._last_query)

    def _run_job(
        self,
        label: str,
        job: Callable[[], T],
        ok: Callable[[T], bool] | None = None,
    ) -> T | None:
        """Runs `job` with the busy state set.

        Returns:
            The job result, or None if another job is already running.
        """
        if self._busy:
            self.log.emit("[info] already running")
            return None

        self._busy = True
        self.log.emit(f"$ {label}")
        self.log.emit("[running] ...")
        self.job_started.emit(label)
        self.busy_changed.emit(True)

        succeeded = False
        try:
            result = job()
            succeeded = ok(result) if ok is not None else True
        finally:
            self._busy = False
            self.busy_changed.emit(False)
            self.job_finished.emit(label, succeeded)
        return result
