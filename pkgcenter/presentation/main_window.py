from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QSplitter,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from pkgcenter.application.package_controller import PackageController
from pkgcenter.core.package_types import OperationResult, PackageRecord, SearchSummary
from pkgcenter.presentation.table_models import SearchResultsTableModel

_READY_TEXT = "Ready. Enter a search term."


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, controller: PackageController) -> None:
        super().__init__()
        self._busy = False
        self.setWindowTitle("Package Center")
        self.resize(900, 600)

        self._build_ui()

        self.model = SearchResultsTableModel(self)
        self.tableResults.setModel(self.model)
        self._polish_results_table()

        selection_model = self.tableResults.selectionModel()
        selection_model.currentChanged.connect(self.on_current_changed)
        self.tableResults.doubleClicked.connect(lambda _idx: self.on_action_clicked())

        self.lineEditSearch.returnPressed.connect(self.on_search_clicked)
        self.pushButtonSearch.clicked.connect(self.on_search_clicked)
        self.pushButtonAction.clicked.connect(self.on_action_clicked)
        self.pushButtonCleanOrphans.clicked.connect(self.on_clean_orphans_clicked)

        # ---- Controller + wiring
        self.controller = controller
        self.controller.log.connect(self.plainTextEditLog.appendPlainText)
        self.controller.error.connect(self.plainTextEditLog.appendPlainText)
        self.controller.searched.connect(self.on_search_loaded)
        self.controller.summary_changed.connect(self.on_summary_changed)
        self.controller.busy_changed.connect(self.on_busy_changed)
        self.controller.job_started.connect(self.on_job_started)
        self.controller.job_finished.connect(self.on_job_finished)
        self.controller.operation_finished.connect(self.on_operation_finished)

        self._sync_action_button()

    def _build_ui(self) -> None:
        central = QWidget(self)
        root = QVBoxLayout(central)

        search_row = QHBoxLayout()
        self.lineEditSearch = QLineEdit(central)
        self.lineEditSearch.setPlaceholderText("Search packages (via -Ss)...")
        self.pushButtonSearch = QPushButton("Search", central)
        search_row.addWidget(self.lineEditSearch, 1)
        search_row.addWidget(self.pushButtonSearch)
        root.addLayout(search_row)

        self.tableResults = QTableView(central)
        self.plainTextEditLog = QPlainTextEdit(central)
        self.plainTextEditLog.setReadOnly(True)
        self.plainTextEditLog.setUndoRedoEnabled(False)
        self.plainTextEditLog.setMaximumBlockCount(4000)

        splitter = QSplitter(Qt.Orientation.Vertical, central)
        splitter.addWidget(self.tableResults)
        splitter.addWidget(self.plainTextEditLog)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        root.addWidget(splitter, 1)

        status_row = QHBoxLayout()
        self.labelStatus = QLabel(_READY_TEXT, central)
        self.pushButtonAction = QPushButton("Install", central)
        self.pushButtonCleanOrphans = QPushButton("Clean Orphans", central)
        status_row.addWidget(self.labelStatus, 1)
        status_row.addWidget(self.pushButtonAction)
        status_row.addWidget(self.pushButtonCleanOrphans)
        root.addLayout(status_row)

        self.setCentralWidget(central)

    def _polish_results_table(self) -> None:
        """Applies initial settings to the results table."""
        tv = self.tableResults

        tv.verticalHeader().setVisible(False)

        hh = tv.horizontalHeader()
        hh.setStretchLastSection(True)
        hh.setSectionResizeMode(0, QHeaderView.ResizeMode.Interactive)
        hh.setSectionResizeMode(1, QHeaderView.ResizeMode.Interactive)
        hh.setSectionResizeMode(2, QHeaderView.ResizeMode.Interactive)
        hh.setSectionResizeMode(3, QHeaderView.ResizeMode.Interactive)

        tv.setWordWrap(False)
        tv.setAlternatingRowColors(True)
        tv.setShowGrid(False)
        tv.setSortingEnabled(True)
        tv.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        tv.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)

        tv.setColumnWidth(0, 200)
        tv.setColumnWidth(1, 120)
        tv.setColumnWidth(2, 90)
        tv.setColumnWidth(3, 70)

    # ---- Search
    def on_search_clicked(self) -> None:
        query = self.lineEditSearch.text().strip()
        if not query:
            self.labelStatus.setText(_READY_TEXT)
        else:
            self.labelStatus.setText(f"Searching for {query}...")
        self.controller.search_packages(query)

    def on_search_loaded(self, results_obj: object) -> None:
        results = results_obj if isinstance(results_obj, list) else []
        rows = [r for r in results if isinstance(r, PackageRecord)]

        tv = self.tableResults
        sorting_was_enabled = tv.isSortingEnabled()
        tv.setSortingEnabled(False)
        try:
            self.model.set_records(rows)
        finally:
            tv.setSortingEnabled(sorting_was_enabled)

        if self.model.rowCount() > 0:
            tv.setCurrentIndex(self.model.index(0, 0))
        self._sync_action_button()

    def on_summary_changed(self, summary_obj: object) -> None:
        if not isinstance(summary_obj, SearchSummary):
            return
        if not self.controller.last_query:
            self.labelStatus.setText(_READY_TEXT)
        elif summary_obj.total == 0:
            self.labelStatus.setText("No results found.")
        else:
            self.labelStatus.setText(
                f"Results: {summary_obj.total}  | Installed: {summary_obj.installed}"
                " (already on system)"
            )

    def on_current_changed(self, current, previous) -> None:
        self._sync_action_button()

    def _selected_record(self) -> PackageRecord | None:
        current = self.tableResults.currentIndex()
        if not current.isValid():
            return None
        return self.model.record_at(current.row())

    def _sync_action_button(self) -> None:
        btn = self.pushButtonAction
        self.pushButtonCleanOrphans.setEnabled(not self._busy)
        record = self._selected_record()
        if self._busy or record is None:
            btn.setEnabled(False)
            return

        btn.setText("Remove" if record.installed else "Install")
        btn.setEnabled(True)

    # ---- Package operations
    def on_action_clicked(self) -> None:
        if self._busy:
            return
        record = self._selected_record()
        if record is None:
            self.controller.log.emit("[info] select a package first")
            return

        if record.installed:
            question = (
                f'Remove package "{record.name}"?\n\n'
                "This will also remove unused dependencies."
            )
            if self._confirm(question):
                self.labelStatus.setText(f"Removing {record.name}...")
                self.controller.remove_package(record.name)
        else:
            question = f'Install package "{record.name}"?'
            if self._confirm(question):
                self.labelStatus.setText(f"Installing {record.name}...")
                self.controller.install_package(record.name)

    def on_clean_orphans_clicked(self) -> None:
        if self._busy:
            return
        question = (
            "Clean up orphaned packages?\n\n"
            "This removes dependencies that are no longer needed."
        )
        if self._confirm(question):
            self.labelStatus.setText("Cleaning orphaned packages...")
            self.controller.clean_orphans()

    def _confirm(self, question: str) -> bool:
        answer = QMessageBox.question(
            self,
            "Confirm",
            question,
            QMessageBox.StandardButton.Ok | QMessageBox.StandardButton.Cancel,
        )
        return answer == QMessageBox.StandardButton.Ok

    def on_operation_finished(self, result_obj: object) -> None:
        if not isinstance(result_obj, OperationResult):
            return
        # A refresh triggered by install/remove overwrites this afterwards.
        outcome = "finished" if result_obj.ok else "failed"
        self.labelStatus.setText(f"{result_obj.label.capitalize()} {outcome}.")
        if result_obj.ok:
            QMessageBox.information(
                self,
                "Done",
                f"{result_obj.label.capitalize()} finished.",
            )
        else:
            QMessageBox.critical(
                self,
                "Failed",
                f"{result_obj.label.capitalize()} may have failed.\n"
                "Check the log or run the command manually.",
            )

    # ---- Busy/state
    def on_busy_changed(self, busy: bool) -> None:
        self._busy = busy
        self.pushButtonSearch.setEnabled(not busy)
        self.lineEditSearch.setEnabled(not busy)
        self._sync_action_button()

    def on_job_started(self, label: str) -> None:
        self.statusBar().showMessage(f"Running: {label}")

    def on_job_finished(self, label: str, ok: bool) -> None:
        if ok:
            self.statusBar().showMessage(f"Done: {label}", 2000)
        else:
            self.statusBar().showMessage(f"Failed: {label}", 4000)
