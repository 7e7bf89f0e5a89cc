from typing import Callable, Final

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QPersistentModelIndex, Qt
from PySide6.QtGui import QFont

from pkgcenter.core.package_types import PackageRecord

NAME_COLUMN: Final[int] = 0
VERSION_COLUMN: Final[int] = 1
REPOSITORY_COLUMN: Final[int] = 2
INSTALLED_COLUMN: Final[int] = 3
DESCRIPTION_COLUMN: Final[int] = 4

_HEADERS: Final[tuple[str, ...]] = (
    "Name",
    "Version",
    "Repository",
    "Installed",
    "Description",
)

_TEXT: Final[dict[int, Callable[[PackageRecord], str]]] = {
    NAME_COLUMN: lambda r: r.name,
    VERSION_COLUMN: lambda r: r.version,
    REPOSITORY_COLUMN: lambda r: r.repository,
    DESCRIPTION_COLUMN: lambda r: r.description,
}


def _sort_key(column: int) -> Callable[[PackageRecord], tuple] | None:
    """Sort key for `column`; ties are broken by package name, then repository."""
    if column == INSTALLED_COLUMN:
        return lambda r: (r.installed, r.name.casefold(), r.repository)
    text = _TEXT.get(column)
    if text is None:
        return None
    return lambda r: (text(r).casefold(), r.name.casefold(), r.repository)


class SearchResultsTableModel(QAbstractTableModel):
    """Search results, one PackageRecord per row.

    The Installed column is a read-only check box, installed rows are shown in
    bold, and every cell of a row carries the package description as tooltip.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._records: list[PackageRecord] = []

    def rowCount(
        self,
        /,
        parent: QModelIndex | QPersistentModelIndex = QModelIndex(),
    ) -> int:
        return 0 if parent.isValid() else len(self._records)

    def columnCount(
        self,
        /,
        parent: QModelIndex | QPersistentModelIndex = QModelIndex(),
    ) -> int:
        return 0 if parent.isValid() else len(_HEADERS)

    def data(
        self,
        index: QModelIndex | QPersistentModelIndex,
        /,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> object | None:
        record = self.record_at(index.row()) if index.isValid() else None
        if record is None:
            return None

        column = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            text = _TEXT.get(column)
            return text(record) if text is not None else None
        if role == Qt.ItemDataRole.CheckStateRole and column == INSTALLED_COLUMN:
            return (
                Qt.CheckState.Checked if record.installed else Qt.CheckState.Unchecked
            )
        if role == Qt.ItemDataRole.ToolTipRole:
            return record.description or None
        if role == Qt.ItemDataRole.FontRole and record.installed:
            font = QFont()
            font.setBold(True)
            return font
        return None

    def flags(self, index: QModelIndex | QPersistentModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        # No ItemIsUserCheckable: installed state only changes through a refresh.
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ):
        if (
            role == Qt.ItemDataRole.DisplayRole
            and orientation == Qt.Orientation.Horizontal
            and 0 <= section < len(_HEADERS)
        ):
            return _HEADERS[section]
        return None

    def set_records(self, records: list[PackageRecord]) -> None:
        self.beginResetModel()
        self._records = list(records)
        self.endResetModel()

    def record_at(self, row: int) -> PackageRecord | None:
        if 0 <= row < len(self._records):
            return self._records[row]
        return None

    def sort(
        self, column: int, order: Qt.SortOrder = Qt.SortOrder.AscendingOrder
    ) -> None:
        key = _sort_key(column)
        if key is None or not self._records:
            return
        self.layoutAboutToBeChanged.emit()
        self._records.sort(key=key, reverse=order == Qt.SortOrder.DescendingOrder)
        self.layoutChanged.emit()
