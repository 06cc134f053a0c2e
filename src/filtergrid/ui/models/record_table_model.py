from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

logger = logging.getLogger(__name__)

class RecordTableModel(QAbstractTableModel):
    """
    Table Model over a list of records (column name -> value mappings).
    Column names double as header labels, which is what filter terms refer to.
    Missing values (None) stay None in DisplayRole; filters never match them.
    """

    def __init__(self, columns: Sequence[str], records: Optional[List[Mapping[str, Any]]] = None, parent=None):
        super().__init__(parent)
        self._columns: List[str] = list(columns)
        self._records: List[Dict[str, Any]] = [dict(r) for r in (records or [])]

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    def set_records(self, records: List[Mapping[str, Any]]):
        """Resets the model with a new list of records."""
        self.beginResetModel()
        self._records = [dict(r) for r in records]
        logger.info(f"RecordTableModel: reset with {len(self._records)} records.")
        self.endResetModel()

    def add_records(self, records: List[Mapping[str, Any]]):
        """Append records, emitting rowsInserted for views."""
        if not records:
            return
        start_row = len(self._records)
        end_row = start_row + len(records) - 1
        self.beginInsertRows(QModelIndex(), start_row, end_row)
        self._records.extend(dict(r) for r in records)
        self.endInsertRows()

    def clear_records(self):
        self.beginResetModel()
        self._records = []
        self.endResetModel()

    def get_record(self, row: int) -> Optional[Dict[str, Any]]:
        if 0 <= row < len(self._records):
            return self._records[row]
        return None

    def column_index(self, name: str) -> int:
        """Index of a column by name, -1 if the model has no such column."""
        try:
            return self._columns.index(name)
        except ValueError:
            return -1

    def raw_value(self, row: int, column: int) -> Any:
        """The stored value for a cell."""
        return self._records[row].get(self._columns[column])

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._records)

    def columnCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._columns)

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:
        if not index.isValid():
            return Qt.NoItemFlags
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable | Qt.ItemIsEditable

    def setData(self, index: QModelIndex, value: Any, role: int = Qt.EditRole) -> bool:
        if not index.isValid() or role != Qt.EditRole:
            return False
        self._records[index.row()][self._columns[index.column()]] = value
        self.dataChanged.emit(index, index, [Qt.DisplayRole])
        return True

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid():
            return None

        value = self.raw_value(index.row(), index.column())
        if role == Qt.DisplayRole:
            return None if value is None else str(value)
        if role == Qt.EditRole:
            return value
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self._columns[section]
        return None
