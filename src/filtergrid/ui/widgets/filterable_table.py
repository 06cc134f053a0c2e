from PySide6.QtWidgets import QTableView, QHeaderView, QAbstractItemView
from PySide6.QtCore import Qt, QModelIndex
from typing import Dict, List, Optional
import logging

from filtergrid.core.filter_engine import FilterEngine
from filtergrid.models.filter_models import FilterTerm, UnknownColumnError

logger = logging.getLogger(__name__)

class _TableRow:
    """Presents one model row of a FilterableTableView as a filterable row."""

    def __init__(self, view: 'FilterableTableView', row: int, sections: Dict[str, int]):
        self._view = view
        self._row = row
        self._sections = sections

    def value(self, column: str):
        section = self._sections.get(column)
        if section is None:
            raise UnknownColumnError(column)
        model = self._view.model()
        return model.data(model.index(self._row, section), Qt.DisplayRole)

    @property
    def visible(self) -> bool:
        return not self._view.isRowHidden(self._row)

    @visible.setter
    def visible(self, value: bool):
        self._view.setRowHidden(self._row, not value)

class FilterableTableView(QTableView):
    """
    QTableView with row filtering driven by a FilterEngine.

    Filter terms name columns by their horizontal header label.
    Rows are hidden in place; the model is never modified.
    """

    def __init__(self, parent=None, template_row_index: Optional[int] = None):
        super().__init__(parent)
        self.template_row_index = template_row_index
        self.setAlternatingRowColors(True)
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        header = self.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.Interactive)
        header.setStretchLastSection(True)

        self._engine = FilterEngine(host=self, parent=self)

    @property
    def engine(self) -> FilterEngine:
        return self._engine

    @property
    def filter_terms(self):
        return self._engine.terms

    def add_filter(self, text: str, columns: str) -> FilterTerm:
        term = FilterTerm(text=text, columns=columns)
        self._engine.add_term(term)
        return term

    def begin_filter_update(self):
        self._engine.begin_update()

    def end_filter_update(self):
        self._engine.end_update()

    def filter(self):
        self._engine.filter()

    # --- Host protocol for FilterEngine ---

    @property
    def rows(self) -> List[_TableRow]:
        model = self.model()
        if model is None:
            return []
        sections = {}
        for section in range(model.columnCount()):
            name = model.headerData(section, Qt.Horizontal, Qt.DisplayRole)
            if name is not None:
                sections[str(name)] = section
        return [_TableRow(self, row, sections) for row in range(model.rowCount())]

    def clear_selection(self):
        self.clearSelection()
        self.setCurrentIndex(QModelIndex())

    def visible_row_numbers(self) -> List[int]:
        model = self.model()
        if model is None:
            return []
        return [r for r in range(model.rowCount()) if not self.isRowHidden(r)]

    # --- Model wiring ---

    def setModel(self, model):
        old = self.model()
        if old is not None:
            old.modelReset.disconnect(self._on_model_rows_changed)
            old.rowsInserted.disconnect(self._on_model_rows_changed)
            old.dataChanged.disconnect(self._on_model_rows_changed)
        super().setModel(model)
        if model is not None:
            model.modelReset.connect(self._on_model_rows_changed)
            model.rowsInserted.connect(self._on_model_rows_changed)
            model.dataChanged.connect(self._on_model_rows_changed)
        self._engine.filter()

    def _on_model_rows_changed(self, *args):
        # New rows show unhidden and edited cells may no longer match; bring them in line with the filters
        try:
            self._engine.filter()
        except UnknownColumnError:
            logger.exception("Filter references a column the table does not have")
