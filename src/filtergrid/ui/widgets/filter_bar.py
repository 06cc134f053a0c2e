from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QLineEdit, QToolButton
from typing import Optional

from filtergrid.models.filter_models import FilterTerm

class FilterBar(QWidget):
    """
    Label + line edit editing the text of one FilterTerm.
    Every edit assigns term.text, which re-filters the owning engine.
    """
    def __init__(self, term: FilterTerm, label: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.term = term

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.lbl_columns = QLabel(label or f"{term.columns.replace('|', ', ')}:")
        layout.addWidget(self.lbl_columns)

        self.txt_filter = QLineEdit()
        self.txt_filter.setPlaceholderText("Filter... (use | for alternatives)")
        self.txt_filter.setText(term.text)
        self.txt_filter.textChanged.connect(self._on_text_changed)
        layout.addWidget(self.txt_filter)

        self.btn_clear = QToolButton()
        self.btn_clear.setText("✕")
        self.btn_clear.setToolTip("Clear filter")
        self.btn_clear.clicked.connect(self.txt_filter.clear)
        layout.addWidget(self.btn_clear)

    def _on_text_changed(self, text: str):
        self.term.text = text
