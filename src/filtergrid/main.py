import sys
import logging

logger = logging.getLogger(__name__)

SAMPLE_COLUMNS = ["Name", "City", "Country"]
SAMPLE_RECORDS = [
    {"Name": "Alice", "City": "Rome", "Country": "Italy"},
    {"Name": "Bob", "City": "Milan", "Country": "Italy"},
    {"Name": "Carla", "City": "Lyon", "Country": "France"},
    {"Name": "Dieter", "City": "Bonn", "Country": "Germany"},
]

def build_window(records=None, filters_file: str = ""):
    """Create the demo window: one FilterBar per column above a FilterableTableView."""
    from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QLabel
    from filtergrid.models.filter_models import FilterTerm
    from filtergrid.ui.models.record_table_model import RecordTableModel
    from filtergrid.ui.widgets.filterable_table import FilterableTableView
    from filtergrid.ui.widgets.filter_bar import FilterBar

    window = QMainWindow()
    window.setWindowTitle("Filter Grid")
    central = QWidget()
    layout = QVBoxLayout(central)

    table = FilterableTableView()
    table.setModel(RecordTableModel(SAMPLE_COLUMNS, records if records is not None else SAMPLE_RECORDS, parent=table))

    status = QLabel()
    table.engine.filtered.connect(lambda shown, total: status.setText(f"{shown} of {total} rows shown"))

    if filters_file:
        table.engine.load_from_file(filters_file)

    # Column bars start with an empty text, which matches every non-empty cell
    bars = []
    with table.engine.updates():
        for column in SAMPLE_COLUMNS:
            term = FilterTerm(text="", columns=column)
            if not table.engine.add_term(term):
                # Already loaded from the filters file; edit that one instead
                term = table.engine.terms[table.engine.terms.index(term)]
            bar = FilterBar(term)
            bars.append(bar)
            layout.addWidget(bar)

    layout.addWidget(table)
    layout.addWidget(status)
    window.setCentralWidget(central)
    window.resize(640, 420)
    window.table = table
    window.filter_bars = bars
    return window

def open_window(filters_file: str = ""):
    """Build the demo window, falling back to no saved filters if the file can't be applied."""
    from filtergrid.models.filter_models import UnknownColumnError

    try:
        return build_window(filters_file=filters_file)
    except (OSError, ValueError, UnknownColumnError) as e:
        logger.error(f"Could not load filters from '{filters_file}': {e}")
        return build_window()

def main():
    """
    Demo application entry point.
    """
    from PySide6.QtWidgets import QApplication
    from filtergrid.core.config import load_config

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Filter Grid")

    config = load_config()
    logging.basicConfig(level=config.logging_level)
    logger.info(f"Starting Filter Grid demo (log level {config.log_level})")

    window = open_window(config.filters_file)
    window.show()
    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
