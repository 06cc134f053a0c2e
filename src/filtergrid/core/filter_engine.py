import json
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from PySide6.QtCore import QObject, Signal as QtSignal

from filtergrid.core.filter_collection import FilterTermCollection
from filtergrid.models.filter_models import FilterTerm, UnknownColumnError

logger = logging.getLogger(__name__)

class FilterEngine(QObject):
    """
    Row filtering for a host grid.

    Owns an ordered collection of FilterTerm. A row is visible when every term
    is satisfied (AND); a term is satisfied when any of its texts is found in
    any of its columns (OR), case-insensitively.

    The host is any object exposing:
      - rows: ordered sequence of rows with `value(column)` and a writable `visible`
      - template_row_index: index of the insertion row to skip, or None
      - clear_selection(): drop the current row so it can be hidden

    Re-evaluation happens automatically when terms are added, removed or
    edited. Use begin_update()/end_update() to batch several changes.
    """
    # Emitted after every completed pass: visible rows, evaluated rows
    filtered = QtSignal(int, int)

    def __init__(self, host=None, terms: Optional[Iterable[FilterTerm]] = None, parent=None):
        super().__init__(parent)
        self._host = host
        self._lock = threading.Lock()
        self._updating = False
        self._dirty = False
        self.pass_count = 0
        self._terms: Optional[FilterTermCollection] = None
        self._attach(self._as_collection(terms))

    # --- State ---

    @property
    def updating(self) -> bool:
        """True between begin_update() and end_update()."""
        return self._updating

    @property
    def dirty(self) -> bool:
        """True if a change arrived while updating; cleared by the next pass."""
        return self._dirty

    @property
    def host(self):
        return self._host

    def set_host(self, host):
        """Attach a (new) host grid and filter it."""
        self._host = host
        self.filter()

    @property
    def terms(self) -> FilterTermCollection:
        return self._terms

    @terms.setter
    def terms(self, terms):
        # Release the old collection so its terms stop driving this engine
        self._detach()
        self._attach(self._as_collection(terms))
        self.filter()

    # --- Mutation surface ---

    def add_term(self, term: FilterTerm) -> bool:
        """Add a term. Returns False if an equal term was already present."""
        size = len(self._terms)
        self._terms.append(term)
        return len(self._terms) > size

    def remove_term(self, term: FilterTerm) -> bool:
        if term not in self._terms:
            logger.warning(f"Filter term not present, nothing removed: {term}")
            return False
        self._terms.remove(term)
        return True

    def clear_terms(self):
        """Remove all terms with a single evaluation pass."""
        with self.updates():
            self._terms.clear()

    def begin_update(self):
        """Suspend evaluation until end_update()."""
        self._updating = True

    def end_update(self):
        """Resume evaluation, filtering once if anything changed meanwhile."""
        self._updating = False
        if self._dirty:
            self.filter()

    @contextmanager
    def updates(self):
        """
        Batch changes inside a `with` block.
        Nested blocks (or a block inside an explicit begin_update()) leave the
        outer batch open.
        """
        outer = self._updating
        self.begin_update()
        try:
            yield self
        finally:
            if not outer:
                self.end_update()

    def dispose(self):
        """
        Unsubscribe from the collection and every term, then start over with an
        empty collection so terms added later are wired like any other.
        """
        self._detach()
        self._attach(FilterTermCollection())

    # --- Evaluation ---

    def filter(self):
        """
        Recompute the visibility of every row except the template row.
        While updating, only marks the engine dirty.

        Raises UnknownColumnError if a term names a column a row does not have.
        Rows processed before the failure keep their new visibility.
        """
        if self._updating:
            self._dirty = True
            return

        self._dirty = False
        host = self._host
        if host is None:
            return

        # A hidden row must not stay the current one
        host.clear_selection()
        template_index = host.template_row_index

        evaluated = 0
        visible_count = 0
        for index, row in enumerate(host.rows):
            if index == template_index:
                continue
            try:
                visible = self.matches(row)
            except UnknownColumnError as e:
                logger.error(f"Filtering stopped at row {index}: {e}")
                raise
            row.visible = visible
            evaluated += 1
            if visible:
                visible_count += 1

        self.pass_count += 1
        logger.debug(f"Filter pass {self.pass_count}: {visible_count}/{evaluated} rows visible, {len(self._terms)} term(s)")
        self.filtered.emit(visible_count, evaluated)

    def matches(self, row) -> bool:
        """True if the row satisfies every term. No terms: always True."""
        for term in self._terms:
            if not self.term_matches(term, row):
                return False
        return True

    @staticmethod
    def term_matches(term: FilterTerm, row) -> bool:
        """True if any search text is contained in any target column of the row."""
        texts = [t.upper() for t in term.search_texts()]
        for column in term.column_names():
            value = row.value(column)
            if value is None:
                continue
            haystack = str(value).upper()
            for text in texts:
                if text in haystack:
                    return True
        return False

    # --- Persistence ---

    def to_list(self) -> List[Dict[str, str]]:
        return [term.to_dict() for term in self._terms]

    def load_list(self, items: Iterable[Dict[str, Any]]):
        """Replace all terms with the given {'text', 'columns'} entries, filtering once."""
        with self.updates():
            self._terms.clear()
            for item in items:
                self._terms.append(FilterTerm.from_dict(item))

    def save_to_file(self, filepath: str):
        """Save the term set to a JSON file."""
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump({'filters': self.to_list()}, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save filters to {filepath}: {e}")
            raise
        logger.info(f"Saved {len(self._terms)} filter(s) to {filepath}")

    def load_from_file(self, filepath: str):
        """Load the term set from a JSON file written by save_to_file()."""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load filters from {filepath}: {e}")
            raise

        if isinstance(data, dict):
            data = data.get('filters', [])
        if not isinstance(data, list):
            raise ValueError(f"Unexpected filter file layout in {filepath}")

        self.load_list(data)
        logger.info(f"Loaded {len(self._terms)} filter(s) from {filepath}")

    # --- Collection wiring ---

    @staticmethod
    def _as_collection(terms) -> FilterTermCollection:
        if isinstance(terms, FilterTermCollection):
            return terms
        return FilterTermCollection(terms)

    def _attach(self, collection: FilterTermCollection):
        # Drop duplicates already present so the invariant holds from the start
        index = 0
        while index < len(collection):
            if collection.index(collection[index]) < index:
                dropped = collection._pop_silently(index)
                logger.warning(f"Dropped duplicate filter term: {dropped}")
            else:
                index += 1

        self._terms = collection
        collection.on_added(self._on_term_added)
        collection.on_removed(self._on_term_removed)
        for term in collection:
            term.subscribe(self._on_term_changed)

    def _detach(self):
        if self._terms is None:
            return
        self._terms.off_added(self._on_term_added)
        self._terms.off_removed(self._on_term_removed)
        for term in self._terms:
            term.unsubscribe(self._on_term_changed)

    def _on_term_added(self, index: int, term: FilterTerm):
        with self._lock:
            # The new term counts itself, so one equal sibling gives 2
            if self._terms.count(term) > 1:
                self._terms._pop_silently(index)
                logger.warning(f"Rejected duplicate filter term: {term}")
                return

        term.subscribe(self._on_term_changed)
        logger.info(f"Filter term added: {term}")
        self.filter()

    def _on_term_removed(self, index: int, term: FilterTerm):
        term.unsubscribe(self._on_term_changed)
        logger.info(f"Filter term removed: {term}")
        self.filter()

    def _on_term_changed(self):
        self.filter()
