from typing import Callable, Iterable, Iterator, List, Optional

from filtergrid.core.events import EventEmitter
from filtergrid.models.filter_models import FilterTerm

class FilterTermCollection:
    """
    Ordered, observable list of FilterTerm.

    Emits 'added' (index, term) after an insertion and 'removed' (index, term)
    after a removal. Membership tests and counts use value equality.
    """
    def __init__(self, terms: Optional[Iterable[FilterTerm]] = None):
        self._items: List[FilterTerm] = list(terms or [])
        self._events = EventEmitter()

    # --- Observers ---

    def on_added(self, callback: Callable[[int, FilterTerm], None]):
        self._events.on('added', callback)

    def on_removed(self, callback: Callable[[int, FilterTerm], None]):
        self._events.on('removed', callback)

    def off_added(self, callback):
        self._events.off('added', callback)

    def off_removed(self, callback):
        self._events.off('removed', callback)

    # --- Mutation ---

    def append(self, term: FilterTerm):
        self.insert(len(self._items), term)

    def insert(self, index: int, term: FilterTerm):
        # Normalise so listeners always get the real position
        if index < 0:
            index = max(0, len(self._items) + index)
        index = min(index, len(self._items))
        self._items.insert(index, term)
        self._events.emit('added', index, term)

    def remove(self, term: FilterTerm):
        """Remove the first term equal to `term`. Raises ValueError if absent."""
        self.pop(self.index(term))

    def pop(self, index: int = -1) -> FilterTerm:
        if index < 0:
            index += len(self._items)
        term = self._items.pop(index)
        self._events.emit('removed', index, term)
        return term

    def clear(self):
        """Remove every term, notifying once per term from last to first."""
        while self._items:
            self.pop()

    def _pop_silently(self, index: int) -> FilterTerm:
        """Remove without notifying observers."""
        return self._items.pop(index)

    # --- Queries ---

    def count(self, term: FilterTerm) -> int:
        return sum(1 for item in self._items if item == term)

    def index(self, term: FilterTerm) -> int:
        return self._items.index(term)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[FilterTerm]:
        return iter(self._items)

    def __getitem__(self, index: int) -> FilterTerm:
        return self._items[index]

    def __contains__(self, term) -> bool:
        return term in self._items

    def __repr__(self):
        return f"FilterTermCollection({self._items!r})"
