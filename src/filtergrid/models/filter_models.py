from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from filtergrid.core.events import EventEmitter

# Separates column names and search texts; also the OR operator inside a term
DELIMITER = "|"

class UnknownColumnError(KeyError):
    """A filter references a column the row does not have."""

    def __init__(self, column: str):
        super().__init__(column)
        self.column = column

    def __str__(self):
        return f"Unknown filter column: {self.column!r}"

@dataclass
class FilterTerm:
    """
    One filter: search text(s) matched against target column(s).

    Both fields are '|'-delimited. Any text matching any column satisfies the term.
    Assigning either field fires 'changed', even when the value is unchanged.
    """
    text: str = ""
    columns: str = ""
    _events: EventEmitter = field(default_factory=EventEmitter, init=False, repr=False, compare=False)

    def __setattr__(self, name, value):
        super().__setattr__(name, value)
        # _events does not exist yet while the dataclass __init__ runs
        if name in ('text', 'columns') and hasattr(self, '_events'):
            self._events.emit('changed')

    def subscribe(self, callback: Callable[[], Any]):
        """Register a callback fired on every assignment to text or columns."""
        self._events.on('changed', callback)

    def unsubscribe(self, callback: Callable[[], Any]) -> bool:
        return self._events.off('changed', callback)

    def subscriber_count(self) -> int:
        return self._events.listener_count('changed')

    def column_names(self) -> List[str]:
        return (self.columns or "").split(DELIMITER)

    def search_texts(self) -> List[str]:
        return (self.text or "").split(DELIMITER)

    def to_dict(self) -> Dict[str, str]:
        return {
            'text': self.text,
            'columns': self.columns,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FilterTerm':
        return cls(
            text=str(data.get('text') or ""),
            columns=str(data.get('columns') or ""),
        )

class GridRow:
    """A host row: display values by column name plus a writable visibility flag."""

    def __init__(self, values: Mapping[str, Any], visible: bool = True):
        self._values: Dict[str, Any] = dict(values)
        self.visible = visible

    @property
    def column_names(self) -> List[str]:
        return list(self._values.keys())

    def value(self, column: str) -> Optional[Any]:
        try:
            return self._values[column]
        except KeyError:
            raise UnknownColumnError(column) from None

    def __repr__(self):
        return f"GridRow({self._values!r}, visible={self.visible})"
