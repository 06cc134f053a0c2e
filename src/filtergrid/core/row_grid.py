from typing import Any, Iterable, List, Mapping, Optional

from filtergrid.models.filter_models import GridRow

class RowGrid:
    """
    In-memory host grid for FilterEngine.
    Holds GridRow objects, an optional template (insertion) row and the current row.
    """
    def __init__(self, rows: Iterable[Any] = (), template_row_index: Optional[int] = None):
        self.rows: List[GridRow] = [r if isinstance(r, GridRow) else GridRow(r) for r in rows]
        self.template_row_index = template_row_index
        self.current_row: Optional[int] = None

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], with_template_row: bool = False) -> 'RowGrid':
        """Build a grid from mappings; optionally append an empty template row at the end."""
        rows = [GridRow(r) for r in records]
        template_index = None
        if with_template_row:
            columns = rows[0].column_names if rows else []
            rows.append(GridRow({c: None for c in columns}))
            template_index = len(rows) - 1
        return cls(rows, template_row_index=template_index)

    def clear_selection(self):
        self.current_row = None

    def visible_rows(self) -> List[GridRow]:
        return [r for i, r in enumerate(self.rows) if i != self.template_row_index and r.visible]

    def visibility(self) -> List[bool]:
        return [r.visible for r in self.rows]
