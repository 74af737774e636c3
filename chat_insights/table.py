"""
Generic searchable, sortable, paginated table over an arbitrary list of rows.

Rows may be mappings or plain objects (dataclasses included). The table keeps
query, sort and page state and derives the visible rows from it.
"""

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class Column:
    """
    Column descriptor.

    ``render`` receives the field value and the whole row and returns what is
    displayed; when present, its output (as a string) is also the sort value.
    """
    key: str
    header: str
    render: Optional[Callable[[Any, Any], Any]] = None
    sortable: bool = False
    align: str = "left"
    width: Optional[str] = None


def get_field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def row_keys(row: Any) -> List[str]:
    if isinstance(row, Mapping):
        return list(row.keys())
    if dataclasses.is_dataclass(row):
        return [f.name for f in dataclasses.fields(row)]
    return [key for key in vars(row) if not key.startswith("_")]


def _sort_key(value: Any):
    # Numbers sort before strings; bools sort as strings
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, "" if value is None else str(value).lower())


class DataTable:
    """
    Search, sort and pagination state for one table.

    Args:
        columns: Column descriptors
        data: Rows to display
        page_size: Rows per page
        searchable: Whether ``set_query`` has any effect
        search_keys: Fields searched; all fields of each row when None
    """

    def __init__(self, columns: Sequence[Column], data: Optional[Sequence[Any]] = None,
                 page_size: int = 5, searchable: bool = True,
                 search_keys: Optional[Sequence[str]] = None):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.columns = list(columns)
        self.data = list(data or [])
        self.page_size = page_size
        self.searchable = searchable
        self.search_keys = list(search_keys) if search_keys else None

        self.query = ""
        self.sort_key: Optional[str] = None
        self.sort_direction = SORT_ASC
        self.current_page = 1

    def column(self, key: str) -> Optional[Column]:
        for column in self.columns:
            if column.key == key:
                return column
        return None

    def set_data(self, data: Optional[Sequence[Any]]):
        self.data = list(data or [])
        self.current_page = self._clamp(self.current_page)

    def set_query(self, query: Optional[str]):
        self.query = query or ""
        self.current_page = 1

    def toggle_sort(self, key: str) -> bool:
        """
        Sort by ``key``; the same key flips the direction, a new key starts
        ascending. Returns False (and changes nothing) for unsortable columns.
        """
        column = self.column(key)
        if column is None or not column.sortable:
            return False

        if self.sort_key == key:
            self.sort_direction = SORT_DESC if self.sort_direction == SORT_ASC else SORT_ASC
        else:
            self.sort_key = key
            self.sort_direction = SORT_ASC
        self.current_page = 1
        return True

    def set_page(self, page: int):
        self.current_page = self._clamp(page)

    def first_page(self):
        self.set_page(1)

    def previous_page(self):
        self.set_page(self.current_page - 1)

    def next_page(self):
        self.set_page(self.current_page + 1)

    def last_page(self):
        self.set_page(self.total_pages)

    def _clamp(self, page: int) -> int:
        return max(1, min(page, self.total_pages))

    def _matches(self, row: Any, query_lower: str) -> bool:
        keys = self.search_keys if self.search_keys is not None else row_keys(row)
        for key in keys:
            value = get_field(row, key)
            if isinstance(value, str) and query_lower in value.lower():
                return True
        return False

    @property
    def filtered_rows(self) -> List[Any]:
        if not self.searchable or not self.query.strip():
            return list(self.data)
        query_lower = self.query.lower()
        return [row for row in self.data if self._matches(row, query_lower)]

    def sort_value(self, row: Any, column: Column) -> Any:
        value = get_field(row, column.key)
        if column.render is not None:
            return str(column.render(value, row))
        return value

    @property
    def sorted_rows(self) -> List[Any]:
        rows = self.filtered_rows
        column = self.column(self.sort_key) if self.sort_key else None
        if column is None:
            return rows
        # reverse=True keeps equal keys in their original order
        return sorted(
            rows,
            key=lambda row: _sort_key(self.sort_value(row, column)),
            reverse=self.sort_direction == SORT_DESC,
        )

    @property
    def total_rows(self) -> int:
        return len(self.filtered_rows)

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_rows / self.page_size))

    @property
    def page_rows(self) -> List[Any]:
        page = self._clamp(self.current_page)
        start = (page - 1) * self.page_size
        return self.sorted_rows[start:start + self.page_size]

    def render_cell(self, row: Any, column: Column) -> Any:
        value = get_field(row, column.key)
        if column.render is not None:
            return column.render(value, row)
        return value

    @property
    def summary(self) -> str:
        return f"Mostrando {len(self.page_rows)} de {self.total_rows}"

    @property
    def page_label(self) -> str:
        return f"Página {self._clamp(self.current_page)} / {self.total_pages}"
