# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Typed façade over a fetched result set.

The executor materialises every row before a :class:`Result` is built, so a
Result never touches the session again and may be read in any order.
"""

from typing import Any, List, Optional, Sequence, Tuple, Union

from spdb.errors import ColumnNotFound, NullResult, NullValue, OutOfRange

Column = Union[int, str]


class Value:
    """One cell.  ``None`` is SQL NULL."""

    __slots__ = ("_raw",)

    def __init__(self, raw: Any):
        self._raw = raw

    def __repr__(self) -> str:
        return f"Value({self._raw!r})"

    def is_null(self) -> bool:
        return self._raw is None

    def _require(self, target: str) -> Any:
        if self._raw is None:
            raise NullValue(f"A null MySQL value cannot be converted to {target}.")
        return self._raw

    def as_string(self) -> str:
        raw = self._require("string")
        if isinstance(raw, (bytes, bytearray)):
            return raw.decode("utf-8")
        return str(raw)

    def as_int(self) -> int:
        return int(self._require("int"))

    def as_long(self) -> int:
        # Python ints are unbounded; kept as a separate accessor for 64-bit
        # columns such as epoch seconds.
        return int(self._require("long"))

    def as_bool(self) -> bool:
        self._require("bool")
        return self.as_int() != 0


class Result:
    """
    Rows and metadata of one executed statement.

    ``columns is None`` marks a null result: the statement produced no result
    set.  ``auto_generated_id`` is the id assigned by the most recent insert on
    the session at the time the statement completed.
    """

    def __init__(
        self,
        columns: Optional[Sequence[str]],
        rows: Optional[Sequence[Tuple[Any, ...]]] = None,
        auto_generated_id: int = 0,
        affected_rows: int = 0,
    ):
        self._columns: Optional[List[str]] = list(columns) if columns is not None else None
        self._rows: List[Tuple[Any, ...]] = [tuple(r) for r in rows or ()]
        self.auto_generated_id = auto_generated_id
        self.affected_rows = affected_rows

    @property
    def is_null(self) -> bool:
        return self._columns is None

    @property
    def row_count(self) -> int:
        if self._columns is None:
            raise NullResult("Cannot retrieve the row count because the result is null.")
        return len(self._rows)

    @property
    def column_names(self) -> List[str]:
        if self._columns is None:
            raise NullResult("Cannot retrieve column names because the result is null.")
        return list(self._columns)

    def _column_index(self, name: str) -> int:
        if self._columns is None:
            raise NullResult("Cannot retrieve the name of a column because the result is null.")
        try:
            return self._columns.index(name)
        except ValueError:
            raise ColumnNotFound(f"Column name not found: {name}") from None

    def value(self, row_or_column: Column = 0, column: Optional[Column] = None) -> Value:
        """
        ``value()`` reads row 0, column 0; ``value(col)`` reads row 0 of
        *col*; ``value(row, col)`` reads any cell.  *col* may be a zero-based
        index or a column name.
        """
        if column is None:
            row, column = 0, row_or_column
        else:
            row = row_or_column

        if self._columns is None:
            raise NullResult("Cannot retrieve a value because the result is null.")
        if isinstance(column, str):
            column = self._column_index(column)
        if not isinstance(row, int):
            raise OutOfRange(f"Row index must be an integer, got {row!r}.")

        if not self._columns:
            raise OutOfRange("Cannot retrieve a value because there are no columns.")
        if not self._rows:
            raise OutOfRange("Cannot retrieve a value because there are no rows.")
        if column < 0:
            raise OutOfRange("Column index cannot be negative.")
        if row < 0:
            raise OutOfRange("Row index cannot be negative.")
        if column > len(self._columns) - 1:
            raise OutOfRange("Column index is out of range.")
        if row > len(self._rows) - 1:
            raise OutOfRange("Row index is out of range.")

        return Value(self._rows[row][column])
