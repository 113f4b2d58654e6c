"""
Structured store commands.

A command is a description of one call against the store: a stored
procedure with named parameters, a filtered read of a view, or a batch of
either. Commands compile to driver SQL with ``?`` placeholders and a list
of bound values; caller input never becomes part of the SQL text.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\[\]]*$")


def check_identifier(name: str) -> str:
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


@dataclass(frozen=True)
class Procedure:
    """A stored procedure call; parameters are bound by name unless `positional`."""

    name: str
    params: Mapping[str, Any] = field(default_factory=dict)
    positional: bool = False

    def __post_init__(self):
        check_identifier(self.name)
        for param in self.params:
            check_identifier(param)

    def compile(self) -> Tuple[str, List[Any]]:
        if not self.params:
            return f"EXEC {self.name}", []
        if self.positional:
            bindings = ", ".join("?" for _ in self.params)
        else:
            bindings = ", ".join(f"@{param} = ?" for param in self.params)
        return f"EXEC {self.name} {bindings}", list(self.params.values())


@dataclass(frozen=True)
class ViewQuery:
    """``SELECT *`` over a view or table, filtered by equality or membership."""

    view: str
    where: Mapping[str, Any] = field(default_factory=dict)
    order_by: Sequence[str] = ()

    def __post_init__(self):
        check_identifier(self.view)
        for column in self.where:
            check_identifier(column)
        for column in self.order_by:
            check_identifier(column.split()[0])
            if len(column.split()) > 1 and column.split()[1].upper() not in ("ASC", "DESC"):
                raise ValueError(f"Invalid sort direction: {column!r}")

    def compile(self) -> Tuple[str, List[Any]]:
        sql = f"SELECT * FROM {self.view}"
        values: List[Any] = []
        predicates = []
        for column, value in self.where.items():
            if isinstance(value, (list, tuple, set, frozenset)):
                items = list(value)
                if not items:
                    predicates.append("1 = 0")
                    continue
                predicates.append(f"{column} IN ({', '.join('?' for _ in items)})")
                values.extend(items)
            else:
                predicates.append(f"{column} = ?")
                values.append(value)
        if predicates:
            sql += " WHERE " + " AND ".join(predicates)
        if self.order_by:
            sql += " ORDER BY " + ", ".join(self.order_by)
        return sql, values


@dataclass(frozen=True)
class Batch:
    """Several commands sent as one multi-statement batch."""

    commands: Tuple[Any, ...]

    def compile(self) -> Tuple[str, List[Any]]:
        statements = []
        values: List[Any] = []
        for command in self.commands:
            sql, params = command.compile()
            statements.append(sql)
            values.extend(params)
        return ";\n".join(statements), values


@dataclass
class QueryResult:
    """Every record set a command produced, plus affected row counts."""

    recordsets: List[List[Dict[str, Any]]] = field(default_factory=list)
    rows_affected: List[int] = field(default_factory=list)

    @property
    def recordset(self) -> List[Dict[str, Any]]:
        return self.recordsets[0] if self.recordsets else []

    def first(self) -> Optional[Dict[str, Any]]:
        rows = self.recordset
        return rows[0] if rows else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recordsets": self.recordsets,
            "recordset": self.recordset,
            "rowsAffected": self.rows_affected,
        }


@dataclass(frozen=True)
class Statement:
    """Fixed SQL text written in code, with ``?`` placeholders for every value."""

    sql: str
    values: Tuple[Any, ...] = ()

    def __post_init__(self):
        if self.sql.count("?") != len(self.values):
            raise ValueError("Placeholder count does not match the bound values")

    def compile(self) -> Tuple[str, List[Any]]:
        return self.sql, list(self.values)
