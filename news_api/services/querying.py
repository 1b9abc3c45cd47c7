"""
Query-construction helpers shared by the entity services.

Design notes
------------
- Nothing in here concatenates request input into SQL text.  Values are
  always bound parameters; identifiers (the sort column) are looked up in
  a per-entity whitelist of SQLAlchemy column expressions.
- Validation happens before any listing or mutating statement executes:
  an unknown sort column, a bad order token, a malformed pagination token
  or a filter value that does not exist short-circuits the request.
- ``page <= 0`` and pages past the end are *valid* and produce an empty
  window; only tokens that fail to parse are errors.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy import Select, asc, desc, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from news_api.errors import BadRequest, NotFound

Direction = Literal["ASC", "DESC"]

UNBOUNDED_LIMIT_TOKENS: frozenset[str] = frozenset({"0", "infinity", "none"})

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

MAX_WINDOW_VALUE = 2**63 - 1


# ---------------------------------------------------------------------------
# Existence checks
# ---------------------------------------------------------------------------

async def check_exists(db: AsyncSession, model, column: str, value: Any) -> RowMapping:
    """
    Return the first row of *model* whose *column* equals *value*.

    Raises ``NotFound`` naming the column, value and table when no row
    matches.
    """
    table = model.__table__
    q = select(table).where(table.c[column] == value).limit(1)
    row = (await db.execute(q)).mappings().first()
    if row is None:
        raise NotFound(f"{column} '{value}' was not found in {table.name}")
    return row


@dataclass(frozen=True)
class ExistenceCheck:
    """A deferred ``check_exists`` call."""

    model: Any
    column: str
    value: Any

    async def run(self, db: AsyncSession) -> RowMapping:
        return await check_exists(db, self.model, self.column, self.value)


async def run_checks(db: AsyncSession, checks: Iterable[ExistenceCheck]) -> None:
    for check in checks:
        await check.run(db)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def resolve_order(token: str) -> Direction:
    """Map an ``order`` query token onto ``"ASC"`` / ``"DESC"`` (case-insensitive)."""
    normalized = token.lower()
    if normalized == "asc":
        return "ASC"
    if normalized == "desc":
        return "DESC"
    raise BadRequest("Invalid order query")


def resolve_sort_column(token: str, sortable: Mapping[str, ColumnElement]) -> ColumnElement:
    """Return the whitelisted column expression for *token*."""
    try:
        return sortable[token]
    except KeyError:
        raise BadRequest("Invalid sort_by query") from None


def order_clause(column: ColumnElement, direction: Direction):
    return asc(column) if direction == "ASC" else desc(column)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WindowSpec:
    """
    The slice of an ordered result set to return.

    ``limit=None`` means unbounded (no LIMIT, no OFFSET).
    """

    limit: int | None = None
    offset: int = 0

    @property
    def unbounded(self) -> bool:
        return self.limit is None

    def apply(self, stmt: Select) -> Select:
        if self.limit is None:
            return stmt
        return stmt.limit(self.limit).offset(self.offset)


EMPTY_WINDOW = WindowSpec(limit=0, offset=0)


def resolve_page(limit_token: str, page_token: str) -> WindowSpec:
    """
    Translate the ``limit`` / ``p`` query tokens into a ``WindowSpec``.

    Rules, in order:

    1. ``"0"``, ``"infinity"`` and ``"none"`` select every row whatever
       the page.
    2. Both tokens must be base-10 integers.
    3. A negative limit is rejected.
    4. ``page <= 0`` yields an empty window.
    5. Otherwise pages are 1-indexed with ``limit`` rows each.  A limit
       past the 64-bit range is clamped to it, and an offset past it
       yields an empty window.
    """
    if limit_token in UNBOUNDED_LIMIT_TOKENS:
        return WindowSpec()
    if not _INTEGER_RE.fullmatch(limit_token):
        raise BadRequest("Invalid limit: must be a whole number")
    if not _INTEGER_RE.fullmatch(page_token):
        raise BadRequest("Invalid page: must be an integer")

    limit = _bounded_int(limit_token)
    page = _bounded_int(page_token)
    if limit < 0:
        raise BadRequest("Limit must be non-negative")
    if page <= 0:
        return EMPTY_WINDOW

    # LIMIT/OFFSET are 64-bit on both PostgreSQL and SQLite.
    limit = min(limit, MAX_WINDOW_VALUE)
    offset = limit * (page - 1)
    if offset > MAX_WINDOW_VALUE:
        return EMPTY_WINDOW
    return WindowSpec(limit=limit, offset=offset)


def _bounded_int(token: str) -> int:
    """
    Parse an integer token, saturating anything past ``MAX_WINDOW_VALUE``
    to one beyond it so oversized tokens never reach ``int()`` in full.
    """
    sign = -1 if token.startswith("-") else 1
    digits = token.lstrip("+-").lstrip("0") or "0"
    if len(digits) > len(str(MAX_WINDOW_VALUE)):
        return sign * (MAX_WINDOW_VALUE + 1)
    return sign * int(digits)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FilterCandidate:
    """
    An optional equality filter on the primary entity.

    *target* is the filtered column on the primary entity; *model* and
    *column* name where the value must exist for the filter to be valid.
    A candidate whose *value* is ``None`` does not participate.
    """

    value: Any
    model: Any
    column: str
    target: ColumnElement

    @property
    def active(self) -> bool:
        return self.value is not None

    @property
    def check(self) -> ExistenceCheck:
        return ExistenceCheck(self.model, self.column, self.value)


async def build_filters(
    db: AsyncSession, candidates: Iterable[FilterCandidate]
) -> list[ColumnElement[bool]]:
    """
    Validate every active candidate and return its equality predicate.

    The caller ANDs the result in with ``stmt.where(*predicates)``; an
    empty list means no filtering.  A referenced value that does not
    exist raises ``NotFound`` before any predicate is returned.
    """
    active = [c for c in candidates if c.active]
    await run_checks(db, (c.check for c in active))
    return [c.target == c.value for c in active]
