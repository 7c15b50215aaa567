"""Storage for glossary terms: dishes, ingredients, sauces, utensils and techniques."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from .errors import DatabaseError, NotFound
from .models import (
    DishGenre,
    IngredientGenre,
    NewTerm,
    SauceGenre,
    Term,
    TermCategory,
    TermDetail,
    TermQuery,
    TermUpdate,
)
from .relations import get_related_terms


class TermKind(Enum):
    """One kind of glossary term, with its table and its genre type, if any."""

    DISH = (TermCategory.DISH, "dishes", DishGenre)
    INGREDIENT = (TermCategory.INGREDIENT, "ingredients", IngredientGenre)
    SAUCE = (TermCategory.SAUCE, "sauces", SauceGenre)
    UTENSIL = (TermCategory.UTENSIL, "utensils", None)
    TECHNIQUE = (TermCategory.TECHNIQUE, "techniques", None)

    def __init__(self, category: TermCategory, table: str, genre_type: type[Enum] | None):
        self.category = category
        self.table = table
        self.genre_type = genre_type

    @property
    def has_genre(self) -> bool:
        return self.genre_type is not None

    @property
    def columns(self) -> str:
        if self.has_genre:
            return "id, french, reading, genre, notes, created_at"
        return "id, french, reading, notes, created_at"


def kind_for(category: TermCategory | str) -> TermKind:
    """The term kind stored for a category."""
    cat = TermCategory(category)
    return next(kind for kind in TermKind if kind.category is cat)


@contextmanager
def _db_errors() -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise DatabaseError(str(exc)) from exc


def _genre_value(genre: Enum | None) -> str | None:
    return genre.value if genre is not None else None


def _to_term(kind: TermKind, row: sqlite3.Row) -> Term:
    genre = None
    if kind.has_genre:
        raw = row["genre"]
        if raw is not None:
            try:
                genre = kind.genre_type(raw)
            except ValueError:
                raise DatabaseError(f"invalid genre `{raw}` in {kind.table}") from None
    return Term(
        category=kind.category,
        id=row["id"],
        french=row["french"],
        reading=row["reading"],
        genre=genre,
        notes=row["notes"],
        created_at=row["created_at"],
    )


def list_terms(conn: sqlite3.Connection, kind: TermKind, query: TermQuery) -> list[Term]:
    """Terms of one kind, filtered by genre and by a search on name or notes."""
    conditions: list[str] = []
    params: list[object] = []
    if kind.has_genre and query.genre is not None:
        conditions.append("genre = ?")
        params.append(_genre_value(query.genre))
    if query.q is not None:
        pattern = f"%{query.q}%"
        conditions.append("(french LIKE ? OR notes LIKE ?)")
        params.extend((pattern, pattern))
    where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
    sql = f"SELECT {kind.columns} FROM {kind.table}{where} ORDER BY french"
    with _db_errors():
        rows = conn.execute(sql, params).fetchall()
    return [_to_term(kind, row) for row in rows]


def get_term(conn: sqlite3.Connection, kind: TermKind, term_id: int) -> Term:
    """One term by id; raises NotFound if there is none."""
    with _db_errors():
        row = conn.execute(
            f"SELECT {kind.columns} FROM {kind.table} WHERE id = ?", (term_id,)
        ).fetchone()
    if row is None:
        raise NotFound()
    return _to_term(kind, row)


def get_term_detail(conn: sqlite3.Connection, kind: TermKind, term_id: int) -> TermDetail:
    """A term together with the terms related to it."""
    term = get_term(conn, kind, term_id)
    related = get_related_terms(conn, kind.category, term_id)
    return TermDetail(term=term, related_terms=related)


def create_term(conn: sqlite3.Connection, kind: TermKind, new: NewTerm) -> Term:
    """Insert a term and return it as stored."""
    if kind.has_genre:
        sql = f"INSERT INTO {kind.table} (french, reading, genre, notes) VALUES (?, ?, ?, ?)"
        params = (new.french, new.reading, _genre_value(new.genre), new.notes)
    else:
        sql = f"INSERT INTO {kind.table} (french, reading, notes) VALUES (?, ?, ?)"
        params = (new.french, new.reading, new.notes)
    with _db_errors(), conn:
        cur = conn.execute(sql, params)
    return get_term(conn, kind, cur.lastrowid)


def update_term(
    conn: sqlite3.Connection, kind: TermKind, term_id: int, update: TermUpdate
) -> Term:
    """Change the given fields of a term, keeping the others."""
    existing = get_term(conn, kind, term_id)
    french = update.french if update.french is not None else existing.french
    reading = update.reading if update.reading is not None else existing.reading
    notes = update.notes if update.notes is not None else existing.notes
    if kind.has_genre:
        genre = update.genre if update.genre is not None else existing.genre
        sql = f"UPDATE {kind.table} SET french=?, reading=?, genre=?, notes=? WHERE id=?"
        params = (french, reading, _genre_value(genre), notes, term_id)
    else:
        sql = f"UPDATE {kind.table} SET french=?, reading=?, notes=? WHERE id=?"
        params = (french, reading, notes, term_id)
    with _db_errors(), conn:
        conn.execute(sql, params)
    return get_term(conn, kind, term_id)


def delete_term(conn: sqlite3.Connection, kind: TermKind, term_id: int) -> None:
    """Remove a term; raises NotFound if there was none."""
    with _db_errors(), conn:
        cur = conn.execute(f"DELETE FROM {kind.table} WHERE id = ?", (term_id,))
    if cur.rowcount == 0:
        raise NotFound()