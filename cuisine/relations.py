"""Links between glossary terms, stored once and read from both ends."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from .errors import DatabaseError, NotFound
from .models import NewRelation, RelatedTermRef, TermCategory

_RELATED_SQL = """
SELECT refs.other_cat,
       refs.other_id,
       COALESCE(d.french, i.french, s.french, u.french, tq.french),
       refs.relation_type
FROM (
  SELECT to_category AS other_cat, to_id AS other_id, relation_type
    FROM term_relations WHERE from_category = ? AND from_id = ?
  UNION ALL
  SELECT from_category AS other_cat, from_id AS other_id, relation_type
    FROM term_relations WHERE to_category = ? AND to_id = ?
) refs
LEFT JOIN dishes      d  ON refs.other_cat = 'dish'       AND d.id  = refs.other_id
LEFT JOIN ingredients i  ON refs.other_cat = 'ingredient' AND i.id  = refs.other_id
LEFT JOIN sauces      s  ON refs.other_cat = 'sauce'      AND s.id  = refs.other_id
LEFT JOIN utensils    u  ON refs.other_cat = 'utensil'    AND u.id  = refs.other_id
LEFT JOIN techniques  tq ON refs.other_cat = 'technique'  AND tq.id = refs.other_id
ORDER BY COALESCE(d.french, i.french, s.french, u.french, tq.french)
"""

_DEFAULT_RELATION_TYPE = "related"


@contextmanager
def _db_errors() -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise DatabaseError(str(exc)) from exc


def get_related_terms(
    conn: sqlite3.Connection, category: TermCategory, term_id: int
) -> list[RelatedTermRef]:
    """Every term linked to the given one, in either direction, ordered by name."""
    cat = TermCategory(category).value
    with _db_errors():
        rows = conn.execute(_RELATED_SQL, (cat, term_id, cat, term_id)).fetchall()
    related = []
    for other_cat, other_id, french, relation_type in rows:
        if french is None:
            raise DatabaseError(f"related {other_cat} {other_id} has no name")
        related.append(RelatedTermRef(TermCategory(other_cat), other_id, french, relation_type))
    return related


def add_relation(
    conn: sqlite3.Connection,
    from_category: TermCategory,
    from_id: int,
    relation: NewRelation,
) -> None:
    """Store a link from one term to another."""
    relation_type = relation.relation_type or _DEFAULT_RELATION_TYPE
    if relation.relation_type == "":
        relation_type = ""
    with _db_errors(), conn:
        conn.execute(
            "INSERT INTO term_relations"
            " (from_category, from_id, to_category, to_id, relation_type)"
            " VALUES (?, ?, ?, ?, ?)",
            (
                TermCategory(from_category).value,
                from_id,
                TermCategory(relation.to_category).value,
                relation.to_id,
                relation_type,
            ),
        )


def delete_relation(
    conn: sqlite3.Connection,
    from_category: TermCategory,
    from_id: int,
    to_category: TermCategory,
    to_id: int,
) -> None:
    """Remove the link between two terms, whichever way it was stored."""
    fc = TermCategory(from_category).value
    tc = TermCategory(to_category).value
    with _db_errors(), conn:
        cur = conn.execute(
            "DELETE FROM term_relations"
            " WHERE (from_category=? AND from_id=? AND to_category=? AND to_id=?)"
            "    OR (from_category=? AND from_id=? AND to_category=? AND to_id=?)",
            (fc, from_id, tc, to_id, tc, to_id, fc, from_id),
        )
    if cur.rowcount == 0:
        raise NotFound()