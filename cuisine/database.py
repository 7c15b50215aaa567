"""SQLite connection setup and schema."""

from __future__ import annotations

import os
import sqlite3

_SCHEMA = """
CREATE TABLE IF NOT EXISTS dishes (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    french      TEXT NOT NULL,
    reading     TEXT,
    genre       TEXT,
    notes       TEXT,
    created_at  TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS ingredients (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    french      TEXT NOT NULL,
    reading     TEXT,
    genre       TEXT,
    notes       TEXT,
    created_at  TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS sauces (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    french      TEXT NOT NULL,
    reading     TEXT,
    genre       TEXT,
    notes       TEXT,
    created_at  TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS utensils (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    french      TEXT NOT NULL,
    reading     TEXT,
    notes       TEXT,
    created_at  TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS techniques (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    french      TEXT NOT NULL,
    reading     TEXT,
    notes       TEXT,
    created_at  TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS term_relations (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    from_category  TEXT NOT NULL,
    from_id        INTEGER NOT NULL,
    to_category    TEXT NOT NULL,
    to_id          INTEGER NOT NULL,
    relation_type  TEXT NOT NULL DEFAULT 'related'
);

CREATE TABLE IF NOT EXISTS recipes (
    id                    INTEGER PRIMARY KEY AUTOINCREMENT,
    name_french           TEXT NOT NULL,
    description_japanese  TEXT,
    difficulty            TEXT,
    created_at            TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS recipe_ingredients (
    recipe_id      INTEGER NOT NULL REFERENCES recipes(id) ON DELETE CASCADE,
    ingredient_id  INTEGER NOT NULL REFERENCES ingredients(id) ON DELETE CASCADE,
    quantity       TEXT,
    notes          TEXT,
    PRIMARY KEY (recipe_id, ingredient_id)
);

CREATE TABLE IF NOT EXISTS recipe_steps (
    id                    INTEGER PRIMARY KEY AUTOINCREMENT,
    recipe_id             INTEGER NOT NULL REFERENCES recipes(id) ON DELETE CASCADE,
    step_number           INTEGER NOT NULL,
    instruction_french    TEXT,
    instruction_japanese  TEXT
);
"""


def connect(path: str | os.PathLike[str]) -> sqlite3.Connection:
    """Open a connection with named rows and foreign keys enforced."""
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def migrate(conn: sqlite3.Connection) -> None:
    """Create every table that does not exist yet."""
    conn.executescript(_SCHEMA)
    conn.commit()