"""Storage for recipes, their ingredient lines and their steps."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from .errors import DatabaseError, NotFound
from .models import (
    Difficulty,
    NewRecipe,
    Recipe,
    RecipeDetail,
    RecipeIngredient,
    RecipeStep,
    RecipeUpdate,
)

_RECIPE_COLUMNS = "id, name_french, description_japanese, difficulty, created_at"

_INGREDIENTS_SQL = """
SELECT i.id AS ingredient_id, i.french, ri.quantity, ri.notes
  FROM recipe_ingredients ri
  JOIN ingredients i ON i.id = ri.ingredient_id
 WHERE ri.recipe_id = ?
 ORDER BY i.french
"""

_STEPS_SQL = """
SELECT id, step_number, instruction_french, instruction_japanese
  FROM recipe_steps
 WHERE recipe_id = ?
 ORDER BY step_number
"""


@contextmanager
def _db_errors() -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise DatabaseError(str(exc)) from exc


def _difficulty_value(difficulty: Difficulty | None) -> str | None:
    return Difficulty(difficulty).value if difficulty is not None else None


def _to_recipe(row: sqlite3.Row) -> Recipe:
    raw = row["difficulty"]
    difficulty = None
    if raw is not None:
        try:
            difficulty = Difficulty(raw)
        except ValueError:
            raise DatabaseError(f"invalid difficulty `{raw}` in recipes") from None
    return Recipe(
        id=row["id"],
        name_french=row["name_french"],
        description_japanese=row["description_japanese"],
        difficulty=difficulty,
        created_at=row["created_at"],
    )


def list_recipes(conn: sqlite3.Connection) -> list[Recipe]:
    """Every recipe, ordered by French name."""
    with _db_errors():
        rows = conn.execute(
            f"SELECT {_RECIPE_COLUMNS} FROM recipes ORDER BY name_french"
        ).fetchall()
    return [_to_recipe(row) for row in rows]


def get_recipe(conn: sqlite3.Connection, recipe_id: int) -> Recipe:
    """One recipe by id; raises NotFound if there is none."""
    with _db_errors():
        row = conn.execute(
            f"SELECT {_RECIPE_COLUMNS} FROM recipes WHERE id = ?", (recipe_id,)
        ).fetchone()
    if row is None:
        raise NotFound()
    return _to_recipe(row)


def get_recipe_detail(conn: sqlite3.Connection, recipe_id: int) -> RecipeDetail:
    """A recipe with its ingredients (by name) and steps (in order)."""
    recipe = get_recipe(conn, recipe_id)
    with _db_errors():
        ingredient_rows = conn.execute(_INGREDIENTS_SQL, (recipe_id,)).fetchall()
        step_rows = conn.execute(_STEPS_SQL, (recipe_id,)).fetchall()
    ingredients = [
        RecipeIngredient(
            ingredient_id=row["ingredient_id"],
            french=row["french"],
            quantity=row["quantity"],
            notes=row["notes"],
        )
        for row in ingredient_rows
    ]
    steps = [
        RecipeStep(
            id=row["id"],
            step_number=row["step_number"],
            instruction_french=row["instruction_french"],
            instruction_japanese=row["instruction_japanese"],
        )
        for row in step_rows
    ]
    return RecipeDetail(recipe=recipe, ingredients=ingredients, steps=steps)


def create_recipe(conn: sqlite3.Connection, new: NewRecipe) -> Recipe:
    """Insert a recipe and return it as stored."""
    with _db_errors(), conn:
        cur = conn.execute(
            "INSERT INTO recipes (name_french, description_japanese, difficulty)"
            " VALUES (?, ?, ?)",
            (new.name_french, new.description_japanese, _difficulty_value(new.difficulty)),
        )
    return get_recipe(conn, cur.lastrowid)


def update_recipe(
    conn: sqlite3.Connection, recipe_id: int, update: RecipeUpdate
) -> Recipe:
    """Change the given fields of a recipe, keeping the others."""
    existing = get_recipe(conn, recipe_id)
    name_french = (
        update.name_french if update.name_french is not None else existing.name_french
    )
    description = (
        update.description_japanese
        if update.description_japanese is not None
        else existing.description_japanese
    )
    difficulty = update.difficulty if update.difficulty is not None else existing.difficulty
    with _db_errors(), conn:
        conn.execute(
            "UPDATE recipes SET name_french = ?, description_japanese = ?, difficulty = ?"
            " WHERE id = ?",
            (name_french, description, _difficulty_value(difficulty), recipe_id),
        )
    return get_recipe(conn, recipe_id)


def delete_recipe(conn: sqlite3.Connection, recipe_id: int) -> None:
    """Remove a recipe with its ingredient lines and steps; raises NotFound if absent."""
    with _db_errors(), conn:
        cur = conn.execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))
    if cur.rowcount == 0:
        raise NotFound()