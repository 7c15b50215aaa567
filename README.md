# cuisine

A small JSON web service for a bilingual (French / Japanese) culinary
glossary. It stores dishes, ingredients, sauces, utensils and techniques, lets
you link any two terms across categories, and keeps recipes with their
ingredient lines and steps. Data lives in a single SQLite file.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
cuisine
```

This opens (or creates) `cuisine.db` in the current directory, creates any
missing tables, and serves the API on `0.0.0.0:3000` until interrupted with
Ctrl-C. Requests are logged through Python's `logging` at INFO level.

Options:

| Option | Default | Meaning |
|--------|---------|---------|
| `--database PATH` | `cuisine.db` | SQLite database file |
| `--host HOST` | `0.0.0.0` | address to listen on |
| `--port PORT` | `3000` | port to listen on (0–65535) |

If the database cannot be opened, or the port cannot be bound (for instance
because another process already uses it), the command prints the error to
standard error and exits with status 1.

The server is the standard library's single-threaded WSGI server; every view
also holds a lock around the shared SQLite connection.

## API

Every response body is JSON, except the empty bodies of 201 replies to
relation requests and of 204 replies. Errors look like `{"error": "not found"}`:

- 404 for a record or relation that does not exist;
- 400 for a body that is not JSON or lacks `Content-Type: application/json`,
  a missing or mistyped field, an unknown `genre`, `difficulty` or category,
  or an id in the path that is not a 64-bit integer;
- 500 for a database failure.

### Glossary terms

The same routes exist for each of `dishes`, `ingredients`, `sauces`,
`utensils` and `techniques`:

| Method | Path | Result |
|--------|------|--------|
| GET | `/dishes` | list, ordered by `french` |
| POST | `/dishes` | create, 201 with the stored term |
| GET | `/dishes/{id}` | the term with its `related_terms` |
| PUT | `/dishes/{id}` | partial update; omitted or `null` fields keep their value |
| DELETE | `/dishes/{id}` | 204 |
| POST | `/dishes/{id}/relations` | link to another term, 201 |
| DELETE | `/dishes/{id}/relations/{to_category}/{to_id}` | unlink, 204 |

A term has `id`, `french` (required on create), `reading`, `notes`,
`created_at` and, for dishes, ingredients and sauces, a `genre`:

- dishes: `soup`, `stew`, `dessert`, `pastry`, `main`, `appetizer`
- ingredients: `dairy`, `herb`, `spice`, `vegetable`, `mushroom`, `protein`, `grain`, `seafood`
- sauces: `mere`, `derivee`, `froide`, `emulsionnee`, `beurre`

List routes accept `?q=` to search `french` and `notes` (SQL `LIKE`,
substring), and, where a genre exists, `?genre=` to filter.

A relation body is `{"to_category": "technique", "to_id": 3}` with an optional
`relation_type` (default `"related"`). Categories are `dish`, `ingredient`,
`sauce`, `utensil` and `technique`. A relation is stored once and shows up in
`related_terms` from both ends, each entry holding `category`, `id`, `french`
and `relation_type`, ordered by `french`. Unlinking removes the relation
whichever way round it was stored.

### Recipes

| Method | Path | Result |
|--------|------|--------|
| GET | `/recipes` | list, ordered by `name_french` |
| POST | `/recipes` | create, 201 with the stored recipe |
| GET | `/recipes/{id}` | the recipe with `ingredients` and `steps` |
| PUT | `/recipes/{id}` | partial update |
| DELETE | `/recipes/{id}` | 204; its ingredient lines and steps go with it |

A recipe has `id`, `name_french` (required on create),
`description_japanese`, `difficulty` (`easy`, `medium` or `hard`) and
`created_at`. In the detail view, `ingredients` lists `ingredient_id`,
`french`, `quantity` and `notes`, ordered by `french`; `steps` lists `id`,
`step_number`, `instruction_french` and `instruction_japanese`, ordered by
`step_number`.

### Example

```
curl -X POST localhost:3000/ingredients \
     -H 'content-type: application/json' \
     -d '{"french": "safran", "genre": "spice", "reading": "サフラン"}'
```

## What it does not do

- There are no HTTP routes for adding ingredient lines or steps to a recipe;
  the `recipe_ingredients` and `recipe_steps` tables are only read by the
  service, so they have to be filled directly in the database.
- Nothing is served at `/`: there is no browser page, only the JSON API.

## Using it from Python

```python
from cuisine.database import connect, migrate
from cuisine.app import create_app

conn = connect(":memory:")
migrate(conn)
app = create_app(conn)

client = app.test_client()
client.post("/dishes", json={"french": "bouillabaisse", "genre": "stew"})
print(client.get("/dishes").get_json())
```

The storage functions can also be used without the web layer:

```python
from cuisine.database import connect, migrate
from cuisine.models import NewTerm, IngredientGenre, TermQuery
from cuisine.terms import TermKind, create_term, list_terms

conn = connect(":memory:")
migrate(conn)
create_term(conn, TermKind.INGREDIENT, NewTerm("safran", genre=IngredientGenre.SPICE))
print(list_terms(conn, TermKind.INGREDIENT, TermQuery(q="saf")))
```

Modules:

- `cuisine.database`: `connect(path)` and `migrate(conn)`.
- `cuisine.models`: the enums, records and their `to_dict` / `from_dict` forms.
- `cuisine.terms`: `TermKind`, `kind_for`, and `list_terms`, `get_term`,
  `get_term_detail`, `create_term`, `update_term`, `delete_term`.
- `cuisine.relations`: `get_related_terms`, `add_relation`, `delete_relation`.
- `cuisine.recipes`: `list_recipes`, `get_recipe`, `get_recipe_detail`,
  `create_recipe`, `update_recipe`, `delete_recipe`.
- `cuisine.errors`: `AppError` and its subclasses `NotFound`, `BadRequest`,
  `DatabaseError`, each with an HTTP `status_code`.
- `cuisine.app`: `create_app(conn)`, returning a Flask application.
- `cuisine.cli`: `parse_args(argv)` and `main(argv)`, behind the `cuisine` command.