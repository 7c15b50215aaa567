"""HTTP routes for the glossary and recipes, served as JSON."""

from __future__ import annotations

import functools
import json
import re
import sqlite3
import threading
from collections.abc import Callable
from typing import Any

from flask import Flask, Response, jsonify, request

from . import recipes as recipe_store
from . import relations, terms
from .errors import AppError, BadRequest
from .models import (
    NewRecipe,
    NewRelation,
    NewTerm,
    RecipeUpdate,
    TermCategory,
    TermQuery,
    TermUpdate,
)
from .terms import TermKind

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _parse_id(raw: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise BadRequest(f"Cannot parse `{raw}` to a `i64`")
    value = int(raw)
    if not _I64_MIN <= value <= _I64_MAX:
        raise BadRequest(f"Cannot parse `{raw}` to a `i64`")
    return value


def _parse_category(raw: str) -> TermCategory:
    try:
        return TermCategory(raw)
    except ValueError:
        raise BadRequest(f"unknown variant `{raw}`") from None


def _json_body() -> Any:
    """The request body decoded as JSON, or BadRequest."""
    if not request.is_json:
        raise BadRequest("Expected request with `Content-Type: application/json`")
    try:
        return json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        raise BadRequest(f"Failed to parse the request body as JSON: {exc}") from None


def _empty(status: int) -> Response:
    return Response(status=status)


def _register_term_routes(
    app: Flask,
    conn: sqlite3.Connection,
    kind: TermKind,
    guard: Callable[[Callable[..., Any]], Callable[..., Any]],
) -> None:
    base = f"/{kind.table}"
    name = kind.table

    @guard
    def list_view():
        query = TermQuery.from_args(request.args, kind.genre_type)
        return jsonify([term.to_dict() for term in terms.list_terms(conn, kind, query)])

    @guard
    def create_view():
        new = NewTerm.from_dict(_json_body(), kind.genre_type)
        return jsonify(terms.create_term(conn, kind, new).to_dict()), 201

    @guard
    def get_view(term_id: str):
        detail = terms.get_term_detail(conn, kind, _parse_id(term_id))
        return jsonify(detail.to_dict())

    @guard
    def update_view(term_id: str):
        ident = _parse_id(term_id)
        update = TermUpdate.from_dict(_json_body(), kind.genre_type)
        return jsonify(terms.update_term(conn, kind, ident, update).to_dict())

    @guard
    def delete_view(term_id: str):
        terms.delete_term(conn, kind, _parse_id(term_id))
        return _empty(204)

    @guard
    def add_relation_view(term_id: str):
        ident = _parse_id(term_id)
        relation = NewRelation.from_dict(_json_body())
        relations.add_relation(conn, kind.category, ident, relation)
        return _empty(201)

    @guard
    def delete_relation_view(term_id: str, to_cat: str, to_id: str):
        ident = _parse_id(term_id)
        category = _parse_category(to_cat)
        other = _parse_id(to_id)
        relations.delete_relation(conn, kind.category, ident, category, other)
        return _empty(204)

    app.add_url_rule(base, f"{name}_list", list_view, methods=["GET"])
    app.add_url_rule(base, f"{name}_create", create_view, methods=["POST"])
    app.add_url_rule(f"{base}/<term_id>", f"{name}_get", get_view, methods=["GET"])
    app.add_url_rule(f"{base}/<term_id>", f"{name}_update", update_view, methods=["PUT"])
    app.add_url_rule(f"{base}/<term_id>", f"{name}_delete", delete_view, methods=["DELETE"])
    app.add_url_rule(
        f"{base}/<term_id>/relations",
        f"{name}_add_relation",
        add_relation_view,
        methods=["POST"],
    )
    app.add_url_rule(
        f"{base}/<term_id>/relations/<to_cat>/<to_id>",
        f"{name}_delete_relation",
        delete_relation_view,
        methods=["DELETE"],
    )


def _register_recipe_routes(
    app: Flask,
    conn: sqlite3.Connection,
    guard: Callable[[Callable[..., Any]], Callable[..., Any]],
) -> None:
    @guard
    def list_view():
        return jsonify([recipe.to_dict() for recipe in recipe_store.list_recipes(conn)])

    @guard
    def create_view():
        new = NewRecipe.from_dict(_json_body())
        return jsonify(recipe_store.create_recipe(conn, new).to_dict()), 201

    @guard
    def get_view(recipe_id: str):
        detail = recipe_store.get_recipe_detail(conn, _parse_id(recipe_id))
        return jsonify(detail.to_dict())

    @guard
    def update_view(recipe_id: str):
        ident = _parse_id(recipe_id)
        update = RecipeUpdate.from_dict(_json_body())
        return jsonify(recipe_store.update_recipe(conn, ident, update).to_dict())

    @guard
    def delete_view(recipe_id: str):
        recipe_store.delete_recipe(conn, _parse_id(recipe_id))
        return _empty(204)

    app.add_url_rule("/recipes", "recipes_list", list_view, methods=["GET"])
    app.add_url_rule("/recipes", "recipes_create", create_view, methods=["POST"])
    app.add_url_rule("/recipes/<recipe_id>", "recipes_get", get_view, methods=["GET"])
    app.add_url_rule("/recipes/<recipe_id>", "recipes_update", update_view, methods=["PUT"])
    app.add_url_rule(
        "/recipes/<recipe_id>", "recipes_delete", delete_view, methods=["DELETE"]
    )


def create_app(conn: sqlite3.Connection) -> Flask:
    """Build the web application serving the given database connection."""
    app = Flask(__name__)
    app.json.sort_keys = False
    app.json.ensure_ascii = False
    app.extensions["cuisine.db"] = conn

    lock = threading.Lock()

    def guard(view: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with lock:
                return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        return jsonify(err.to_dict()), err.status_code

    for kind in TermKind:
        _register_term_routes(app, conn, kind, guard)
    _register_recipe_routes(app, conn, guard)
    return app