"""Domain records for the culinary glossary and their JSON forms."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import BadRequest


class TermCategory(str, Enum):
    DISH = "dish"
    INGREDIENT = "ingredient"
    SAUCE = "sauce"
    UTENSIL = "utensil"
    TECHNIQUE = "technique"


class DishGenre(str, Enum):
    SOUP = "soup"
    STEW = "stew"
    DESSERT = "dessert"
    PASTRY = "pastry"
    MAIN = "main"
    APPETIZER = "appetizer"


class IngredientGenre(str, Enum):
    DAIRY = "dairy"
    HERB = "herb"
    SPICE = "spice"
    VEGETABLE = "vegetable"
    MUSHROOM = "mushroom"
    PROTEIN = "protein"
    GRAIN = "grain"
    SEAFOOD = "seafood"


class SauceGenre(str, Enum):
    MERE = "mere"
    DERIVEE = "derivee"
    FROIDE = "froide"
    EMULSIONNEE = "emulsionnee"
    BEURRE = "beurre"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


_GENRED_CATEGORIES = frozenset(
    {TermCategory.DISH, TermCategory.INGREDIENT, TermCategory.SAUCE}
)


def _as_object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise BadRequest("expected a JSON object")
    return data


def _string(data: Mapping[str, Any], key: str, *, required: bool = False) -> str | None:
    value = data.get(key)
    if value is None:
        if required:
            raise BadRequest(f"missing field `{key}`")
        return None
    if not isinstance(value, str):
        raise BadRequest(f"invalid type for field `{key}`: expected a string")
    return value


def _enum(data: Mapping[str, Any], key: str, enum_type: type[Enum], *, required: bool = False):
    value = data.get(key)
    if value is None:
        if required:
            raise BadRequest(f"missing field `{key}`")
        return None
    try:
        return enum_type(value)
    except ValueError:
        raise BadRequest(f"unknown variant `{value}` for field `{key}`") from None


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        raise BadRequest(f"missing field `{key}`")
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f"invalid type for field `{key}`: expected an integer")
    return value


def _value(member: Enum | None) -> str | None:
    return member.value if member is not None else None


@dataclass
class Term:
    """A glossary entry: dish, ingredient, sauce, utensil or technique."""

    category: TermCategory
    id: int
    french: str
    reading: str | None = None
    genre: Enum | None = None
    notes: str | None = None
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "french": self.french,
            "reading": self.reading,
        }
        if self.category in _GENRED_CATEGORIES:
            data["genre"] = _value(self.genre)
        data["notes"] = self.notes
        data["created_at"] = self.created_at
        return data


@dataclass
class RelatedTermRef:
    """A term linked to another, seen from the other side."""

    category: TermCategory
    id: int
    french: str
    relation_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "id": self.id,
            "french": self.french,
            "relation_type": self.relation_type,
        }


@dataclass
class TermDetail:
    """A term together with everything related to it."""

    term: Term
    related_terms: list[RelatedTermRef] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = self.term.to_dict()
        data["related_terms"] = [ref.to_dict() for ref in self.related_terms]
        return data


@dataclass
class NewTerm:
    french: str
    reading: str | None = None
    genre: Enum | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: Any, genre_type: type[Enum] | None) -> NewTerm:
        """Build from a JSON body; ``genre`` is read only when a genre type is given."""
        obj = _as_object(data)
        return cls(
            french=_string(obj, "french", required=True),
            reading=_string(obj, "reading"),
            genre=_enum(obj, "genre", genre_type) if genre_type is not None else None,
            notes=_string(obj, "notes"),
        )


@dataclass
class TermUpdate:
    """Fields to change; ``None`` keeps the stored value."""

    french: str | None = None
    reading: str | None = None
    genre: Enum | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: Any, genre_type: type[Enum] | None) -> TermUpdate:
        obj = _as_object(data)
        return cls(
            french=_string(obj, "french"),
            reading=_string(obj, "reading"),
            genre=_enum(obj, "genre", genre_type) if genre_type is not None else None,
            notes=_string(obj, "notes"),
        )


@dataclass
class TermQuery:
    """Filters for listing terms."""

    genre: Enum | None = None
    q: str | None = None

    @classmethod
    def from_args(cls, args: Mapping[str, str], genre_type: type[Enum] | None) -> TermQuery:
        genre = None
        if genre_type is not None and args.get("genre") is not None:
            raw = args.get("genre")
            try:
                genre = genre_type(raw)
            except ValueError:
                raise BadRequest(f"unknown variant `{raw}` for field `genre`") from None
        return cls(genre=genre, q=args.get("q"))


@dataclass
class NewRelation:
    to_category: TermCategory
    to_id: int
    relation_type: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> NewRelation:
        obj = _as_object(data)
        return cls(
            to_category=_enum(obj, "to_category", TermCategory, required=True),
            to_id=_integer(obj, "to_id"),
            relation_type=_string(obj, "relation_type"),
        )


@dataclass
class Recipe:
    id: int
    name_french: str
    description_japanese: str | None = None
    difficulty: Difficulty | None = None
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name_french": self.name_french,
            "description_japanese": self.description_japanese,
            "difficulty": _value(self.difficulty),
            "created_at": self.created_at,
        }


@dataclass
class RecipeIngredient:
    ingredient_id: int
    french: str
    quantity: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ingredient_id": self.ingredient_id,
            "french": self.french,
            "quantity": self.quantity,
            "notes": self.notes,
        }


@dataclass
class RecipeStep:
    id: int
    step_number: int
    instruction_french: str | None = None
    instruction_japanese: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "step_number": self.step_number,
            "instruction_french": self.instruction_french,
            "instruction_japanese": self.instruction_japanese,
        }


@dataclass
class RecipeDetail:
    recipe: Recipe
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    steps: list[RecipeStep] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = self.recipe.to_dict()
        data["ingredients"] = [item.to_dict() for item in self.ingredients]
        data["steps"] = [step.to_dict() for step in self.steps]
        return data


@dataclass
class NewRecipe:
    name_french: str
    description_japanese: str | None = None
    difficulty: Difficulty | None = None

    @classmethod
    def from_dict(cls, data: Any) -> NewRecipe:
        obj = _as_object(data)
        return cls(
            name_french=_string(obj, "name_french", required=True),
            description_japanese=_string(obj, "description_japanese"),
            difficulty=_enum(obj, "difficulty", Difficulty),
        )


@dataclass
class RecipeUpdate:
    """Fields to change; ``None`` keeps the stored value."""

    name_french: str | None = None
    description_japanese: str | None = None
    difficulty: Difficulty | None = None

    @classmethod
    def from_dict(cls, data: Any) -> RecipeUpdate:
        obj = _as_object(data)
        return cls(
            name_french=_string(obj, "name_french"),
            description_japanese=_string(obj, "description_japanese"),
            difficulty=_enum(obj, "difficulty", Difficulty),
        )