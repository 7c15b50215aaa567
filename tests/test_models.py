import pytest

from cuisine.errors import BadRequest
from cuisine.models import (
    Difficulty,
    DishGenre,
    IngredientGenre,
    NewRecipe,
    NewRelation,
    NewTerm,
    Recipe,
    RecipeDetail,
    RecipeIngredient,
    RecipeStep,
    RecipeUpdate,
    RelatedTermRef,
    SauceGenre,
    Term,
    TermCategory,
    TermDetail,
    TermQuery,
    TermUpdate,
)


def test_enums_parse_lowercase_values():
    assert TermCategory("technique") is TermCategory.TECHNIQUE
    assert DishGenre("stew") is DishGenre.STEW
    assert IngredientGenre("spice") is IngredientGenre.SPICE
    assert SauceGenre("emulsionnee") is SauceGenre.EMULSIONNEE
    assert Difficulty("hard") is Difficulty.HARD


def test_term_with_genre_serialises_genre():
    term = Term(TermCategory.DISH, 1, "bouillabaisse", genre=DishGenre.STEW, created_at="t")
    data = term.to_dict()
    assert data["genre"] == "stew"
    assert list(data) == ["id", "french", "reading", "genre", "notes", "created_at"]


def test_genred_term_without_genre_has_null():
    term = Term(TermCategory.SAUCE, 2, "velouté")
    assert term.to_dict()["genre"] is None


def test_technique_has_no_genre_key():
    term = Term(TermCategory.TECHNIQUE, 3, "sauté", reading="ソテー")
    data = term.to_dict()
    assert "genre" not in data
    assert data["reading"] == "ソテー"


def test_term_detail_flattens_term():
    term = Term(TermCategory.UTENSIL, 4, "tamis")
    ref = RelatedTermRef(TermCategory.TECHNIQUE, 5, "tamiser", "related")
    data = TermDetail(term, [ref]).to_dict()
    assert data["french"] == "tamis"
    assert data["related_terms"] == [
        {"category": "technique", "id": 5, "french": "tamiser", "relation_type": "related"}
    ]


def test_new_term_from_dict():
    new = NewTerm.from_dict({"french": "bouillabaisse", "genre": "stew"}, DishGenre)
    assert new == NewTerm("bouillabaisse", None, DishGenre.STEW, None)


def test_new_term_ignores_genre_without_genre_type():
    new = NewTerm.from_dict({"french": "chinois", "genre": "whatever"}, None)
    assert new.genre is None
    assert new.french == "chinois"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"french": None},
        {"french": 12},
        {"french": "crêpe", "genre": "cake"},
        {"french": "crêpe", "reading": 3},
        ["french"],
        "crêpe",
    ],
)
def test_new_term_rejects_bad_bodies(body):
    with pytest.raises(BadRequest):
        NewTerm.from_dict(body, DishGenre)


def test_term_update_empty_is_all_none():
    assert TermUpdate.from_dict({}, SauceGenre) == TermUpdate()


def test_term_update_reads_genre():
    update = TermUpdate.from_dict({"genre": "pastry"}, DishGenre)
    assert update.genre is DishGenre.PASTRY
    assert update.french is None


def test_term_query_from_args():
    query = TermQuery.from_args({"genre": "herb", "q": "thym"}, IngredientGenre)
    assert query.genre is IngredientGenre.HERB
    assert query.q == "thym"


def test_term_query_rejects_unknown_genre():
    with pytest.raises(BadRequest):
        TermQuery.from_args({"genre": "nope"}, DishGenre)


def test_term_query_ignores_genre_for_untyped():
    assert TermQuery.from_args({"genre": "x", "q": "noisette"}, None) == TermQuery(None, "noisette")


def test_new_relation_from_dict():
    rel = NewRelation.from_dict({"to_category": "technique", "to_id": 7})
    assert rel == NewRelation(TermCategory.TECHNIQUE, 7, None)


@pytest.mark.parametrize(
    "body",
    [
        {"to_id": 1},
        {"to_category": "technique"},
        {"to_category": "fork", "to_id": 1},
        {"to_category": "dish", "to_id": True},
        {"to_category": "dish", "to_id": "1"},
    ],
)
def test_new_relation_rejects_bad_bodies(body):
    with pytest.raises(BadRequest):
        NewRelation.from_dict(body)


def test_recipe_to_dict():
    recipe = Recipe(1, "bouillabaisse", difficulty=Difficulty.HARD, created_at="t")
    assert recipe.to_dict() == {
        "id": 1,
        "name_french": "bouillabaisse",
        "description_japanese": None,
        "difficulty": "hard",
        "created_at": "t",
    }


def test_recipe_detail_flattens_recipe():
    recipe = Recipe(1, "bouillabaisse")
    detail = RecipeDetail(
        recipe,
        [RecipeIngredient(2, "safran", "1 pinch")],
        [RecipeStep(3, 1, "Faites mijoter.")],
    )
    data = detail.to_dict()
    assert data["name_french"] == "bouillabaisse"
    assert data["ingredients"][0]["quantity"] == "1 pinch"
    assert data["steps"][0]["instruction_french"] == "Faites mijoter."


def test_recipe_detail_empty_lists():
    data = RecipeDetail(Recipe(1, "bouillabaisse")).to_dict()
    assert data["ingredients"] == []
    assert data["steps"] == []


def test_new_recipe_from_dict():
    new = NewRecipe.from_dict({"name_french": "bouillabaisse", "difficulty": "hard"})
    assert new == NewRecipe("bouillabaisse", None, Difficulty.HARD)


def test_new_recipe_requires_name():
    with pytest.raises(BadRequest):
        NewRecipe.from_dict({"difficulty": "easy"})


def test_recipe_update_partial():
    update = RecipeUpdate.from_dict({"description_japanese": "マルセイユの魚介スープ"})
    assert update == RecipeUpdate(None, "マルセイユの魚介スープ", None)


def test_recipe_update_rejects_bad_difficulty():
    with pytest.raises(BadRequest):
        RecipeUpdate.from_dict({"difficulty": "impossible"})