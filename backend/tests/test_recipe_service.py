"""
Tests for RecipeService - visibility scoping, CRUD and JSON list storage.

Scenario: alice and bob share family group G; carol is an outsider.
"""

import pytest

from menu_api.services.domain import RecipeService
from shared.utils.exceptions import ForbiddenError, GroupMembershipError, NotFoundError
from shared.utils.schemas import RecipeCreate, RecipeUpdate
from tests.conftest import principal_for


def _recipe_payload(**overrides) -> RecipeCreate:
    payload = {
        "name": "Braised Pork",
        "category": "MEAT",
        "difficulty": "MEDIUM",
        "ingredients": [
            {"name": "五花肉", "quantity": 500, "unit": "GRAM", "orderIndex": 0},
            {"name": "Soy sauce", "quantity": 2, "unit": "SPOON", "orderIndex": 1},
        ],
        "steps": [{"description": "Blanch the pork", "orderIndex": 0, "duration": 5}],
        "tags": ["dinner", "家常菜"],
    }
    payload.update(overrides)
    return RecipeCreate.model_validate(payload)


class TestRecipeVisibility:

    def test_group_recipe_visible_to_members_only(
        self, db_session, alice, bob, carol, family_group, make_recipe
    ):
        recipe = make_recipe(alice, family_group)

        bob_ids = [r.id for r in RecipeService(db_session, principal_for(bob)).list_recipes()]
        carol_ids = [r.id for r in RecipeService(db_session, principal_for(carol)).list_recipes()]

        assert recipe.id in bob_ids
        assert recipe.id not in carol_ids

    def test_personal_recipe_visible_to_creator_only(
        self, db_session, alice, bob, family_group, make_recipe
    ):
        recipe = make_recipe(alice)

        assert RecipeService(db_session, principal_for(alice)).get_recipe(recipe.id).id == recipe.id
        with pytest.raises(NotFoundError):
            RecipeService(db_session, principal_for(bob)).get_recipe(recipe.id)

    def test_invisible_recipe_reads_as_not_found(self, db_session, alice, carol, family_group, make_recipe):
        recipe = make_recipe(alice, family_group)

        with pytest.raises(NotFoundError):
            RecipeService(db_session, principal_for(carol)).get_recipe(recipe.id)

    def test_list_filters(self, db_session, alice, family_group, make_recipe):
        make_recipe(alice, name="Hot and Sour Soup", category="SOUP")
        make_recipe(alice, family_group, name="Fried Rice", category="STAPLE", difficulty="EASY")
        service = RecipeService(db_session, principal_for(alice))

        assert [r.name for r in service.list_recipes(category="SOUP")] == ["Hot and Sour Soup"]
        assert [r.name for r in service.list_recipes(family_group_id=family_group.id)] == ["Fried Rice"]
        assert [r.name for r in service.list_recipes(search="sour")] == ["Hot and Sour Soup"]

    def test_search_treats_wildcards_literally(self, db_session, alice, make_recipe):
        make_recipe(alice, name="Soup")
        service = RecipeService(db_session, principal_for(alice))

        assert service.list_recipes(search="%") == []

    def test_sort_by_popularity_and_rating(self, db_session, alice, make_recipe):
        make_recipe(alice, name="Loved", favorites=10, rating=3.0)
        make_recipe(alice, name="Rated", favorites=1, rating=4.5)
        service = RecipeService(db_session, principal_for(alice))

        assert [r.name for r in service.list_recipes(sort="POPULAR")] == ["Loved", "Rated"]
        assert [r.name for r in service.list_recipes(sort="RATING")] == ["Rated", "Loved"]

    def test_pagination(self, db_session, alice, make_recipe):
        for i in range(3):
            make_recipe(alice, name=f"Recipe {i}")
        service = RecipeService(db_session, principal_for(alice))

        first = service.list_recipes(page=1, limit=2)
        second = service.list_recipes(page=2, limit=2)

        assert len(first) == 2
        assert len(second) == 1
        assert {r.id for r in first}.isdisjoint({r.id for r in second})


class TestRecipeCreate:

    def test_ingredients_round_trip(self, db_session, alice):
        service = RecipeService(db_session, principal_for(alice))
        payload = _recipe_payload()

        created = service.create_recipe(payload)
        fetched = service.get_recipe(created.id)

        assert fetched.ingredients == payload.ingredients
        assert fetched.steps == payload.steps
        assert fetched.tags == ["dinner", "家常菜"]
        assert fetched.favorites == 0
        assert fetched.rating == 0

    def test_group_recipe_requires_membership(self, db_session, carol, family_group):
        with pytest.raises(GroupMembershipError):
            RecipeService(db_session, principal_for(carol)).create_recipe(
                _recipe_payload(familyGroupId=family_group.id)
            )

    def test_member_creates_group_recipe(self, db_session, bob, family_group):
        created = RecipeService(db_session, principal_for(bob)).create_recipe(
            _recipe_payload(familyGroupId=family_group.id)
        )

        assert created.family_group_id == family_group.id
        assert created.created_by == bob.id


class TestRecipeUpdate:

    def test_partial_update_keeps_other_fields(self, db_session, alice):
        service = RecipeService(db_session, principal_for(alice))
        created = service.create_recipe(_recipe_payload())

        updated = service.update_recipe(created.id, RecipeUpdate(name="Red Braised Pork"))

        assert updated.name == "Red Braised Pork"
        assert updated.category == "MEAT"
        assert updated.ingredients == created.ingredients

    def test_group_member_may_edit_group_recipe(self, db_session, alice, bob, family_group, make_recipe):
        recipe = make_recipe(alice, family_group)

        updated = RecipeService(db_session, principal_for(bob)).update_recipe(
            recipe.id, RecipeUpdate(description="Bob's tweak")
        )

        assert updated.description == "Bob's tweak"

    def test_replacing_ingredients(self, db_session, alice):
        service = RecipeService(db_session, principal_for(alice))
        created = service.create_recipe(_recipe_payload())
        new_ingredients = [{"name": "Tofu", "quantity": 1, "unit": "PIECE", "orderIndex": 0}]

        updated = service.update_recipe(
            created.id, RecipeUpdate.model_validate({"ingredients": new_ingredients})
        )

        assert [i.name for i in updated.ingredients] == ["Tofu"]

    def test_move_into_foreign_group_is_forbidden(self, db_session, carol, make_recipe, family_group):
        recipe = make_recipe(carol)

        with pytest.raises(ForbiddenError):
            RecipeService(db_session, principal_for(carol)).update_recipe(
                recipe.id, RecipeUpdate(family_group_id=family_group.id)
            )

    def test_only_creator_moves_group_recipe_to_personal(
        self, db_session, alice, bob, family_group, make_recipe
    ):
        recipe = make_recipe(alice, family_group)

        with pytest.raises(ForbiddenError):
            RecipeService(db_session, principal_for(bob)).update_recipe(
                recipe.id, RecipeUpdate.model_validate({"familyGroupId": None})
            )

        moved = RecipeService(db_session, principal_for(alice)).update_recipe(
            recipe.id, RecipeUpdate.model_validate({"familyGroupId": None})
        )
        assert moved.family_group_id is None


class TestRecipeDelete:

    def test_delete(self, db_session, alice, make_recipe):
        recipe = make_recipe(alice)
        service = RecipeService(db_session, principal_for(alice))

        service.delete_recipe(recipe.id)

        with pytest.raises(NotFoundError):
            service.get_recipe(recipe.id)

    def test_outsider_cannot_delete(self, db_session, alice, carol, family_group, make_recipe):
        recipe = make_recipe(alice, family_group)

        with pytest.raises(NotFoundError):
            RecipeService(db_session, principal_for(carol)).delete_recipe(recipe.id)
