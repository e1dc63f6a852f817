"""
End-to-end API scenarios: family recipes, menu planning and sharing.

Scenario actors: alice and bob share family group G; carol is an outsider.
"""

import pytest

from shared.config.constants import ErrorMessages


def _create_recipe(client, headers, **overrides) -> dict:
    body = {
        "name": "Mapo Tofu",
        "category": "MEAT",
        "difficulty": "MEDIUM",
        "ingredients": [{"name": "豆腐", "quantity": 1, "unit": "PIECE", "orderIndex": 0}],
        "steps": [{"description": "Simmer", "orderIndex": 0}],
        "tags": ["spicy"],
    }
    body.update(overrides)
    response = client.post("/recipes", json=body, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()


def _create_menu(client, headers, **overrides) -> dict:
    body = {"name": "Week 1", "type": "WEEKLY", "startDate": "2024-01-01", "endDate": "2024-01-07"}
    body.update(overrides)
    response = client.post("/menus", json=body, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()


class TestFamilyScenario:

    def test_group_recipe_visibility(self, client, alice_headers, bob_headers, carol_headers, family_group):
        recipe = _create_recipe(client, alice_headers, familyGroupId=family_group.id)

        bob_view = client.get("/recipes", headers=bob_headers)
        carol_view = client.get("/recipes", headers=carol_headers)

        assert recipe["id"] in [r["id"] for r in bob_view.json()]
        assert recipe["id"] not in [r["id"] for r in carol_view.json()]
        assert client.get(f"/recipes/{recipe['id']}", headers=carol_headers).status_code == 404

    def test_recipe_round_trip_keeps_non_ascii(self, client, alice_headers):
        recipe = _create_recipe(client, alice_headers)

        fetched = client.get(f"/recipes/{recipe['id']}", headers=alice_headers).json()

        assert fetched["ingredients"] == [
            {"name": "豆腐", "quantity": 1.0, "unit": "PIECE", "orderIndex": 0}
        ]
        assert fetched["steps"] == [{"description": "Simmer", "orderIndex": 0, "duration": None}]

    def test_create_join_and_leave(self, client, alice_headers, carol_headers):
        group = client.post("/family", json={"name": "Book Club"}, headers=alice_headers).json()
        assert group["role"] == "admin"

        joined = client.post(
            "/family/join", json={"inviteCode": group["inviteCode"]}, headers=carol_headers
        )
        assert joined.status_code == 200

        detail = client.get(f"/family/{group['id']}", headers=alice_headers).json()
        carol_id = next(m["userId"] for m in detail["members"] if m["userName"] == "carol")

        left = client.delete(f"/family/{group['id']}/members/{carol_id}", headers=carol_headers)
        assert left.json() == {"success": True}
        assert client.get("/family", headers=carol_headers).json() == []

    def test_non_member_gets_forbidden(self, client, carol_headers, family_group):
        response = client.get(f"/family/{family_group.id}", headers=carol_headers)

        assert response.status_code == 403
        assert response.json()["code"] == 403

    def test_recipe_list_limit_is_capped(self, client, alice_headers):
        response = client.get("/recipes", params={"limit": 51}, headers=alice_headers)

        assert response.status_code == 400


class TestRecipeCounters:
    """favorites and rating are server-maintained."""

    def test_counters_are_not_accepted_from_input(self, client, alice_headers):
        created = _create_recipe(client, alice_headers, favorites=99, rating=5)

        assert created["favorites"] == 0
        assert created["rating"] == 0

    def test_update_keeps_counters(self, client, alice, alice_headers, make_recipe):
        recipe = make_recipe(alice, favorites=7, rating=4.5)

        response = client.put(
            f"/recipes/{recipe.id}",
            json={"name": "Renamed", "favorites": 0, "rating": 1},
            headers=alice_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Renamed"
        assert body["favorites"] == 7
        assert body["rating"] == 4.5


class TestMenuScenario:

    def test_menu_planning(self, client, alice_headers, carol_headers):
        recipe = _create_recipe(client, alice_headers)
        foreign = _create_recipe(client, carol_headers, name="Carol's Curry")
        menu = _create_menu(client, alice_headers)

        out_of_range = client.post(
            f"/menus/{menu['id']}/items",
            json={"recipeId": recipe["id"], "date": "2024-01-08", "mealTime": "LUNCH"},
            headers=alice_headers,
        )
        invisible = client.post(
            f"/menus/{menu['id']}/items",
            json={"recipeId": foreign["id"], "date": "2024-01-03", "mealTime": "LUNCH"},
            headers=alice_headers,
        )
        added = client.post(
            f"/menus/{menu['id']}/items",
            json={"recipeId": recipe["id"], "date": "2024-01-03", "mealTime": "LUNCH"},
            headers=alice_headers,
        )

        assert out_of_range.status_code == 400
        assert out_of_range.json()["message"] == ErrorMessages.DATE_OUT_OF_RANGE
        assert invisible.status_code == 404
        assert added.status_code == 201
        assert added.json()["recipe"]["name"] == "Mapo Tofu"

    def test_get_menu_returns_items_with_recipes(self, client, alice_headers):
        recipe = _create_recipe(client, alice_headers)
        menu = _create_menu(client, alice_headers)
        client.post(
            f"/menus/{menu['id']}/items",
            json={"recipeId": recipe["id"], "date": "2024-01-03", "mealTime": "LUNCH"},
            headers=alice_headers,
        )

        response = client.get(f"/menus/{menu['id']}", headers=alice_headers)

        assert response.status_code == 200
        items = response.json()["items"]
        assert [i["mealTime"] for i in items] == ["LUNCH"]
        assert items[0]["recipe"] == {
            "id": recipe["id"],
            "name": "Mapo Tofu",
            "description": None,
            "category": "MEAT",
            "difficulty": "MEDIUM",
        }

    def test_inverted_range_is_rejected(self, client, alice_headers):
        response = client.post(
            "/menus",
            json={"name": "Backwards", "startDate": "2024-01-07", "endDate": "2024-01-01"},
            headers=alice_headers,
        )

        assert response.status_code == 400
        assert client.get("/menus", headers=alice_headers).json() == {"menus": [], "total": 0}

    def test_personal_menu_is_private(self, client, alice_headers, bob_headers, family_group):
        menu = _create_menu(client, alice_headers)

        response = client.put(f"/menus/{menu['id']}", json={"name": "Mine now"}, headers=bob_headers)

        assert response.status_code == 403
        assert response.json() == {"message": ErrorMessages.NOT_OWNER, "code": 403}

    def test_list_menus_by_group(self, client, alice_headers, bob_headers, family_group):
        menu = _create_menu(client, alice_headers, familyGroupId=family_group.id)

        response = client.get("/menus", params={"familyGroupId": family_group.id}, headers=bob_headers)

        assert response.status_code == 200
        assert response.json()["total"] == 1
        assert response.json()["menus"][0]["id"] == menu["id"]

    def test_update_and_delete_item(self, client, alice_headers):
        recipe = _create_recipe(client, alice_headers)
        menu = _create_menu(client, alice_headers)
        item = client.post(
            f"/menus/{menu['id']}/items",
            json={"recipeId": recipe["id"], "date": "2024-01-02", "mealTime": "DINNER"},
            headers=alice_headers,
        ).json()

        updated = client.put(
            f"/menus/{menu['id']}/items/{item['id']}",
            json={"servings": 6, "note": "guests"},
            headers=alice_headers,
        )
        deleted = client.delete(f"/menus/{menu['id']}/items/{item['id']}", headers=alice_headers)

        assert updated.json()["servings"] == 6
        assert deleted.json() == {"success": True}
        assert client.get(f"/menus/{menu['id']}/items", headers=alice_headers).json() == []

    def test_null_for_required_patch_field(self, client, alice_headers):
        menu = _create_menu(client, alice_headers)

        response = client.put(f"/menus/{menu['id']}", json={"name": None}, headers=alice_headers)

        assert response.status_code == 400


class TestShareScenario:

    @pytest.fixture
    def shared_menu(self, client, alice_headers):
        recipe = _create_recipe(client, alice_headers)
        menu = _create_menu(client, alice_headers)
        share = client.post(
            f"/menus/{menu['id']}/shares",
            json={"shareType": "TOKEN", "allowEdit": True},
            headers=alice_headers,
        ).json()
        return recipe, menu, share

    def test_guest_adds_item_with_share_token(self, client, shared_menu):
        recipe, menu, share = shared_menu

        response = client.post(
            f"/menus/{menu['id']}/items",
            json={"recipeId": recipe["id"], "date": "2024-01-02", "mealTime": "DINNER"},
            headers={"X-Share-Token": share["token"]},
        )

        assert response.status_code == 201

    def test_wrong_share_token_is_unauthenticated(self, client, shared_menu):
        recipe, menu, _ = shared_menu

        response = client.post(
            f"/menus/{menu['id']}/items",
            json={"recipeId": recipe["id"], "date": "2024-01-02", "mealTime": "DINNER"},
            headers={"X-Share-Token": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == ErrorMessages.INVALID_SHARE_TOKEN

    def test_share_token_does_not_open_menu_endpoints(self, client, shared_menu):
        _, menu, share = shared_menu

        response = client.get(f"/menus/{menu['id']}", headers={"X-Share-Token": share["token"]})

        assert response.status_code == 401

    def test_public_retrieval(self, client, shared_menu):
        _, menu, share = shared_menu

        for path in (f"/shared/{share['id']}", f"/menus/{share['id']}/shared"):
            assert client.get(path, params={"token": share["token"]}).json()["id"] == menu["id"]
            assert client.get(path).status_code == 403

    def test_revoked_share_stops_working(self, client, alice_headers, shared_menu):
        recipe, menu, share = shared_menu

        revoked = client.delete(f"/menus/share/{share['id']}", headers=alice_headers)
        response = client.get(f"/menus/{menu['id']}/items", headers={"X-Share-Token": share["token"]})

        assert revoked.json() == {"success": True}
        assert response.status_code == 401

    def test_list_shares(self, client, alice_headers, shared_menu):
        _, menu, share = shared_menu

        response = client.get(f"/menus/{menu['id']}/shares", headers=alice_headers)

        assert [s["id"] for s in response.json()] == [share["id"]]
