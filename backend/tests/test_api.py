"""Integration tests through the HTTP API."""

from datetime import timedelta

from crud import ingredients as crud_ingredients
from crud import inventory_batches as crud_inventory_batches
from utils.clock import today

INGREDIENTS = "/api/inventory/ingredients/"
INVENTORY = "/api/inventory/"


def create_ingredient(client, name="Milk", required_amount=20, unit="liters"):
    res = client.post(INGREDIENTS, json={"name": name, "required_amount": required_amount, "unit": unit})
    assert res.status_code == 201
    return res.json()


def create_batch(client, ingredient_id, amount=5, days_to_expiry=10, total_cost=12.5):
    res = client.post(INVENTORY, json={
        "ingredient_id": ingredient_id,
        "initial_amount": amount,
        "expiration_date": (today() + timedelta(days=days_to_expiry)).isoformat(),
        "total_cost": total_cost,
    })
    assert res.status_code == 201
    return res.json()


def stock_of(client, name):
    res = client.get(INGREDIENTS)
    assert res.status_code == 200
    return {i["name"]: i for i in res.json()}[name]


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "message" in res.json()


class TestIngredientEndpoints:

    def test_milk_stock_lifecycle(self, client):
        milk = create_ingredient(client)
        assert stock_of(client, "Milk")["stock_status"] == "out-of-stock"

        batch = create_batch(client, milk["id"], amount=5)
        assert batch["ingredient"]["name"] == "Milk"
        assert batch["current_amount"] == 5
        assert stock_of(client, "Milk")["stock_status"] == "in-stock"

        res = client.patch(f"{INVENTORY}{batch['id']}/use", json={"amount": 4})
        assert res.status_code == 200
        assert res.json()["current_amount"] == 1
        milk_row = stock_of(client, "Milk")
        assert milk_row["stock_status"] == "low-stock"
        assert milk_row["total_current_amount"] == 1

    def test_missing_field_is_400(self, client):
        res = client.post(INGREDIENTS, json={"name": "Milk", "unit": "liters"})
        assert res.status_code == 400

    def test_non_finite_required_amount_is_400(self, client):
        # json.loads on the server accepts bare NaN and Infinity
        for literal in ("NaN", "Infinity"):
            res = client.post(
                INGREDIENTS,
                content='{"name": "Milk", "required_amount": ' + literal + ', "unit": "liters"}',
                headers={"Content-Type": "application/json"},
            )
            assert res.status_code == 400
        assert client.get(INGREDIENTS).json() == []

    def test_duplicate_name_is_409(self, client):
        create_ingredient(client, name="Milk")
        res = client.post(INGREDIENTS, json={"name": "milk", "required_amount": 3, "unit": "l"})
        assert res.status_code == 409

    def test_search_and_status_filters(self, client):
        milk = create_ingredient(client, name="Milk")
        create_ingredient(client, name="Oat Milk")
        create_ingredient(client, name="Sugar")
        create_batch(client, milk["id"], amount=10)

        res = client.get(INGREDIENTS, params={"search": "milk"})
        assert [i["name"] for i in res.json()] == ["Milk", "Oat Milk"]

        res = client.get(INGREDIENTS, params={"stock_status": "out-of-stock"})
        assert [i["name"] for i in res.json()] == ["Oat Milk", "Sugar"]

    def test_unknown_stock_filter_is_rejected(self, client):
        res = client.get(INGREDIENTS, params={"stock_status": "plenty"})
        assert res.status_code == 422

    def test_update(self, client):
        milk = create_ingredient(client)
        res = client.put(f"{INGREDIENTS}{milk['id']}", json={"required_amount": "40", "name": " Whole Milk "})
        assert res.status_code == 200
        data = res.json()
        assert data["name"] == "Whole Milk"
        assert data["required_amount"] == 40

    def test_update_malformed_id_is_404(self, client):
        res = client.put(f"{INGREDIENTS}abc", json={"unit": "kg"})
        assert res.status_code == 404

    def test_delete_cascades(self, client):
        milk = create_ingredient(client)
        create_batch(client, milk["id"])
        create_batch(client, milk["id"])

        res = client.delete(f"{INGREDIENTS}{milk['id']}")
        assert res.status_code == 200
        assert res.json()["batches_removed"] == 2

        batches = client.get(INVENTORY).json()
        assert all(b["ingredient_id"] != milk["id"] for b in batches)
        assert client.get(f"{INVENTORY}orphans").json() == []

    def test_delete_unknown_is_404(self, client):
        assert client.delete(f"{INGREDIENTS}4242").status_code == 404


class TestInventoryEndpoints:

    def test_create_for_unknown_ingredient_is_404(self, client):
        res = client.post(INVENTORY, json={
            "ingredient_id": 99, "initial_amount": 1, "expiration_date": today().isoformat(), "total_cost": 1,
        })
        assert res.status_code == 404

    def test_create_missing_field_is_400(self, client):
        milk = create_ingredient(client)
        res = client.post(INVENTORY, json={"ingredient_id": milk["id"], "initial_amount": 1})
        assert res.status_code == 400

    def test_freshness_is_reported(self, client):
        milk = create_ingredient(client)
        expired = create_batch(client, milk["id"], days_to_expiry=-1)
        soon = create_batch(client, milk["id"], days_to_expiry=3)
        fresh = create_batch(client, milk["id"], days_to_expiry=10)
        by_id = {b["id"]: b["freshness"] for b in client.get(INVENTORY).json()}
        assert by_id == {expired["id"]: "expired", soon["id"]: "expiring-soon", fresh["id"]: "fresh"}

    def test_use_until_depleted(self, client):
        milk = create_ingredient(client)
        batch = create_batch(client, milk["id"], amount=2)

        res = client.patch(f"{INVENTORY}{batch['id']}/use", json={"amount": 10})
        assert res.status_code == 200
        assert res.json()["current_amount"] == 0
        assert res.json()["finished_at"] is not None

        res = client.patch(f"{INVENTORY}{batch['id']}/use", json={"amount": 1})
        assert res.status_code == 400
        assert res.json()["detail"] == "This batch is already depleted."

    def test_use_requires_positive_amount(self, client):
        milk = create_ingredient(client)
        batch = create_batch(client, milk["id"])
        assert client.patch(f"{INVENTORY}{batch['id']}/use", json={"amount": 0}).status_code == 400
        assert client.patch(f"{INVENTORY}{batch['id']}/use", json={}).status_code == 400

    def test_use_unknown_batch_is_404(self, client):
        assert client.patch(f"{INVENTORY}555/use", json={"amount": 1}).status_code == 404

    def test_update_and_delete(self, client):
        milk = create_ingredient(client)
        batch = create_batch(client, milk["id"])

        res = client.put(f"{INVENTORY}{batch['id']}", json={"current_amount": 3, "total_cost": 9})
        assert res.status_code == 200
        assert res.json()["current_amount"] == 3
        assert res.json()["total_cost"] == 9

        assert client.delete(f"{INVENTORY}{batch['id']}").status_code == 200
        assert client.delete(f"{INVENTORY}{batch['id']}").status_code == 404

    def test_paginated_view(self, client):
        milk = create_ingredient(client, name="Milk")
        beans = create_ingredient(client, name="Coffee Beans")
        for _ in range(23):
            create_batch(client, milk["id"])
        create_batch(client, beans["id"], days_to_expiry=-3)

        res = client.get(f"{INVENTORY}view", params={"ingredient_id": milk["id"], "page": 3})
        data = res.json()
        assert data["total_items"] == 23
        assert data["total_pages"] == 3
        assert data["page"] == 3
        assert len(data["items"]) == 3

        res = client.get(f"{INVENTORY}view", params={"ingredient_id": milk["id"], "page": 50})
        assert res.json()["page"] == 3

        res = client.get(f"{INVENTORY}view", params={"ingredient_id": milk["id"], "page": 4, "current_page": 2})
        assert res.json()["page"] == 2
        res = client.get(f"{INVENTORY}view", params={"ingredient_id": milk["id"], "page": 1, "current_page": 2})
        assert res.json()["page"] == 1

        res = client.get(f"{INVENTORY}view", params={"freshness": "expired"})
        data = res.json()
        assert data["total_items"] == 1
        assert data["items"][0]["ingredient"]["name"] == "Coffee Beans"

        res = client.get(f"{INVENTORY}view", params={"search": "milk"})
        page_one = res.json()
        assert len(page_one["items"]) == 10
        ids = [b["id"] for b in page_one["items"]]
        assert ids == sorted(ids, reverse=True)

    def test_reconcile_with_nothing_to_do(self, client):
        res = client.post(f"{INVENTORY}reconcile")
        assert res.status_code == 200
        assert res.json() == {"batches_removed": 0}


class TestMenuEndpoints:

    def test_menu_item_lifecycle(self, client):
        res = client.post("/api/menu/", json={"name": "Latte", "price": "4.50", "category": "Coffee"})
        assert res.status_code == 201
        latte = res.json()
        assert latte["is_active"] is True
        assert latte["in_stock"] is True
        assert latte["instructions"] == ""
        assert latte["created_at"] == latte["modified_at"]

        res = client.put(f"/api/menu/{latte['id']}", json={"price": 5})
        assert res.json()["price"] == 5

        res = client.put(f"/api/menu/{latte['id']}/archive")
        assert res.json()["is_active"] is False
        assert client.get("/api/menu/").json() == []
        assert [i["name"] for i in client.get("/api/menu/archive").json()] == ["Latte"]

        res = client.put(f"/api/menu/{latte['id']}/restore")
        assert res.json()["in_stock"] is True
        assert [i["name"] for i in client.get("/api/menu/").json()] == ["Latte"]

        assert client.delete(f"/api/menu/{latte['id']}").status_code == 200
        assert client.get(f"/api/menu/{latte['id']}").status_code == 404

    def test_missing_fields_is_400(self, client):
        assert client.post("/api/menu/", json={"name": "Mocha"}).status_code == 400

    def test_negative_or_non_finite_price_is_400(self, client):
        assert client.post("/api/menu/", json={"name": "Mocha", "price": -1, "category": "Coffee"}).status_code == 400
        res = client.post(
            "/api/menu/",
            content='{"name": "Mocha", "price": Infinity, "category": "Coffee"}',
            headers={"Content-Type": "application/json"},
        )
        assert res.status_code == 400

    def test_unknown_item_is_404(self, client):
        assert client.put("/api/menu/9999/archive").status_code == 404


class TestUnexpectedFailures:

    @staticmethod
    def fail(*args, **kwargs):
        raise RuntimeError("connection reset")

    def test_ingredient_create_and_update_return_500(self, client, monkeypatch):
        milk = create_ingredient(client)
        monkeypatch.setattr(crud_ingredients, "create_ingredient", self.fail)
        monkeypatch.setattr(crud_ingredients, "update_ingredient", self.fail)

        res = client.post(INGREDIENTS, json={"name": "Sugar", "required_amount": 1, "unit": "kg"})
        assert res.status_code == 500
        assert res.json()["detail"] == "Failed to create ingredient."
        res = client.put(f"{INGREDIENTS}{milk['id']}", json={"unit": "kg"})
        assert res.status_code == 500

    def test_batch_routes_return_500(self, client, monkeypatch):
        milk = create_ingredient(client)
        batch = create_batch(client, milk["id"])
        for name in ("create_batch", "update_batch", "use_batch", "delete_batch"):
            monkeypatch.setattr(crud_inventory_batches, name, self.fail)

        res = client.post(INVENTORY, json={
            "ingredient_id": milk["id"], "initial_amount": 1,
            "expiration_date": today().isoformat(), "total_cost": 1,
        })
        assert res.status_code == 500
        assert client.put(f"{INVENTORY}{batch['id']}", json={"current_amount": 2}).status_code == 500
        res = client.patch(f"{INVENTORY}{batch['id']}/use", json={"amount": 1})
        assert res.status_code == 500
        assert res.json()["detail"] == "Failed to record usage."
        assert client.delete(f"{INVENTORY}{batch['id']}").status_code == 500
