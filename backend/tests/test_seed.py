"""Tests for the fixture seeding script."""

import json

import pytest

from crud import ingredients as crud_ingredients
from crud import inventory_batches as crud_inventory_batches
from crud import menu_items as crud_menu_items
from exceptions import ValidationError
from schemas.ingredient import IngredientCreate
from scripts.seed import seed, load_fixture, DATA_DIR
from utils.stock_status import stock_status


def test_seed_loads_bundled_fixtures(database):
    menu_data = load_fixture(DATA_DIR, "menu_items.json")
    ingredient_data = load_fixture(DATA_DIR, "ingredients.json")

    counts = seed(database)

    assert counts["menu_items"] == len(menu_data)
    assert counts["ingredients"] == len(ingredient_data)
    assert counts["inventory_batches"] == sum(len(i["batches"]) for i in ingredient_data)
    with database.session_scope() as db:
        assert len(crud_menu_items.get_active_menu_items(db)) == len(menu_data)
        assert len(crud_ingredients.get_ingredients(db)) == len(ingredient_data)
        assert len(crud_inventory_batches.get_batches(db)) == counts["inventory_batches"]


def test_seeding_twice_replaces_existing_data(database):
    with database.session_scope() as db:
        crud_ingredients.create_ingredient(db, IngredientCreate(name="Milk", required_amount=20, unit="liters"))

    first = seed(database)
    second = seed(database)

    assert first == second
    with database.session_scope() as db:
        names = [i.name for i in crud_ingredients.get_ingredients(db)]
        assert "Milk" not in names
        assert len(names) == second["ingredients"]
        assert len(crud_inventory_batches.get_batches(db)) == second["inventory_batches"]


def write_fixtures(path, menu_items, ingredients):
    (path / "menu_items.json").write_text(json.dumps(menu_items))
    (path / "ingredients.json").write_text(json.dumps(ingredients))


def test_seeded_batches_drive_stock_status(database, tmp_path):
    write_fixtures(tmp_path, [], [
        {"name": "Milk", "required_amount": 20, "unit": "liters", "batches": [
            {"initial_amount": 3, "total_cost": 4.5, "expires_in_days": 2},
        ]},
        {"name": "Cocoa", "required_amount": 2, "unit": "kg", "batches": []},
    ])

    counts = seed(database, data_dir=str(tmp_path))

    assert counts == {"menu_items": 0, "ingredients": 2, "inventory_batches": 1}
    with database.session_scope() as db:
        ingredients = {i.name: i for i in crud_ingredients.get_ingredients(db)}
        batches = crud_inventory_batches.get_batches(db)
        assert stock_status(ingredients["Milk"], batches) == "low-stock"
        assert stock_status(ingredients["Cocoa"], batches) == "out-of-stock"
        assert batches[0].freshness == "expiring-soon"


def test_invalid_fixture_is_rejected(database, tmp_path):
    write_fixtures(tmp_path, [{"name": "Latte", "category": "Coffee"}], [])
    with pytest.raises(ValidationError):
        seed(database, data_dir=str(tmp_path))
