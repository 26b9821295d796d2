"""Tests for loading the coin catalog and inventory from JSON."""
import json
from decimal import Decimal

import pytest

from vending_core.config import DEFAULT_COINS, coins_from_data, inventory_from_data, load_config
from vending_core.controller import VendingController
from vending_core.models import Coin, InventoryItem


def _write(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_load_full_config(tmp_path):
    path = _write(
        tmp_path,
        {
            "coins": [{"weight": "3.56", "value": 1}, {"weight": 7.5, "value": 20}],
            "inventory": {"A1": {"name": "water", "price": 120, "quantity": 4}},
        },
    )

    coins, inventory = load_config(path)

    assert coins == [Coin(Decimal("3.56"), 1), Coin(Decimal("7.5"), 20)]
    assert inventory == {"A1": InventoryItem(name="water", price=120, quantity=4)}

    machine = VendingController(coins, inventory)
    assert machine.insert_coin(7.5) is True
    assert machine.coin_inv == {1: 0, 20: 0}


def test_missing_coins_fall_back_to_default(tmp_path):
    path = _write(tmp_path, {"inventory": {}})

    coins, inventory = load_config(path)

    assert coins == list(DEFAULT_COINS)
    assert inventory == {}


def test_invalid_json_is_value_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ValueError, match="invalid JSON"):
        load_config(path)


def test_top_level_must_be_object(tmp_path):
    with pytest.raises(ValueError, match="top level"):
        load_config(_write(tmp_path, [1, 2]))


@pytest.mark.parametrize(
    "rows,message",
    [
        ([{"value": 5}], "missing 'weight'"),
        ([{"weight": "5.0"}], "missing 'value'"),
        ([{"weight": "abc", "value": 5}], "bad weight"),
        ([{"weight": "0", "value": 5}], "weight must be > 0"),
        ([{"weight": "5.0", "value": 0}], "value must be > 0"),
        ([{"weight": "5.0", "value": -5}], "must be >= 0"),
        ([{"weight": "5.0", "value": 2.5}], "must be an integer"),
        ([{"weight": "5.0", "value": 5}, {"weight": "6.0", "value": 5}], "duplicate coin value"),
        ([{"weight": "5.0", "value": 5}, {"weight": "5.000", "value": 10}], "duplicate coin weight"),
    ],
)
def test_bad_coin_rows(rows, message):
    with pytest.raises(ValueError, match=message):
        coins_from_data(rows)


@pytest.mark.parametrize(
    "row,message",
    [
        ({"price": 5, "quantity": 1}, "missing 'name'"),
        ({"name": "", "price": 5, "quantity": 1}, "'name' must be a non-empty string"),
        ({"name": "gum", "quantity": 1}, "missing 'price'"),
        ({"name": "gum", "price": -1, "quantity": 1}, "'price' must be >= 0"),
        ({"name": "gum", "price": 5, "quantity": True}, "'quantity' must be an integer"),
    ],
)
def test_bad_inventory_rows(row, message):
    with pytest.raises(ValueError, match=f"slot C3: {message}"):
        inventory_from_data({"C3": row})


@pytest.mark.parametrize(
    "data,message",
    [
        ({"coins": [5]}, "coin #0: expected an object, got int"),
        ({"coins": {"weight": "5.0", "value": 5}}, "coins: expected a list, got dict"),
        ({"coins": "5.0"}, "coins: expected a list, got str"),
        ({"inventory": [{"name": "gum", "price": 5, "quantity": 1}]}, "inventory: expected an object, got list"),
        ({"inventory": {"A1": "gum"}}, "slot A1: expected an object, got str"),
        ({"inventory": {"A1": None}}, "slot A1: expected an object, got NoneType"),
    ],
)
def test_wrongly_shaped_config_is_value_error(tmp_path, data, message):
    """Structural mistakes surface as ValueError naming the entry."""
    with pytest.raises(ValueError, match=message):
        load_config(_write(tmp_path, data))
