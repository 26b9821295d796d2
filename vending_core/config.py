from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

from vending_core.models import Coin, Inventory, InventoryItem

logger = logging.getLogger(__name__)

# US nickel, dime, quarter
DEFAULT_COINS: Tuple[Coin, ...] = (
    Coin(weight=Decimal("5.000"), value=5),
    Coin(weight=Decimal("2.268"), value=10),
    Coin(weight=Decimal("5.670"), value=25),
)


def _field(row: Dict[str, Any], name: str, where: str) -> Any:
    if not isinstance(row, dict):
        raise ValueError(f"{where}: expected an object, got {type(row).__name__}")
    if name not in row:
        raise ValueError(f"{where}: missing '{name}'")
    return row[name]


def _non_negative_int(raw: Any, name: str, where: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{where}: '{name}' must be an integer, got {raw!r}")
    if raw < 0:
        raise ValueError(f"{where}: '{name}' must be >= 0, got {raw}")
    return raw


def coins_from_data(rows: Sequence[Dict[str, Any]]) -> List[Coin]:
    """
    Build the accepted-coin catalog from rows like {"weight": "5.000", "value": 5}.

    Weights are read through str() so JSON floats keep their written digits.
    """
    if not isinstance(rows, (list, tuple)):
        raise ValueError(f"coins: expected a list, got {type(rows).__name__}")

    coins: List[Coin] = []
    seen_values = set()
    seen_weights = set()

    for i, row in enumerate(rows):
        where = f"coin #{i}"
        try:
            weight = Decimal(str(_field(row, "weight", where)))
        except InvalidOperation:
            raise ValueError(f"{where}: bad weight {row['weight']!r}") from None
        if not weight.is_finite() or weight <= 0:
            raise ValueError(f"{where}: weight must be > 0, got {weight}")

        value = _non_negative_int(_field(row, "value", where), "value", where)
        if value == 0:
            raise ValueError(f"{where}: value must be > 0")
        if value in seen_values:
            raise ValueError(f"{where}: duplicate coin value {value}")
        if weight in seen_weights:
            raise ValueError(f"{where}: duplicate coin weight {weight}")

        seen_values.add(value)
        seen_weights.add(weight)
        coins.append(Coin(weight=weight, value=value))

    return coins


def inventory_from_data(data: Dict[str, Dict[str, Any]]) -> Inventory:
    if not isinstance(data, dict):
        raise ValueError(f"inventory: expected an object, got {type(data).__name__}")
    inventory: Inventory = {}
    for key, row in data.items():
        where = f"slot {key}"
        name = _field(row, "name", where)
        if not isinstance(name, str) or not name:
            raise ValueError(f"{where}: 'name' must be a non-empty string")
        inventory[key] = InventoryItem(
            name=name,
            price=_non_negative_int(_field(row, "price", where), "price", where),
            quantity=_non_negative_int(_field(row, "quantity", where), "quantity", where),
        )
    return inventory


def load_config(path: Union[str, Path]) -> Tuple[List[Coin], Inventory]:
    """
    Read {"coins": [...], "inventory": {...}} from a JSON file.

    "coins" is optional and falls back to DEFAULT_COINS.
    """
    with open(path, "r") as config_file:
        try:
            config = json.load(config_file)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON ({e})") from e

    if not isinstance(config, dict):
        raise ValueError(f"{path}: top level must be an object")

    if "coins" in config:
        coins = coins_from_data(config["coins"])
    else:
        coins = list(DEFAULT_COINS)
    inventory = inventory_from_data(config.get("inventory", {}))

    logger.info(f"config loaded from {path}: coins={len(coins)} slots={len(inventory)}")
    return coins, inventory
