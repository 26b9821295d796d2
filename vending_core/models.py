from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict


@dataclass(frozen=True, slots=True)
class Coin:
    """Accepted denomination: weight in grams, value in minor units (cents)."""

    weight: Decimal
    value: int


@dataclass(slots=True)
class InventoryItem:
    name: str
    price: int
    quantity: int


# slot key ("A1") -> item
Inventory = Dict[str, InventoryItem]

# coin value -> count of that coin in the change reservoir
CoinInventory = Dict[int, int]


class DisplayText(str, Enum):
    INSERT_COINS = "INSERT COINS"
    EXACT_CHANGE_ONLY = "EXACT CHANGE ONLY"
    SOLD_OUT = "SOLD OUT"
    THANKS = "THANKS"
