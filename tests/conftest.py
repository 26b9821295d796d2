"""Pytest fixtures for the vending controller."""

import pytest

from vending_core.config import DEFAULT_COINS
from vending_core.controller import VendingController
from vending_core.models import InventoryItem


@pytest.fixture
def inventory():
    return {
        "A1": InventoryItem(name="chips", price=65, quantity=3),
        "A2": InventoryItem(name="cola", price=100, quantity=10),
        "B1": InventoryItem(name="candy", price=50, quantity=0),  # Out of stock
    }


@pytest.fixture
def machine(inventory) -> VendingController:
    return VendingController(DEFAULT_COINS, inventory)


@pytest.fixture
def stocked_machine(machine) -> VendingController:
    """Hopper already reconciled with 10 of each coin."""
    for value in machine.coin_inv:
        machine.coin_inv[value] = 10
    machine.reset_machine()
    return machine
