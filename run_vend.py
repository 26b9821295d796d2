from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from vending_core.config import DEFAULT_COINS, load_config
from vending_core.controller import VendingController
from vending_core.models import Inventory, InventoryItem


def seed_inventory() -> Inventory:
    return {
        "A1": InventoryItem(name="cola", price=100, quantity=5),
        "B1": InventoryItem(name="chips", price=50, quantity=5),
        "C1": InventoryItem(name="candy", price=65, quantity=5),
    }


def parse_stock(entry: str) -> tuple[int, int]:
    raw_value, sep, raw_count = entry.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected VALUE=COUNT, got {entry!r}")
    try:
        value, count = int(raw_value), int(raw_count)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in {entry!r}") from None
    if count < 0:
        raise argparse.ArgumentTypeError(f"coin count must be >= 0 in {entry!r}")
    return value, count


def main(argv: Optional[List[str]] = None) -> None:
    # bare messages, the harness output is read by people at the machine
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    p = argparse.ArgumentParser(description="Run one vending transaction and print the machine state.")
    p.add_argument("--config", type=str, default=None, help="JSON file with coins and inventory")
    p.add_argument("--stock", type=parse_stock, action="append", default=[], help="Hopper count, e.g. 25=10")
    p.add_argument("--insert", type=str, action="append", default=[], help="Measured coin weight in grams")
    p.add_argument("--select", type=str, default=None, help="Slot key, e.g. A1")
    p.add_argument("--eject", action="store_true", help="Press eject after the other steps")
    args = p.parse_args(argv)

    if args.config:
        coins, inventory = load_config(args.config)
    else:
        coins, inventory = list(DEFAULT_COINS), seed_inventory()

    machine = VendingController(coins, inventory)
    for value, count in args.stock:
        machine.coin_inv[value] = count
    if args.stock:
        machine.reset_machine()

    for weight in args.insert:
        machine.insert_coin(weight)

    change = []
    if args.select:
        change = machine.select_item(args.select)
    if args.eject:
        machine.eject_coins()

    print("\n=== RESULT ===")
    print("display:", machine.display)
    print("change:", [coin.value for coin in change])
    print("coin stock:", machine.coin_inv)
    print("inventory:", machine.inventory)


if __name__ == "__main__":
    main()
