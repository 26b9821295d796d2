from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Sequence, Union

from vending_core.models import Coin, CoinInventory, DisplayText, Inventory, InventoryItem

logger = logging.getLogger(__name__)

Weight = Union[Decimal, int, float, str]

# every denomination needs at least this many coins in stock to leave exact-change mode
MIN_COINS_FOR_CHANGE = 5


def _as_weight(weight: Weight) -> Decimal:
    if isinstance(weight, float):
        return Decimal(str(weight))
    return Decimal(weight)


class VendingController:
    """
    Transaction logic of a coin-operated vending machine.

    Holds three pieces of state:
    - inserted_coins: coins accepted in the current transaction, not yet committed
    - coin_inv: change reservoir, coin value -> count
    - inventory: slot key -> item, mutated in place on dispense

    Operations never raise; failures come back as False / empty change plus a
    display update. The hardware harness reads `display`, dispenses the
    returned change and reconciles `coin_inv` with the physical hopper.
    """

    def __init__(self, accepted_coins: Sequence[Coin], inventory: Inventory) -> None:
        self.accepted_coins: List[Coin] = list(accepted_coins)
        self.inventory = inventory
        self.inserted_coins: List[Coin] = []
        self.coin_inv: CoinInventory = self.create_coin_inventory_record()
        self.last_dispensed_item: Optional[InventoryItem] = None

        self.logs: List[str] = []

        self._display = self._check_for_exact_change_mode()
        self.log(f"machine ready: coins={len(self.accepted_coins)} slots={len(self.inventory)} display={self._display}")

    def log(self, message: str) -> None:
        self.logs.append(message)
        logger.info(message)

    @property
    def display(self) -> str:
        return self._display

    @property
    def coin_inv_indexes(self) -> List[int]:
        return [int(value) for value in self.coin_inv]

    @property
    def inserted_coins_value(self) -> int:
        return sum(coin.value for coin in self.inserted_coins)

    @property
    def able_to_make_change(self) -> bool:
        """Heuristic: at least MIN_COINS_FOR_CHANGE of every denomination."""
        return all(count >= MIN_COINS_FOR_CHANGE for count in self.coin_inv.values())

    def create_coin_inventory_record(self) -> CoinInventory:
        """
        Empty stock for every accepted denomination.

        The software cannot know what is in the hopper at boot, so the harness
        is expected to overwrite the counts after checking the hardware.
        """
        return {coin.value: 0 for coin in self.accepted_coins}

    def format_price_text(self, item_price: int) -> str:
        amount = (Decimal(item_price) / 100).quantize(Decimal("0.01"))
        return f"PRICE: ${amount}"

    def _check_for_exact_change_mode(self) -> str:
        if self.able_to_make_change:
            return DisplayText.INSERT_COINS.value
        return DisplayText.EXACT_CHANGE_ONLY.value

    # Coins

    def insert_coin(self, weight: Weight) -> bool:
        """Accept the coin whose catalog weight equals `weight` exactly."""
        try:
            measured = _as_weight(weight)
        except InvalidOperation:
            self.log(f"coin rejected: unreadable weight {weight!r}")
            return False
        if not measured.is_finite():
            self.log(f"coin rejected: weight={measured}")
            return False

        for coin in self.accepted_coins:
            if coin.weight == measured:
                self.inserted_coins.append(coin)
                self.log(f"coin accepted: weight={measured} value={coin.value} (held={self.inserted_coins_value})")
                return True

        self.log(f"coin rejected: weight={measured}")
        return False

    def calc_change(self, change_amount: int) -> List[Coin]:
        """
        Greedy, largest denomination first, drawn from coin_inv.

        Stock is decremented for every coin handed out. If the reservoir runs
        short the partial change is returned as is.
        """
        change: List[Coin] = []
        remaining = change_amount

        # keys are used as stored, see _stock_key
        for key in sorted(self.coin_inv, key=int, reverse=True):
            value = int(key)
            coin = next((c for c in self.accepted_coins if c.value == value), None)
            if coin is None:
                continue
            while remaining >= value and self.coin_inv[key] > 0:
                remaining -= value
                change.append(coin)
                self.coin_inv[key] -= 1

        if remaining > 0:
            logger.warning("change shortfall: owed=%s short=%s", change_amount, remaining)
        return change

    def _stock_key(self, value: int):
        """Stock key for a coin value; a harness may have reconciled it as "25" instead of 25."""
        if value not in self.coin_inv and str(value) in self.coin_inv:
            return str(value)
        return value

    def _add_coins_to_inv(self) -> None:
        for coin in self.inserted_coins:
            key = self._stock_key(coin.value)
            self.coin_inv[key] = self.coin_inv.get(key, 0) + 1
        if self.inserted_coins:
            self.log(f"held coins moved to stock: count={len(self.inserted_coins)} value={self.inserted_coins_value}")
        self.inserted_coins = []

    # Purchases

    def _dispense_item(self, key: str, item: InventoryItem) -> None:
        self.last_dispensed_item = item
        self.inventory[key].quantity -= 1

    def _buy_item(self, key: str, item: InventoryItem) -> List[Coin]:
        self._dispense_item(key, item)
        self._display = DisplayText.THANKS.value
        return self.calc_change(self.inserted_coins_value - item.price)

    def select_item(self, key: str) -> List[Coin]:
        """
        Try to buy the item in slot `key` with the held coins.

        Checked in order: unknown slot, out of stock, not enough money, buy.
        Whatever the outcome, held coins are moved into coin_inv afterwards.
        Returns the change to hand back (empty unless the purchase went through).
        """
        change: List[Coin] = []
        item = self.inventory.get(key)

        if item is None:
            self._display = DisplayText.SOLD_OUT.value
            self.log(f"select {key}: no such slot")
        elif item.quantity <= 0:
            self._display = DisplayText.SOLD_OUT.value
            self.log(f"select {key}: sold out")
        elif item.price > self.inserted_coins_value:
            self._display = self.format_price_text(item.price)
            self.log(f"select {key}: price={item.price} held={self.inserted_coins_value}")
        else:
            change = self._buy_item(key, item)
            self.log(
                f"select {key}: dispensed {item.name} (left={item.quantity}) "
                f"change={sum(c.value for c in change)}"
            )

        self._add_coins_to_inv()
        return change

    def reset_machine(self) -> None:
        self.inserted_coins = []
        self._display = self._check_for_exact_change_mode()
        self.log(f"reset: display={self._display}")

    def eject_coins(self) -> None:
        """Hand back the held coins; they never reach coin_inv."""
        if self.inserted_coins:
            self.log(f"eject: returning value={self.inserted_coins_value}")
        self.reset_machine()
