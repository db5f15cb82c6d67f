"""
Cart & Pricing Engine

Owns the cart state (line items, selected shipping method, tax rate) and
derives subtotal, tax, shipping cost, total and item count from it. Every
mutation is persisted through an optional storage adapter so a reload
restores the same cart.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Optional

from .exceptions import CorruptCartData, InvalidCartInput
from .models import CartLineItem, CartLineItemInput, CartSnapshot, ShippingMethod
from .money import ZERO, Number, round2, to_decimal
from .storage import CartStorage

logger = logging.getLogger(__name__)

STATE_VERSION = 1


def _money(value: Any, field: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except (TypeError, ValueError) as e:
        raise InvalidCartInput(f"{field} must be a number: {e}") from None
    if not amount.is_finite():
        raise InvalidCartInput(f"{field} must be finite, got {value!r}")
    if amount < 0:
        raise InvalidCartInput(f"{field} must not be negative, got {value!r}")
    return amount


def _quantity(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCartInput(f"quantity must be an integer, got {value!r}")
    return value


class CartEngine:
    """
    Shopping cart with pricing invariants:

    - subtotal = sum(unit_price * quantity)
    - tax = round2(subtotal * tax_rate)
    - shipping_cost = selected method's base_cost, or 0 when none
    - total = subtotal + tax + shipping_cost
    - item_count = sum(quantity)

    Derived values are never stored; get_snapshot() computes them from the
    current state. Missing ids are no-ops, invalid arguments raise
    InvalidCartInput.
    """

    def __init__(
        self,
        storage: Optional[CartStorage] = None,
        key: str = "cart",
        tax_rate: Number = ZERO,
    ):
        self.storage = storage
        self.key = key
        self._items: list[CartLineItem] = []
        self._shipping_method: Optional[ShippingMethod] = None
        self._tax_rate = self._coerce_tax_rate(tax_rate)

    # ==================== Read helpers ====================

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(replace(item) for item in self._items)

    @property
    def selected_shipping_method(self) -> Optional[ShippingMethod]:
        return self._shipping_method

    @property
    def tax_rate(self) -> Decimal:
        return self._tax_rate

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return self._find(item_id) is not None

    def get_item(self, item_id: str) -> Optional[CartLineItem]:
        item = self._find(item_id)
        return replace(item) if item else None

    def _find(self, item_id: object) -> Optional[CartLineItem]:
        return next((item for item in self._items if item.id == item_id), None)

    # ==================== Mutations ====================

    def add_item(self, item: CartLineItemInput) -> None:
        """
        Add a catalog item, merging with an existing line of the same id.

        On merge the quantities are summed and the existing line keeps its
        original unit price.
        """
        if not isinstance(item, CartLineItemInput):
            raise InvalidCartInput(f"Expected CartLineItemInput, got {type(item).__name__}")
        if item.id is None or item.id == "":
            raise InvalidCartInput("item id is required")

        unit_price = _money(item.unit_price, "unit_price")
        quantity = _quantity(item.quantity)
        if quantity < 1:
            raise InvalidCartInput(f"quantity must be at least 1, got {quantity}")

        previous = self._checkpoint()
        existing = self._find(item.id)
        if existing:
            if existing.unit_price != unit_price:
                logger.debug(
                    f"Cart {self.key}: keeping price {existing.unit_price} for {item.id}, "
                    f"ignoring {unit_price}"
                )
            existing.quantity += quantity
            logger.info(f"Cart {self.key}: {item.id} quantity now {existing.quantity}")
        else:
            self._items.append(
                CartLineItem(
                    id=item.id,
                    title=item.title,
                    unit_price=unit_price,
                    quantity=quantity,
                    seller_id=item.seller_id,
                    image_ref=item.image_ref,
                    weight_oz=item.weight_oz,
                )
            )
            logger.info(f"Cart {self.key}: added {quantity}x {item.id}")

        self._persist(previous)

    def remove_item(self, item_id: str) -> None:
        """Remove a line regardless of quantity. Unknown ids are ignored"""
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            logger.debug(f"Cart {self.key}: remove of absent item {item_id} ignored")
            return

        previous = self._checkpoint()
        self._items = remaining
        logger.info(f"Cart {self.key}: removed {item_id}")
        self._persist(previous)

    def update_quantity(self, item_id: str, new_quantity: int) -> None:
        """Set an absolute quantity. Zero or below removes the line"""
        new_quantity = _quantity(new_quantity)

        if new_quantity <= 0:
            self.remove_item(item_id)
            return

        item = self._find(item_id)
        if not item:
            logger.debug(f"Cart {self.key}: update of absent item {item_id} ignored")
            return

        previous = self._checkpoint()
        item.quantity = new_quantity
        logger.info(f"Cart {self.key}: {item_id} quantity set to {new_quantity}")
        self._persist(previous)

    def set_shipping_method(self, method: Optional[ShippingMethod]) -> None:
        """Select a shipping method, or None to clear shipping cost"""
        if method is not None:
            if not isinstance(method, ShippingMethod):
                raise InvalidCartInput(
                    f"Expected ShippingMethod or None, got {type(method).__name__}"
                )
            method = replace(method, base_cost=_money(method.base_cost, "base_cost"))

        previous = self._checkpoint()
        self._shipping_method = method
        logger.info(
            f"Cart {self.key}: shipping method "
            f"{method.id + ' @ ' + str(method.base_cost) if method else 'cleared'}"
        )
        self._persist(previous)

    def set_tax_rate(self, rate: Number) -> None:
        """Store the rate for the destination; range checks belong to the caller"""
        rate = self._coerce_tax_rate(rate)
        previous = self._checkpoint()
        self._tax_rate = rate
        logger.info(f"Cart {self.key}: tax rate set to {self._tax_rate}")
        self._persist(previous)

    def clear(self) -> None:
        """Empty the cart and drop the shipping selection. Tax rate is kept"""
        previous = self._checkpoint()
        self._items = []
        self._shipping_method = None
        logger.info(f"Cart {self.key}: cleared")
        self._persist(previous)

    @staticmethod
    def _coerce_tax_rate(rate: Number) -> Decimal:
        try:
            value = to_decimal(rate)
        except (TypeError, ValueError) as e:
            raise InvalidCartInput(f"tax rate must be a number: {e}") from None
        if not value.is_finite():
            raise InvalidCartInput(f"tax rate must be finite, got {rate!r}")
        return value

    # ==================== Derived totals ====================

    def get_snapshot(self) -> CartSnapshot:
        """Consistent view of the cart with all derived totals computed now"""
        items = self.items
        subtotal = sum((item.line_total for item in items), ZERO)
        shipping_cost = self._shipping_method.base_cost if self._shipping_method else ZERO
        tax = round2(subtotal * self._tax_rate)

        return CartSnapshot(
            items=items,
            selected_shipping_method=self._shipping_method,
            tax_rate=self._tax_rate,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            tax=tax,
            total=subtotal + tax + shipping_cost,
            item_count=sum(item.quantity for item in items),
        )

    # ==================== Persistence ====================

    def to_dict(self) -> dict:
        """Serializable state. Derived totals are not part of it"""
        method = self._shipping_method
        return {
            "version": STATE_VERSION,
            "items": [
                {
                    "id": item.id,
                    "title": item.title,
                    "unit_price": str(item.unit_price),
                    "quantity": item.quantity,
                    "seller_id": item.seller_id,
                    "image_ref": item.image_ref,
                    "weight_oz": item.weight_oz,
                }
                for item in self._items
            ],
            "selected_shipping_method": {
                "id": method.id,
                "display_name": method.display_name,
                "provider": method.provider,
                "base_cost": str(method.base_cost),
            } if method else None,
            "tax_rate": str(self._tax_rate),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        storage: Optional[CartStorage] = None,
        key: str = "cart",
    ) -> "CartEngine":
        """Rebuild an engine from to_dict() output. Raises CorruptCartData"""
        try:
            if data.get("version") != STATE_VERSION:
                raise CorruptCartData(f"Unsupported cart state version {data.get('version')!r}")

            engine = cls(storage=None, key=key, tax_rate=data["tax_rate"])
            for raw in data["items"]:
                quantity = _quantity(raw["quantity"])
                if quantity < 1:
                    raise CorruptCartData(f"Stored quantity {quantity} for {raw['id']}")
                engine._items.append(
                    CartLineItem(
                        id=raw["id"],
                        title=raw["title"],
                        unit_price=_money(raw["unit_price"], "unit_price"),
                        quantity=quantity,
                        seller_id=raw["seller_id"],
                        image_ref=raw.get("image_ref"),
                        weight_oz=raw.get("weight_oz"),
                    )
                )

            method = data.get("selected_shipping_method")
            if method:
                engine._shipping_method = ShippingMethod(
                    id=method["id"],
                    display_name=method["display_name"],
                    provider=method["provider"],
                    base_cost=_money(method["base_cost"], "base_cost"),
                )
        except CorruptCartData:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CorruptCartData(f"Malformed cart state: {e!r}") from e

        engine.storage = storage
        return engine

    @classmethod
    def restore(
        cls,
        storage: CartStorage,
        key: str,
        tax_rate: Number = ZERO,
    ) -> "CartEngine":
        """
        Rehydrate a cart from storage.

        A missing key gives an empty cart with the given tax rate. A corrupt
        document is logged, discarded and also gives an empty cart.
        """
        try:
            data = storage.load(key)
            if data is not None:
                engine = cls.from_dict(data, storage=storage, key=key)
                logger.info(f"Cart {key}: restored {len(engine)} line(s)")
                return engine
        except CorruptCartData as e:
            logger.warning(f"Cart {key}: discarding unreadable saved state: {e}")
            storage.delete(key)

        return cls(storage=storage, key=key, tax_rate=tax_rate)

    def _checkpoint(self) -> tuple:
        return (
            [replace(item) for item in self._items],
            self._shipping_method,
            self._tax_rate,
        )

    def _persist(self, previous: tuple) -> None:
        """
        Save the current state, or put back the previous one and re-raise.

        Memory and storage never disagree after a failed save: the mutation
        is undone and the storage error reaches the caller unchanged.
        """
        if self.storage is None:
            return
        try:
            self.storage.save(self.key, self.to_dict())
        except Exception:
            self._items, self._shipping_method, self._tax_rate = previous
            logger.error(f"Cart {self.key}: save failed, change rolled back")
            raise
