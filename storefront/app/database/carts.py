"""Cart session storage for the storefront"""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from cart import CartEngine, CartStorage, CorruptCartData, MemoryCartStorage

logger = logging.getLogger(__name__)


class CartDatabase:
    """
    One CartEngine per cart id.

    Engines persist every mutation to the storage adapter, so memory only
    holds the most recently used ones; a cart that is no longer in memory
    is rehydrated from storage on first access.
    """

    KEY_PREFIX = "cart:"

    def __init__(
        self,
        storage: Optional[CartStorage] = None,
        default_tax_rate: Decimal = Decimal("0"),
        max_cached: int = 1000,
    ):
        self.storage = storage if storage is not None else MemoryCartStorage()
        self.default_tax_rate = default_tax_rate
        self.max_cached = max_cached
        self.carts: dict[str, CartEngine] = {}

    def _key(self, cart_id: str) -> str:
        return f"{self.KEY_PREFIX}{cart_id}"

    def _remember(self, cart_id: str, engine: CartEngine) -> None:
        # dicts keep insertion order: re-inserting marks the cart as recent
        self.carts.pop(cart_id, None)
        self.carts[cart_id] = engine
        while len(self.carts) > self.max_cached:
            oldest = next(iter(self.carts))
            del self.carts[oldest]
            logger.debug(f"Evicted cart {oldest} from memory")

    def create_cart(self) -> tuple[str, CartEngine]:
        """Create a new empty cart"""
        cart_id = str(uuid.uuid4())
        engine = CartEngine(
            storage=self.storage,
            key=self._key(cart_id),
            tax_rate=self.default_tax_rate,
        )
        # Persist the empty cart so the id survives a restart
        engine.set_tax_rate(self.default_tax_rate)
        self._remember(cart_id, engine)
        logger.info(f"Created cart {cart_id}")
        return cart_id, engine

    def get_cart(self, cart_id: str) -> Optional[CartEngine]:
        """Get a cart by ID, rehydrating it from storage if needed"""
        engine = self.carts.get(cart_id)
        if engine is not None:
            self._remember(cart_id, engine)
            return engine

        key = self._key(cart_id)
        try:
            if self.storage.load(key) is None:
                return None
        except CorruptCartData:
            # restore() discards it and starts an empty cart
            pass

        engine = CartEngine.restore(self.storage, key, tax_rate=self.default_tax_rate)
        self._remember(cart_id, engine)
        return engine

    def evict(self, cart_id: str) -> bool:
        """Drop the in-memory engine; persisted state is kept"""
        return self.carts.pop(cart_id, None) is not None

    def delete_cart(self, cart_id: str) -> bool:
        """Delete a cart and its persisted state"""
        in_memory = self.carts.pop(cart_id, None) is not None
        stored = self.storage.delete(self._key(cart_id))
        return in_memory or stored
