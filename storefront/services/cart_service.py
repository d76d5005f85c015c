"""
Session cart and wishlist storage

Carts and wishlists are keyed by the client's session id (X-Session-Id header)
and kept in process memory. Idle sessions are evicted periodically, and the
least recently seen session makes room once the store is full.

Every method returns a copy; the stored state only changes under the lock.
"""
import time
import threading
from typing import Dict, Optional

from storefront.domain.cart import Cart, CartItemInput, Wishlist


class CartStore:
    """
    In-memory cart and wishlist store.

    For production with multiple instances, move this to Redis or the database.
    """

    def __init__(self, session_ttl_seconds: int = 7 * 24 * 3600, max_sessions: int = 10000):
        self._carts: Dict[str, Cart] = {}
        self._wishlists: Dict[str, Wishlist] = {}
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._session_ttl = session_ttl_seconds
        self._max_sessions = max_sessions
        self._last_cleanup = time.time()
        self._cleanup_interval = 300  # seconds

    def _forget(self, session_id: str) -> None:
        self._carts.pop(session_id, None)
        self._wishlists.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def _cleanup(self, now: float) -> None:
        if now - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = now - self._session_ttl
        for sid in [sid for sid, seen in self._last_seen.items() if seen < cutoff]:
            self._forget(sid)

        self._last_cleanup = now

    def _touch(self, session_id: str, create: bool = False) -> None:
        """Mark a session as seen; new sessions are only recorded on writes"""
        now = time.time()
        self._cleanup(now)

        if session_id not in self._last_seen:
            if not create:
                return
            if len(self._last_seen) >= self._max_sessions:
                self._forget(min(self._last_seen, key=self._last_seen.get))

        self._last_seen[session_id] = now

    def _cart_for_write(self, session_id: str) -> Cart:
        self._touch(session_id, create=True)
        return self._carts.setdefault(session_id, Cart())

    def _wishlist_for_write(self, session_id: str) -> Wishlist:
        self._touch(session_id, create=True)
        return self._wishlists.setdefault(session_id, Wishlist())

    # ------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------

    def get_cart(self, session_id: str) -> Cart:
        with self._lock:
            self._touch(session_id)
            cart = self._carts.get(session_id)
            return cart.model_copy(deep=True) if cart else Cart()

    def add_to_cart(self, session_id: str, item: CartItemInput) -> Cart:
        with self._lock:
            cart = self._cart_for_write(session_id)
            cart.add(item)
            return cart.model_copy(deep=True)

    def remove_from_cart(self, session_id: str, product_id: str) -> Cart:
        with self._lock:
            cart = self._cart_for_write(session_id)
            cart.remove(product_id)
            return cart.model_copy(deep=True)

    def update_quantity(self, session_id: str, product_id: str, quantity: int) -> Cart:
        with self._lock:
            cart = self._cart_for_write(session_id)
            cart.update_quantity(product_id, quantity)
            return cart.model_copy(deep=True)

    def clear_cart(self, session_id: str) -> Cart:
        with self._lock:
            cart = self._cart_for_write(session_id)
            cart.clear()
            return cart.model_copy(deep=True)

    def discard_ordered(self, session_id: str, ordered: Cart) -> Cart:
        """
        Take the lines of a placed order out of the cart

        Only the ordered quantities are removed, so anything added while the
        order was being placed stays in the cart.
        """
        with self._lock:
            cart = self._cart_for_write(session_id)
            for line in ordered.items:
                current = cart.find(line.product_id)
                if current:
                    cart.update_quantity(line.product_id, current.quantity - line.quantity)
            return cart.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Wishlist
    # ------------------------------------------------------------------

    def get_wishlist(self, session_id: str) -> Wishlist:
        with self._lock:
            self._touch(session_id)
            wishlist = self._wishlists.get(session_id)
            return wishlist.model_copy(deep=True) if wishlist else Wishlist()

    def add_to_wishlist(self, session_id: str, product_id: str) -> bool:
        with self._lock:
            return self._wishlist_for_write(session_id).add(product_id)

    def remove_from_wishlist(self, session_id: str, product_id: str) -> None:
        with self._lock:
            self._wishlist_for_write(session_id).remove(product_id)

    def toggle_wishlist(self, session_id: str, product_id: str) -> bool:
        with self._lock:
            return self._wishlist_for_write(session_id).toggle(product_id)


# Global store instance
_cart_store: Optional[CartStore] = None


def get_cart_store() -> CartStore:
    """Get or create the process-wide cart store"""
    global _cart_store
    if _cart_store is None:
        _cart_store = CartStore()
    return _cart_store
