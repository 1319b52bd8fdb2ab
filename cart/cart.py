"""
Корзина поверх хранилища сессии.

Сессия является единственным источником правды. Каждая операция заново читает
сырую корзину из хранилища, меняет её в ItemCollection и (для изменений)
записывает обратно. Между вызовами Cart ничего не кэширует, поэтому
несколько объектов Cart над одной сессией видят изменения друг друга.

add() и update() намеренно различаются:
- add() для уже существующего id складывает количество (2 + 3 = 5),
  цена и прочие поля остаются прежними;
- update() перезаписывает переданные поля, количество не накапливается.
"""
import copy as _copy
import warnings

from django.conf import settings

from .cart_logic import ItemCollection
from .cart_log import log, _cart_repr
from .exceptions import CartNotFound, CartItemNotFound, InvalidCartArgument, MissingItemId

CART_SUFFIX = "_cart"
DEFAULT_CART_NAME = "phpcart"


def default_cart_name():
    if settings.configured:
        return getattr(settings, "CART_DEFAULT_NAME", None) or DEFAULT_CART_NAME
    return DEFAULT_CART_NAME


class Cart:
    """Именованная корзина. Ключ в сессии: "<name>_cart"."""

    def __init__(self, store, name=None):
        self.store = store
        self.collection = ItemCollection()
        self.set_cart(name or default_cart_name())

    def set_cart(self, name):
        if not isinstance(name, str):
            raise InvalidCartArgument("Cart name must be a string.")
        if not name:
            raise InvalidCartArgument("Cart name can not be empty.")
        self.name = name + CART_SUFFIX

    def get_cart(self):
        """Ключ корзины в сессии."""
        return self.name

    def named(self, name):
        self.set_cart(name)
        return self

    def _load(self):
        return self.collection.set_items(self.store.get(self.get_cart(), {}))

    def _save(self, items):
        self.store.put(self.get_cart(), items)
        return self.collection.make(items)

    def add(self, product):
        """Добавить товар; если id уже в корзине, увеличить количество."""
        self.collection.validate_item(product)

        existing = self.get(product["id"])
        if existing is not None:
            log.info("[add] key=%s id=%s merge quantity %s + %s",
                     self.get_cart(), existing.id, existing.quantity, product["quantity"])
            return self.update_qty(existing.id, existing.quantity + product["quantity"])

        items = self._load().insert(product)
        log.info("[add] key=%s id=%s new item", self.get_cart(), product["id"])
        return self._save(items)

    def update(self, product):
        """Перезаписать поля позиции; поля, которых нет в product, сохраняются."""
        if "id" not in product:
            raise MissingItemId()

        existing = self._load().find_item(product["id"])
        if existing is None:
            log.warning("[update] key=%s id=%s not in cart", self.get_cart(), product["id"])
            raise CartItemNotFound(product["id"])

        item = existing.to_dict()
        item.update(product)
        self.collection.validate_item(item)

        items = self.collection.insert(item)
        log.info("[update] key=%s id=%s item=%s", self.get_cart(), item["id"], _cart_repr(item))
        return self._save(items)

    def update_qty(self, item_id, quantity):
        item = self._item_payload(item_id)
        item["quantity"] = quantity
        return self.update(item)

    def update_price(self, item_id, price):
        item = self._item_payload(item_id)
        item["price"] = price
        return self.update(item)

    def _item_payload(self, item_id):
        item = self.get(item_id)
        if item is None:
            raise CartItemNotFound(item_id)
        return item.to_dict()

    def remove(self, item_id):
        """Удалить позицию. Отсутствующий id не ошибка."""
        collection = self._load()
        found = collection.find_item(item_id) is not None
        items = collection.delete(item_id)
        log.info("[remove] key=%s id=%s removed=%s", self.get_cart(), item_id, found)
        return self._save(items)

    def items(self):
        return self.get_items()

    def get_items(self):
        return self.collection.make(self.store.get(self.get_cart(), {}))

    def get(self, item_id):
        return self._load().find_item(item_id)

    def has(self, item_id):
        return self.get(item_id) is not None

    def count(self):
        """Число уникальных позиций."""
        return self.get_items().count()

    def get_total(self):
        return self.get_items().sum(lambda item: item.price * item.quantity)

    def total_quantity(self):
        return self.get_items().sum(lambda item: item.quantity)

    def copy(self, source):
        """Скопировать содержимое другой корзины (объект Cart или имя) в эту."""
        if isinstance(source, Cart):
            return self.copy_from_cart(source)
        if isinstance(source, str):
            return self.copy_from_name(source)
        raise InvalidCartArgument(f"Argument must be an instance of {type(self).__name__} or a cart name")

    def copy_from_cart(self, cart):
        items = cart.store.get(cart.get_cart(), {})
        self._put_copy(cart.get_cart(), items)

    def copy_from_name(self, name):
        key = name + CART_SUFFIX
        if not self.store.has(key):
            raise CartNotFound(name)
        self._put_copy(key, self.store.get(key, {}))

    def _put_copy(self, source_key, items):
        items = _copy.deepcopy(items or {})
        log.info("[copy] %s -> %s keys=%s", source_key, self.get_cart(), list(items.keys()))
        self.store.put(self.get_cart(), items)

    def flash(self):
        warnings.warn("Cart.flash() is deprecated, use Cart.clear()", DeprecationWarning, stacklevel=2)
        self.clear()

    def clear(self):
        log.info("[clear] key=%s", self.get_cart())
        self.store.forget(self.get_cart())

    def __repr__(self):
        return f"Cart({self.get_cart()!r})"
