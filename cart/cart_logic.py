"""
Логика корзины: позиции и коллекция позиций, без знания о сессии.

Формат корзины в сессии: { "<str(id)>": {"id": id, "quantity": q, "price": p, ...} }
- id: идентификатор товара (число или строка), хранится как есть
- quantity: количество (int >= 0)
- price: цена за единицу (int/float/Decimal >= 0)
- остальные поля (name, options, ...) сохраняются без изменений

Ключ всегда строка, потому что JSON-сериализатор сессии Django превращает ключи
словаря в строки, и после перезагрузки позиция должна находиться по тому же id.
Порядок ключей соответствует порядку добавления, перезапись позиции его не меняет.
"""
import math
from decimal import Decimal

from .exceptions import InvalidItemData

REQUIRED_FIELDS = ("id", "quantity", "price")


def _key(item_id):
    return str(item_id)


def _add(a, b):
    if isinstance(a, float) and isinstance(b, Decimal):
        a = Decimal(str(a))
    elif isinstance(a, Decimal) and isinstance(b, float):
        b = Decimal(str(b))
    return a + b


def validate_item(product):
    """Проверить товар перед добавлением. Ничего не меняет, только бросает InvalidItemData."""
    if not isinstance(product, dict):
        raise InvalidItemData(None, "Item must be a mapping")
    for field in REQUIRED_FIELDS:
        if field not in product:
            raise InvalidItemData(field, f"{field} is required")

    item_id = product["id"]
    if item_id is None or item_id == "" or isinstance(item_id, bool):
        raise InvalidItemData("id", "id can not be empty")

    quantity = product["quantity"]
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidItemData("quantity", "quantity must be an integer")
    if quantity < 0:
        raise InvalidItemData("quantity", "quantity can not be negative")

    price = product["price"]
    if isinstance(price, bool) or not isinstance(price, (int, float, Decimal)):
        raise InvalidItemData("price", "price must be a number")
    if isinstance(price, float) and not math.isfinite(price):
        raise InvalidItemData("price", "price must be a finite number")
    if isinstance(price, Decimal) and not price.is_finite():
        raise InvalidItemData("price", "price must be a finite number")
    if price < 0:
        raise InvalidItemData("price", "price can not be negative")


class Item:
    """
    Позиция корзины: обязательные id/quantity/price + attributes
    (всё остальное, что пришло вместе с товаром).
    """

    __slots__ = ("id", "quantity", "price", "attributes")

    def __init__(self, id, quantity, price, attributes=None):
        self.id = id
        self.quantity = quantity
        self.price = price
        self.attributes = dict(attributes or {})

    @classmethod
    def from_dict(cls, record):
        attributes = {k: v for k, v in record.items() if k not in REQUIRED_FIELDS}
        return cls(record.get("id"), record.get("quantity"), record.get("price"), attributes)

    def to_dict(self):
        out = {"id": self.id, "quantity": self.quantity, "price": self.price}
        out.update(self.attributes)
        return out

    @property
    def subtotal(self):
        return self.price * self.quantity

    def __eq__(self, other):
        if not isinstance(other, Item):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Item(id={self.id!r}, quantity={self.quantity!r}, price={self.price!r})"


class CollectionView:
    """Обёртка над сырой корзиной для чтения: count/sum и перебор позиций."""

    def __init__(self, items=None):
        self._items = {k: dict(v) for k, v in (items or {}).items()}

    def count(self):
        """Число уникальных позиций (не единиц товара)."""
        return len(self._items)

    def sum(self, projection):
        """Сумма projection(item) по всем позициям. float и Decimal приводятся к Decimal."""
        total = 0
        for item in self:
            total = _add(total, projection(item))
        return total

    def get(self, item_id):
        record = self._items.get(_key(item_id))
        return Item.from_dict(record) if record is not None else None

    def all(self):
        return list(self)

    def is_empty(self):
        return not self._items

    def to_dict(self):
        return {k: dict(v) for k, v in self._items.items()}

    def __iter__(self):
        for record in self._items.values():
            yield Item.from_dict(record)

    def __len__(self):
        return len(self._items)

    def __contains__(self, item_id):
        return _key(item_id) in self._items

    def __repr__(self):
        return f"CollectionView({list(self._items.keys())})"


class ItemCollection:
    """Рабочий буфер корзины: загружается из сессии перед каждой операцией."""

    def __init__(self):
        self._items = {}

    def set_items(self, items):
        """Заменить содержимое сырой корзиной из сессии (None = пустая)."""
        self._items = {str(k): dict(v) for k, v in (items or {}).items()}
        return self

    def validate_item(self, product):
        validate_item(product)

    def insert(self, product):
        """
        Добавить или перезаписать позицию по id.
        Существующая позиция остаётся на своём месте, новая идёт в конец.
        Возвращает сырую корзину, которую нужно сохранить в сессию.
        """
        record = product.to_dict() if isinstance(product, Item) else dict(product)
        self._items[_key(record["id"])] = record
        return self._items

    def delete(self, item_id):
        """Удалить позицию по id, если она есть. Возвращает сырую корзину."""
        self._items.pop(_key(item_id), None)
        return self._items

    def find_item(self, item_id):
        """Позиция по id или None."""
        record = self._items.get(_key(item_id))
        if record is None:
            return None
        return Item.from_dict(record)

    def make(self, items):
        return CollectionView(items)
