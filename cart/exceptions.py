"""
Исключения корзины.

CartException (база)
├── InvalidCartArgument   - пустое имя корзины, чужой объект в copy()
├── InvalidItemData       - товар без id/quantity/price или с неверными типами
├── MissingItemId         - update() без id
├── CartItemNotFound      - update() для позиции, которой нет в корзине
└── CartNotFound          - copy() из корзины, которой нет в сессии
"""


class CartException(Exception):
    """Базовое исключение корзины: сообщение + details для логов."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return self.message

    def __repr__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class InvalidCartArgument(CartException, ValueError):
    pass


class InvalidItemData(CartException, ValueError):
    """Товар не прошёл валидацию; field - имя проблемного поля."""

    def __init__(self, field, message):
        super().__init__(message, details={"field": field})
        self.field = field


class MissingItemId(CartException):
    def __init__(self):
        super().__init__("id is required")


class CartItemNotFound(CartException, LookupError):
    def __init__(self, item_id):
        super().__init__(
            f"There is no item in shopping cart with id: {item_id}",
            details={"item_id": item_id},
        )
        self.item_id = item_id


class CartNotFound(CartException, LookupError):
    def __init__(self, name):
        super().__init__(f"Cart does not exist: {name}", details={"name": name})
        self.name = name
