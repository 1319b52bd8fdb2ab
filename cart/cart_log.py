"""Логгер корзины: все операции с сессией пишутся сюда."""
import logging
import json

log = logging.getLogger("cart.session")


def _cart_repr(cart):
    """Короткое представление корзины для логов."""
    if not cart:
        return "{}"
    return json.dumps(cart, ensure_ascii=False, default=str)
