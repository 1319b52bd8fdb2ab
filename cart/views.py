import json
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from .cart_storage import get_cart
from .cart_log import log
from .exceptions import CartException, CartItemNotFound, CartNotFound

# Поля формы, которые приходят строками
_NUMERIC_FIELDS = (("quantity", int), ("price", float))
_SERVICE_FIELDS = ("csrfmiddlewaretoken",)


def _payload(request):
    """Данные запроса: JSON-тело или обычная форма. None, если тело не разобрать."""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError:
            return None
        return data if isinstance(data, dict) else None
    data = {k: v for k, v in request.POST.items()}
    for field, cast in _NUMERIC_FIELDS:
        if isinstance(data.get(field), str):
            try:
                data[field] = cast(data[field])
            except ValueError:
                return None
    return data


def _error(message, status=400):
    return JsonResponse({"ok": False, "error": message}, status=status)


def _cart_response(cart, items=None):
    if items is None:
        items = cart.get_items()
    return JsonResponse({
        "ok": True,
        "cart": cart.get_cart(),
        "count": items.count(),
        "total_quantity": items.sum(lambda item: item.quantity),
        "total": items.sum(lambda item: item.price * item.quantity),
        "items": [item.to_dict() for item in items],
    })


def with_cart(func):
    """Разбирает запрос, находит корзину и переводит ошибки корзины в JSON."""
    @wraps(func)
    def wrapper(request):
        if request.method == "GET":
            data = dict(request.GET.items())
        else:
            data = _payload(request)
            if data is None:
                return _error("Неверные данные")
        name = data.pop("cart", None) or None
        if name is not None and not isinstance(name, str):
            return _error("Неверное имя корзины")
        for field in _SERVICE_FIELDS:
            data.pop(field, None)
        try:
            cart = get_cart(request, name)
            return func(request, cart, data)
        except (CartItemNotFound, CartNotFound) as e:
            log.warning("[%s] %r", func.__name__, e)
            return _error(str(e), status=404)
        except CartException as e:
            log.warning("[%s] %r", func.__name__, e)
            return _error(str(e))
    return wrapper


@require_GET
@with_cart
def cart_summary(request, cart, data):
    return _cart_response(cart)


@require_POST
@with_cart
def cart_add(request, cart, data):
    return _cart_response(cart, cart.add(data))


@require_POST
@with_cart
def cart_update(request, cart, data):
    return _cart_response(cart, cart.update(data))


@require_POST
@with_cart
def cart_remove(request, cart, data):
    item_id = data.get("id")
    if item_id is None or item_id == "":
        return _error("Не указана позиция")
    return _cart_response(cart, cart.remove(item_id))


@require_POST
@with_cart
def cart_clear(request, cart, data):
    cart.clear()
    return _cart_response(cart)


@require_POST
@with_cart
def cart_copy(request, cart, data):
    source = data.get("source")
    if not source or not isinstance(source, str):
        return _error("Не указана корзина-источник")
    cart.copy(source)
    return _cart_response(cart)
