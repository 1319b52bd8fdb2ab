"""
Хранение корзины в сессии (Django session или словарь в памяти).

Любое хранилище для Cart должно уметь четыре вещи:
get(key, default), put(key, value), forget(key), has(key).
"""
import copy

from .cart import Cart
from .cart_log import log, _cart_repr

_MISSING = object()


class DjangoSessionStore:
    """Адаптер request.session: изменения сразу сохраняются."""

    def __init__(self, session):
        self.session = session

    def _session_key(self):
        return getattr(self.session, "session_key", None) or "(no key)"

    def get(self, key, default=None):
        return self.session.get(key, default)

    def put(self, key, value):
        log.info("[put] session_key=%s key=%s cart=%s", self._session_key(), key, _cart_repr(value))
        previous = self.session.get(key, _MISSING)
        self.session[key] = value
        self._save(key, previous)

    def forget(self, key):
        log.info("[forget] session_key=%s key=%s", self._session_key(), key)
        previous = self.session.pop(key, _MISSING)
        self._save(key, previous)

    def _save(self, key, previous):
        """Сохранить сессию; если не получилось, вернуть прежнее значение key."""
        self.session.modified = True
        try:
            self.session.save()
        except (TypeError, ValueError) as e:
            log.warning("[save] session_key=%s key=%s failed, rolled back: %s", self._session_key(), key, e)
            if previous is _MISSING:
                self.session.pop(key, None)
            else:
                self.session[key] = previous
            raise

    def has(self, key):
        return key in self.session


class MemorySessionStore:
    """Хранилище в памяти: для тестов, shell и скриптов без запроса."""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key, default=None):
        if key not in self.data:
            return default
        return copy.deepcopy(self.data[key])

    def put(self, key, value):
        self.data[key] = copy.deepcopy(value)

    def forget(self, key):
        self.data.pop(key, None)

    def has(self, key):
        return key in self.data


def get_cart(request, name=None):
    """Корзина текущего запроса."""
    return Cart(DjangoSessionStore(request.session), name)
