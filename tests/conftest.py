"""
Pytest configuration and fixtures for tests.

Django настраивается на store.settings с сессиями в кэше (без БД).
"""

import os
import sys

import django
import pytest

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ['DJANGO_SETTINGS_MODULE'] = 'store.settings'
os.environ['SESSION_ENGINE'] = 'django.contrib.sessions.backends.cache'
os.environ['DB_NAME'] = ':memory:'
os.environ['CART_DEFAULT_NAME'] = 'phpcart'
os.environ.pop('CART_LOG_FILE', None)
django.setup()

from cart.cart import Cart  # noqa: E402
from cart.cart_storage import MemorySessionStore  # noqa: E402


@pytest.fixture
def store():
    """Пустое хранилище сессии в памяти."""
    return MemorySessionStore()


@pytest.fixture
def cart(store):
    """Корзина по умолчанию (ключ phpcart_cart)."""
    return Cart(store)


@pytest.fixture
def product():
    return {"id": 1, "quantity": 2, "price": 10, "name": "T-shirt", "options": {"size": "L"}}
