"""
Django settings for store project.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get('SECRET_KEY', 'django-insecure-change-in-production')

DEBUG = os.environ.get('DEBUG', 'True').lower() in ('true', '1', 'yes')

_allowed = os.environ.get('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')
ALLOWED_HOSTS = [h.strip() for h in _allowed.split(',') if h.strip()]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'cart',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'store.urls'

# В сессии живут все корзины (ключ "<имя>_cart")
SESSION_ENGINE = os.environ.get('SESSION_ENGINE', 'django.contrib.sessions.backends.db')
# Decimal-цены корзины переживают JSON-сериализацию
SESSION_SERIALIZER = 'cart.serializers.CartJSONSerializer'
SESSION_SAVE_EVERY_REQUEST = True
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_COOKIE_AGE = 1209600

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'cart.context_processors.cart_summary',
            ],
        },
    },
]

WSGI_APPLICATION = 'store.wsgi.application'


# Database (нужна только для SESSION_ENGINE=db)
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('DB_NAME', str(BASE_DIR / 'db.sqlite3')),
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

# Корзина: имя по умолчанию -> ключ сессии "phpcart_cart"
CART_DEFAULT_NAME = os.environ.get('CART_DEFAULT_NAME', '').strip() or 'phpcart'


LANGUAGE_CODE = 'ru-ru'

TIME_ZONE = 'Europe/Moscow'

USE_I18N = True

USE_TZ = True


# Логирование корзины: в файл, если задан CART_LOG_FILE, иначе в консоль
CART_LOG_FILE = os.environ.get('CART_LOG_FILE', '').strip() or None
CART_LOG_LEVEL = os.environ.get('CART_LOG_LEVEL', 'INFO').upper()

if CART_LOG_FILE:
    _cart_handler = {
        "level": CART_LOG_LEVEL,
        "class": "logging.FileHandler",
        "filename": CART_LOG_FILE,
        "formatter": "cart",
    }
else:
    _cart_handler = {
        "level": CART_LOG_LEVEL,
        "class": "logging.StreamHandler",
        "formatter": "cart",
    }

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "cart": {
            "format": "%(asctime)s [%(levelname)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "cart_log": _cart_handler,
    },
    "loggers": {
        "cart.session": {
            "handlers": ["cart_log"],
            "level": CART_LOG_LEVEL,
        },
    },
}
