"""
Сериализатор сессии с поддержкой Decimal.

Стандартный JSONSerializer Django не умеет Decimal, а цены в корзине могут быть
Decimal. Decimal пишется как {"__decimal__": "9.99"} и читается обратно без потерь.
Подключается в settings: SESSION_SERIALIZER = "cart.serializers.CartJSONSerializer".
"""
import json
from decimal import Decimal

from django.core.signing import JSONSerializer

DECIMAL_TAG = "__decimal__"


class CartJSONEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, Decimal):
            return {DECIMAL_TAG: str(o)}
        return super().default(o)


def _decode(obj):
    if len(obj) == 1 and DECIMAL_TAG in obj:
        return Decimal(obj[DECIMAL_TAG])
    return obj


class CartJSONSerializer(JSONSerializer):
    def dumps(self, obj):
        return json.dumps(obj, separators=(",", ":"), cls=CartJSONEncoder).encode("latin-1")

    def loads(self, data):
        return json.loads(data.decode("latin-1"), object_hook=_decode)
