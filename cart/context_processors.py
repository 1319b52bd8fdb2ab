def cart_summary(request):
    """Количество и сумма корзины для бейджа в шапке."""
    if not hasattr(request, "session"):
        return {"cart_count": 0, "cart_quantity": 0, "cart_total": 0}
    from .cart_storage import get_cart
    items = get_cart(request).get_items()
    return {
        "cart_count": items.count(),
        "cart_quantity": items.sum(lambda item: item.quantity),
        "cart_total": items.sum(lambda item: item.price * item.quantity),
    }
