"""Effective (discounted) unit price of a product.

The discount is a whole percentage off ``price`` and the result is rounded to
the nearest whole currency unit, halves rounding up. Cart, wishlist and order
placement all price lines through ``effective_price``.
"""

from decimal import ROUND_HALF_UP, Decimal


def effective_price(price: float, discount: float = 0) -> float:
    if not discount or discount <= 0:
        return price

    discounted = Decimal(str(price)) * (Decimal(100) - Decimal(str(discount))) / Decimal(100)
    return int(discounted.quantize(Decimal(1), rounding=ROUND_HALF_UP))
