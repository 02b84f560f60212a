"""
Portfolio aggregation helpers.

Key behaviors:
- Funds are flattened in product order, then fund order within a product
- The total is folded over the flattened funds in that order
- Each fund contributes (amount - fees) * tax_rate
- The folded sum is quantized once with banker's rounding to cents
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, Decimal

from src.domain.entities import Fund, Product

CENTS = Decimal("0.01")


def flatten_funds(products: Iterable[Product]) -> tuple[Fund, ...]:
    """All funds across products, preserving order."""
    return tuple(fund for product in products for fund in product.funds)


def fund_net_taxed(fund: Fund, tax_rate: Decimal) -> Decimal:
    return (fund.amount - fund.fees) * tax_rate


def portfolio_total(funds: Iterable[Fund], tax_rate: Decimal) -> Decimal:
    """
    Sum of (amount - fees) * tax_rate over funds, rounded half-even to cents.

    Returns Decimal("0.00") for an empty portfolio.
    """
    total = Decimal("0")
    for fund in funds:
        total += fund_net_taxed(fund, tax_rate)
    return total.quantize(CENTS, rounding=ROUND_HALF_EVEN)
