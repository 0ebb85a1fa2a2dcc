# hospital_billing/services/billing_math.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

from hospital_billing.core.config import settings

HUNDRED = Decimal("100")


def D(x) -> Decimal:
    try:
        return Decimal(str(x or 0))
    except Exception:
        return Decimal("0")


def money2(x) -> Decimal:
    return D(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def compute_net_amount(gross, discount, tax, insurance_percent,
                       *, floor_zero: Optional[bool] = None) -> Decimal:
    """
    net = gross - discount + tax - gross * insurance_percent / 100

    Not floored at zero unless BILLING_NET_FLOOR_ZERO is set (a large
    discount or coverage gives a negative net, i.e. a credit).
    """
    if floor_zero is None:
        floor_zero = settings.BILLING_NET_FLOOR_ZERO

    gross = D(gross)
    covered = gross * D(insurance_percent) / HUNDRED
    net = gross - D(discount) + D(tax) - covered
    if floor_zero:
        net = max(Decimal("0"), net)
    return money2(net)


def compute_billing_amounts(quantity, unit_price, discount_amount, tax_amount,
                            insurance_percent) -> Dict[str, Decimal]:
    """
    Inputs are rounded to two places first; the derived columns are computed
    from the rounded values, so the stored row is consistent with itself.
    """
    unit = money2(unit_price)
    discount = money2(discount_amount)
    tax = money2(tax_amount)
    pct = money2(insurance_percent)

    gross = D(quantity) * unit
    covered = money2(gross * pct / HUNDRED)
    net = gross - discount + tax - covered
    if settings.BILLING_NET_FLOOR_ZERO:
        net = max(Decimal("0"), net)
    net = money2(net)

    return {
        "unit_price": unit,
        "total_amount": money2(gross),
        "discount_amount": discount,
        "tax_amount": tax,
        "insurance_coverage_percent": pct,
        "insurance_covered_amount": covered,
        "net_amount": net,
        "patient_responsibility": net,
    }


def remaining_balance(total_billed, total_paid) -> Decimal:
    return money2(max(Decimal("0"), D(total_billed) - D(total_paid)))
