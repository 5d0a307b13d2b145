"""Pricing calculator.

Builds a rate-card Time & Materials block and a fixed-price block for every
draft; ``PricingTable.model`` tells the reader which one to foreground.
"""

import math
import re
from typing import Optional, Union

from contracts import (
    PricingModel,
    PricingTable,
    TimeAndMaterials,
    RoleRate,
    FixedPrice,
    BreakdownItem,
)


DEFAULT_FIXED_PRICE = 150000
CURRENCY = "USD"

# (role, hourly rate, hours per engagement week)
ROLE_RATES = (
    ("Senior Consultant", 250, 20),
    ("Engineer", 180, 40),
    ("Designer", 160, 15),
    ("QA Specialist", 140, 10),
)

# Literal allocation; does not scale with the parsed total.
FIXED_BREAKDOWN = (
    ("Discovery & Planning", 15000),
    ("Design & UX", 25000),
    ("Development", 80000),
    ("Testing & QA", 20000),
    ("Launch & Training", 10000),
)

PRICING_NOTES = {
    PricingModel.TM: "Time & Materials billing with monthly invoicing. Rates locked for duration of engagement.",
    PricingModel.FIXED: "Fixed price with milestone-based payments. 30% upfront, 40% at mid-point, 30% at completion.",
    PricingModel.HYBRID: "Hybrid model: Fixed price for design phase, T&M for development with NTE cap.",
}

_NUMBER_TOKEN = re.compile(r"\d[\d,]*")


def parse_fixed_price(budget_range: Optional[str]) -> int:
    """Return the first number in ``budget_range``, ignoring thousands separators.

    >>> parse_fixed_price("$150,000 - $220,000")
    150000
    """
    if not budget_range:
        return DEFAULT_FIXED_PRICE
    match = _NUMBER_TOKEN.search(budget_range)
    if not match:
        return DEFAULT_FIXED_PRICE
    return int(match.group(0).replace(",", ""))


def estimate_hours(timeline_weeks: int) -> dict:
    """Hours per role: a flat weekly staffing rate times the engagement length."""
    return {
        role: math.floor(timeline_weeks * hours_per_week)
        for role, _rate, hours_per_week in ROLE_RATES
    }


def price(
    pricing_preference: Optional[Union[PricingModel, str]],
    timeline_weeks: int,
    budget_range: Optional[str] = None,
) -> PricingTable:
    """Build the pricing table for an engagement.

    Args:
        pricing_preference: Requested model (defaults to T&M)
        timeline_weeks: Engagement length in weeks
        budget_range: Free-text budget used for the fixed total

    Returns:
        PricingTable with both ``tm`` and ``fixed`` populated
    """
    model = PricingModel(pricing_preference) if pricing_preference else PricingModel.TM

    tm = TimeAndMaterials(
        roles=[RoleRate(role=role, rate=rate, currency=CURRENCY) for role, rate, _ in ROLE_RATES],
        est_hours_by_role=estimate_hours(timeline_weeks),
    )
    fixed = FixedPrice(
        total=parse_fixed_price(budget_range),
        breakdown=[BreakdownItem(item=item, amount=amount) for item, amount in FIXED_BREAKDOWN],
    )
    return PricingTable(model=model, tm=tm, fixed=fixed, notes=PRICING_NOTES[model])


def headline_total(pricing: PricingTable) -> float:
    """Total shown to the reader for the foregrounded model.

    Fixed uses the fixed total; every other model sums T&M hours times rate.
    """
    if pricing.model == PricingModel.FIXED and pricing.fixed:
        return pricing.fixed.total

    if pricing.tm and pricing.tm.roles and pricing.tm.est_hours_by_role:
        return sum(
            pricing.tm.est_hours_by_role.get(r.role, 0) * r.rate
            for r in pricing.tm.roles
        )

    return 0
