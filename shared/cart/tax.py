"""Sales tax rates by destination region"""

from decimal import Decimal
from typing import Optional

from .money import Number, to_decimal

# Simplified state base rates; a real deployment would call a tax API
TAX_RATES: dict[str, Decimal] = {
    code: Decimal(rate)
    for code, rate in {
        "AL": "0.04", "AK": "0.00", "AZ": "0.056", "AR": "0.065", "CA": "0.0725",
        "CO": "0.029", "CT": "0.0635", "DE": "0.00", "FL": "0.06", "GA": "0.04",
        "HI": "0.04", "ID": "0.06", "IL": "0.0625", "IN": "0.07", "IA": "0.06",
        "KS": "0.065", "KY": "0.06", "LA": "0.0445", "ME": "0.055", "MD": "0.06",
        "MA": "0.0625", "MI": "0.06", "MN": "0.06875", "MS": "0.07", "MO": "0.04225",
        "MT": "0.00", "NE": "0.055", "NV": "0.0685", "NH": "0.00", "NJ": "0.06625",
        "NM": "0.05125", "NY": "0.04", "NC": "0.0475", "ND": "0.05", "OH": "0.0575",
        "OK": "0.045", "OR": "0.00", "PA": "0.06", "RI": "0.07", "SC": "0.06",
        "SD": "0.045", "TN": "0.07", "TX": "0.0625", "UT": "0.061", "VT": "0.06",
        "VA": "0.053", "WA": "0.065", "WV": "0.06", "WI": "0.05", "WY": "0.04",
    }.items()
}

# California base rate, used until the buyer picks a destination
DEFAULT_TAX_RATE = TAX_RATES["CA"]


def tax_rate_for_region(code: Optional[str]) -> Optional[Decimal]:
    """
    Look up the rate for a region code such as "ca" or " NY ".

    Returns None for unknown regions so the caller can keep its current
    rate. Zero-rate states return Decimal("0.00").
    """
    if not code:
        return None
    return TAX_RATES.get(code.strip().upper())


def validate_tax_rate(rate: Number) -> Decimal:
    """Reject rates outside 0 <= rate < 1"""
    value = to_decimal(rate)
    if not value.is_finite() or value < 0 or value >= 1:
        raise ValueError(f"Tax rate must be in [0, 1), got {rate!r}")
    return value
