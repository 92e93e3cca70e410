"""
Ether/wei conversion.

Bids are stored and committed in wei; users type them in ether.
Conversion is exact (Decimal), never through float.
"""

from decimal import Decimal, InvalidOperation, localcontext

WEI_PER_ETHER = 10**18
ETHER_DECIMALS = 18


def parse_ether(value: str) -> int:
    """
    Convert a decimal ether string to wei.
    
    Raises:
        ValueError: On malformed, negative, or over-precise input
    """
    text = str(value).strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Invalid ether amount: {value!r}") from None

    if not amount.is_finite():
        raise ValueError(f"Invalid ether amount: {value!r}")
    if amount < 0:
        raise ValueError(f"Ether amount cannot be negative: {value!r}")
    if amount.as_tuple().exponent < -ETHER_DECIMALS:
        raise ValueError(f"Too many decimal places (max {ETHER_DECIMALS}): {value!r}")

    with localcontext() as ctx:
        ctx.prec = 100
        return int(amount.scaleb(ETHER_DECIMALS))


def format_ether(wei: int, precision: int = 4) -> str:
    """Format wei as ether with at most `precision` decimals, trailing zeros trimmed."""
    with localcontext() as ctx:
        ctx.prec = 100
        ether = Decimal(wei) / Decimal(WEI_PER_ETHER)
        text = f"{ether:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
