"""GST split calculation."""

from decimal import Decimal

from smartspend.domain.entities import GstSplit, ZERO
from smartspend.domain.errors import ValidationError, negative_amount, negative_gst_rate

HUNDRED = Decimal("100")
TWO = Decimal("2")


def split(amount: Decimal, rate_percent: Decimal) -> GstSplit:
    """Split the GST on ``amount`` into its central and state halves.

    Tax is always modelled as intra-state, so IGST is zero.

    Args:
        amount: Transaction amount
        rate_percent: GST rate in percent (e.g., 18)

    Returns:
        GstSplit with cgst and sgst each holding half the tax

    Raises:
        ValidationError: If amount or rate is negative
    """
    amount = Decimal(amount)
    rate_percent = Decimal(rate_percent)
    if rate_percent < 0:
        raise ValidationError(negative_gst_rate(rate_percent))
    if amount < 0:
        raise ValidationError(negative_amount(amount))

    tax = amount * rate_percent / HUNDRED
    half = tax / TWO
    return GstSplit(cgst=half, sgst=half, igst=ZERO)
