"""Display formatting shared by CLI commands."""

from decimal import Decimal

from smartspend.domain.entities import Transaction, TransactionType

CURRENCY = "₹"
MASK = "****"


def money(value: Decimal, private: bool = False) -> str:
    """Format an amount with the currency symbol, or a mask in private mode."""
    if private:
        return f"{CURRENCY}{MASK}"
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY}{abs(value):,.2f}"


def transaction_line(txn: Transaction, private: bool = False) -> str:
    """One-line listing of a transaction."""
    arrow = "+" if txn.type is TransactionType.IN else "-"
    when = txn.date.astimezone().strftime("%Y-%m-%d %H:%M")
    line = (
        f"{txn.id:<16} {when:<17} {arrow}{money(txn.amount, private):<14} "
        f"{txn.category:<20} {txn.payment_method or 'No method'}"
    )
    if txn.is_gst_applied and txn.gst_rate > 0:
        line += f"  GST {txn.gst_rate}% {money(txn.total_gst, private)}"
    return line
