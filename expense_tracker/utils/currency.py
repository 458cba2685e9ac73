def format_currency(amount: float, symbol: str = "₹") -> str:
    """'₹1,234.56'. Negative amounts carry the sign before the symbol: '-₹300.00'."""
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def format_direction(amount: float, is_income: bool, symbol: str = "₹") -> str:
    """Ledger amount signed by direction: '+₹1,000.00' for income, '-₹45.50' for expense."""
    sign = "+" if is_income else "-"
    return f"{sign}{format_currency(abs(amount), symbol)}"
