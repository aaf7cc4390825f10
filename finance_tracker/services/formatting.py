# services/formatting.py
#
# Display helpers registered as Jinja2 filters (see deps.py).

from decimal import ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")


def _quantize(value: Decimal, exp: Decimal) -> Decimal:
    # Widen the context so large totals keep every whole digit.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(exp, rounding=ROUND_HALF_UP)


def format_amount(amount) -> str:
    """
    Plain decimal text without exponent or trailing zeros:
    1500 -> '1500', 1500.50 -> '1500.5'.
    """
    return f"{Decimal(amount).normalize():f}"


def group_indian(whole: str) -> str:
    """
    Indian digit grouping: last three digits, then groups of two.
    '150000' -> '1,50,000'
    """
    if len(whole) <= 3:
        return whole
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_money(amount) -> str:
    """
    Format an amount the way the screens show it: en-IN grouping, at most
    two decimals, trailing zeros dropped. Sign is kept for negatives.
    """
    value = _quantize(Decimal(amount), CENT)
    sign = "-" if value < 0 else ""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        text = f"{abs(value).normalize():f}"
    whole, _, frac = text.partition(".")
    grouped = group_indian(whole)
    return f"{sign}{grouped}.{frac}" if frac else f"{sign}{grouped}"


def format_percentage(value) -> str:
    return f"{_quantize(Decimal(value), Decimal('0.1'))}%"
