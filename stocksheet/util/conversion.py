from decimal import ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")


def round_money(number: Decimal) -> Decimal:
    """
    Round a Decimal to two decimal places, halves away from zero.
    """
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the two cents
        ctx.prec = max(ctx.prec, number.adjusted() + 4)
        return number.quantize(CENT, rounding=ROUND_HALF_UP)


def pad_float(number: Decimal | int | float = 0) -> str:
    """
    Pad a number to two decimal places.
    """
    if not isinstance(number, Decimal):
        number = Decimal(str(number))
    return f"{round_money(number):.2f}"
