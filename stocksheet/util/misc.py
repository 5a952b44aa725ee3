from decimal import Decimal


def decimal_hook(v: object):
    """
    Turn a JSON number into a Decimal. Anything else is handed back untouched
    so dacite can report the type mismatch.
    """
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return Decimal(str(v))
    return v
