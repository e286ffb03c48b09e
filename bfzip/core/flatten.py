from typing import Any, List, Tuple


def flatten(nested: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """(a, (b, (c, ()))) -> (a, b, c)"""
    out: List[Any] = []
    while nested:
        value, nested = nested
        out.append(value)
    return tuple(out)
