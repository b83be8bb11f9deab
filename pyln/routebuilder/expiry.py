"""Expiry Engine: the absolute block height at which each HTLC times out.

A hop's `required_delay` is the gap it wants between the HTLC it
receives and the one it forwards. It therefore lengthens the expiry of
the hop *upstream* of it, not its own. The last hop's HTLC expires at
the recipient's final delay, and the first hop's own delay is never
used.
"""
from .primitives import check_width, checked_add
from .route import Path
from typing import List


def final_expiry(current_height: int, min_final_delay: int) -> int:
    check_width(current_height, 32, 'current height')
    return checked_add(current_height, min_final_delay, 32, 'final expiry')


def expiry_heights(path: Path, current_height: int,
                   min_final_delay: int) -> List[int]:
    """Return the HTLC expiry of every hop in `path`, in hop order."""
    n = len(path)
    expiries = [0] * n
    expiries[n - 1] = final_expiry(current_height, min_final_delay)

    for k in reversed(range(n - 1)):
        downstream = path[k + 1]
        expiries[k] = checked_add(
            expiries[k + 1], downstream.required_delay, 32,
            "expiry of hop {} on path {}".format(path[k].channel_name,
                                                 path.path_id))

    return expiries
