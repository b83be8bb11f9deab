"""Fee Engine: the amount each hop's HTLC has to carry.

Every hop charges its own fee on the amount it forwards, so the walk
starts at the recipient's side and adds fees on the way back to the
sender. The first hop is not special-cased: its fee is applied too.
"""
from .primitives import check_width, mul_div
from .route import HopPolicy, Path
from typing import List
import logging


logger = logging.getLogger(__name__)

PPM = 1_000_000


def hop_fee(policy: HopPolicy, downstream_amount: int) -> int:
    """Fee `policy` charges for forwarding `downstream_amount`.

    The proportional part is truncated, never rounded.
    """
    proportional = mul_div(downstream_amount, policy.proportional_fee, PPM)
    return policy.base_fee + proportional


def forward_amounts(path: Path, destination_amount: int) -> List[int]:
    """Return the HTLC amount of every hop in `path`, in hop order."""
    downstream = check_width(destination_amount, 64, 'destination amount')
    amounts = [0] * len(path)

    for k in reversed(range(len(path))):
        h = path[k]
        fee = hop_fee(h, downstream)
        amounts[k] = check_width(
            downstream + fee, 64,
            "amount of hop {} on path {}".format(h.channel_name, h.path_id))
        logger.debug("path %d hop %s: forwards %d, fee %d, carries %d",
                     h.path_id, h.channel_name, downstream, fee, amounts[k])
        downstream = amounts[k]

    return amounts
