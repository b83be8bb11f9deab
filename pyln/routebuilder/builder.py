"""Assemble per-hop HTLC amounts, expiries and metadata for a route."""
from .expiry import expiry_heights
from .fees import forward_amounts
from .mpp import split_amount
from .primitives import check_width
from .route import Path, PaymentParameters, Route
from .tlv import PaymentDataRecord, hop_metadata
from dataclasses import dataclass
from typing import List, Optional
import logging


logger = logging.getLogger(__name__)

# How a hop without metadata is rendered at the output boundary.
NULL = 'NULL'


@dataclass(frozen=True)
class HopResult:
    path_id: int
    channel_name: str
    amount: int
    expiry: int
    metadata: Optional[PaymentDataRecord] = None

    @property
    def metadata_hex(self) -> str:
        if self.metadata is None:
            return NULL
        return self.metadata.to_hex()


def build_path(route: Route, path: Path, destination_amount: int,
               params: PaymentParameters,
               current_height: int) -> List[HopResult]:
    amounts = forward_amounts(path, destination_amount)
    expiries = expiry_heights(path, current_height, params.min_final_delay)

    results = []
    for i, (h, amount, expiry) in enumerate(zip(path, amounts, expiries)):
        results.append(HopResult(
            path_id=h.path_id,
            channel_name=h.channel_name,
            amount=amount,
            expiry=expiry,
            metadata=hop_metadata(route, path, i, params),
        ))

    logger.debug("path %d: %d hops, delivers %d, sender commits %d "
                 "expiring at %d", path.path_id, len(path),
                 destination_amount, amounts[0], expiries[0])
    return results


def build_route(route: Route, params: PaymentParameters,
                current_height: int) -> List[HopResult]:
    """Compute the HTLC of every hop of every path in `route`.

    Results come back in input order: paths in order of first
    appearance, hops in the order given within each path.
    """
    check_width(current_height, 32, 'current height')
    shares = split_amount(params.total_amount, len(route))

    results: List[HopResult] = []
    for path, share in zip(route, shares):
        results.extend(build_path(route, path, share, params, current_height))

    logger.info("Built %d HTLCs over %d path(s) for a payment of %d",
                len(results), len(route), params.total_amount)
    return results
