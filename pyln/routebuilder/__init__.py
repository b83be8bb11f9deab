from .builder import HopResult, build_route, NULL
from .errors import (
    ArithmeticOverflowError,
    IndivisibleAmountError,
    InvalidPaymentParametersError,
    RouteError,
    StructuralInputError,
)
from .expiry import expiry_heights
from .fees import forward_amounts, hop_fee
from .invoice import Invoice, decode_payment_request
from .mpp import split_amount
from .primitives import Secret
from .route import HopPolicy, Path, PaymentParameters, Route
from .tlv import PaymentDataRecord

__version__ = "0.1.0"

__all__ = [
    "ArithmeticOverflowError",
    "HopPolicy",
    "HopResult",
    "IndivisibleAmountError",
    "InvalidPaymentParametersError",
    "Invoice",
    "NULL",
    "Path",
    "PaymentDataRecord",
    "PaymentParameters",
    "Route",
    "RouteError",
    "Secret",
    "StructuralInputError",
    "build_route",
    "decode_payment_request",
    "expiry_heights",
    "forward_amounts",
    "hop_fee",
    "split_amount",
    "__version__",
]
