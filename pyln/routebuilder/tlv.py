"""Payment data record attached to the last hop of every part of a
multi-part payment.

The record uses fixed 8-byte big-endian `type` and `length` headers. It
is NOT the BigSize-prefixed TLV stream used inside real onion payloads,
and it is never parsed as one.
"""
from .primitives import Secret, check_width
from .route import Path, PaymentParameters, Route
from binascii import hexlify, unhexlify
from typing import Optional
import struct


class PaymentDataRecord(object):
    TYPE = 8
    LENGTH = Secret.length + 8
    SIZE = 8 + 8 + LENGTH

    _fmt = "!QQ{}sQ".format(Secret.length)

    def __init__(self, payment_secret: Secret, total_amount: int):
        if not isinstance(payment_secret, Secret):
            payment_secret = Secret(payment_secret)
        self.payment_secret = payment_secret
        self.total_amount = check_width(total_amount, 64, 'total amount')

    @classmethod
    def from_bytes(cls, b: bytes) -> 'PaymentDataRecord':
        if len(b) != cls.SIZE:
            raise ValueError(
                "Payment data record must be {} bytes, got {}".format(
                    cls.SIZE, len(b))
            )
        typenum, length, secret, total = struct.unpack(cls._fmt, b)
        if typenum != cls.TYPE or length != cls.LENGTH:
            raise ValueError(
                "Unexpected payment data header type={} length={}".format(
                    typenum, length)
            )
        return cls(Secret(secret), total)

    @classmethod
    def from_hex(cls, s: str) -> 'PaymentDataRecord':
        if isinstance(s, str):
            s = s.encode('ASCII')
        return cls.from_bytes(bytes(unhexlify(s)))

    def to_bytes(self) -> bytes:
        b = struct.pack(self._fmt, self.TYPE, self.LENGTH,
                        self.payment_secret.to_bytes(), self.total_amount)
        assert(len(b) == self.SIZE)
        return b

    def to_hex(self) -> str:
        return hexlify(self.to_bytes()).decode('ASCII')

    def __eq__(self, other: object) -> bool:
        return (isinstance(other, PaymentDataRecord)
                and self.payment_secret == other.payment_secret
                and self.total_amount == other.total_amount)

    def __hash__(self) -> int:
        return hash((self.payment_secret, self.total_amount))

    def __str__(self):
        return ("PaymentDataRecord[secret={self.payment_secret}, "
                "total_amount={self.total_amount}]").format(self=self)


def hop_metadata(route: Route, path: Path, index: int,
                 params: PaymentParameters) -> Optional[PaymentDataRecord]:
    """Record for hop `index` of `path`, or None if it carries none.

    Only the last hop of each path gets one, and only when the payment
    is actually split across several paths.
    """
    if not route.is_multipath or index != len(path) - 1:
        return None
    return PaymentDataRecord(params.payment_secret, params.total_amount)
