"""Decode BOLT #11 payment requests into `PaymentParameters`.

Only decoding is supported; the route builder never creates invoices.
"""
from .bech32 import bech32_decode, CHARSET
from .errors import InvalidPaymentParametersError
from .route import PaymentParameters
from binascii import hexlify
from decimal import Decimal
from typing import List, Optional, Tuple
import bitstring
import coincurve
import logging
import re


logger = logging.getLogger(__name__)

# BOLT #11:
# - if the `c` field (`min_final_cltv_expiry_delta`) is not provided:
#   - MUST use an expiry delta of at least 18 when making the payment
DEFAULT_MIN_FINAL_CLTV_EXPIRY = 18

SIGNATURE_LEN = 65
MSAT_PER_BTC = 10**11


def unshorten_amount(amount: str) -> Decimal:
    """ Given a shortened amount, convert it into a decimal
    """
    # BOLT #11:
    # The following `multiplier` letters are defined:
    #
    # * `m` (milli): multiply by 0.001
    # * `u` (micro): multiply by 0.000001
    # * `n` (nano): multiply by 0.000000001
    # * `p` (pico): multiply by 0.000000000001
    units = {
        'p': 10**12,
        'n': 10**9,
        'u': 10**6,
        'm': 10**3,
    }
    # BOLT #11:
    # A reader SHOULD fail if `amount` contains a non-digit, or is followed by
    # anything except a `multiplier` in the table above.
    if not re.fullmatch(r'\d+[pnum]?', amount):
        raise ValueError("Invalid amount '{}'".format(amount))

    unit = amount[-1]
    if unit in units:
        return Decimal(amount[:-1]) / units[unit]
    return Decimal(amount)


# Bech32 spits out array of 5-bit values.  Shim here.
def u5_to_bitarray(arr: bytes) -> bitstring.BitArray:
    ret = bitstring.BitArray()
    for a in arr:
        ret += bitstring.pack("uint:5", a)
    return ret


# Discard trailing bits, convert to bytes.
def trim_to_bytes(barr) -> bytes:
    b = barr.tobytes()
    if barr.len % 8 != 0:
        return b[:-1]
    return b


# Try to pull out tagged data: returns tag and tagged data.
def pull_tagged(stream: bitstring.ConstBitStream) -> Tuple[str, bitstring.Bits]:
    tag = stream.read(5).uint
    length = stream.read(5).uint * 32 + stream.read(5).uint
    return CHARSET[tag], stream.read(length * 5)


class Invoice(object):
    def __init__(self):
        self.currency: Optional[str] = None
        self.amount: Optional[Decimal] = None
        self.date: Optional[int] = None
        self.paymenthash: Optional[bytes] = None
        self.payment_secret: Optional[bytes] = None
        self.min_final_cltv_expiry = DEFAULT_MIN_FINAL_CLTV_EXPIRY
        self.pubkey: Optional[coincurve.PublicKey] = None
        self.tags: List[Tuple[str, object]] = []
        self.unknown_tags: List[Tuple[str, bitstring.Bits]] = []

    def __str__(self):
        return "Invoice[{}, amount={}{} tags=[{}]]".format(
            self.hexpubkey, self.amount, self.currency,
            ", ".join([k + '=' + str(v) for k, v in self.tags])
        )

    @property
    def hexpubkey(self) -> Optional[str]:
        if self.pubkey is None:
            return None
        return hexlify(self.pubkey.format()).decode('ASCII')

    @property
    def hexpaymenthash(self) -> Optional[str]:
        if self.paymenthash is None:
            return None
        return hexlify(self.paymenthash).decode('ASCII')

    @property
    def amount_msat(self) -> Optional[int]:
        if self.amount is None:
            return None
        msat = self.amount * MSAT_PER_BTC
        # BOLT #11:
        # - if the `p` multiplier is used the last decimal of `amount`
        #   MUST be `0`: the reader MUST fail otherwise.
        if msat != msat.to_integral_value():
            raise ValueError(
                "Amount {} is not a whole number of millisatoshi".format(
                    self.amount)
            )
        return int(msat)

    def _get_tagged(self, tag):
        return [t[1] for t in self.tags + self.unknown_tags if t[0] == tag]

    @property
    def featurebits(self):
        features = self._get_tagged('9')
        if features == []:
            return 0
        return features[0]

    @classmethod
    def decode(cls, b: str) -> 'Invoice':
        hrp, data = bech32_decode(b)

        # BOLT #11:
        #
        # A reader MUST fail if it does not understand the `prefix`.
        if not hrp.startswith('ln'):
            raise ValueError("Does not start with ln")

        bits = u5_to_bitarray(data)

        # Final signature 65 bytes, split it off.
        if len(bits) < SIGNATURE_LEN * 8 + 35:
            raise ValueError("Too short to contain signature")
        sigdecoded = bits[-SIGNATURE_LEN * 8:].tobytes()
        stream = bitstring.ConstBitStream(bits[:-SIGNATURE_LEN * 8])

        inv = cls()

        m = re.match(r'[^\d]+', hrp[2:])
        if m:
            inv.currency = m.group(0)
            amountstr = hrp[2 + m.end():]
            # BOLT #11:
            #
            # A reader SHOULD indicate if amount is unspecified, otherwise it MUST
            # multiply `amount` by the `multiplier` value (if any) to derive the
            # amount required for payment.
            if amountstr != '':
                inv.amount = unshorten_amount(amountstr)

        try:
            inv.date = stream.read(35).uint
            while stream.pos != stream.len:
                tag, tagdata = pull_tagged(stream)
                inv._add_tag(tag, tagdata)
        except bitstring.ReadError as e:
            raise ValueError("Truncated tagged field: {}".format(e)) from e

        inv._check_signature(hrp, stream.tobytes(), sigdecoded)
        return inv

    def _add_tag(self, tag: str, tagdata: bitstring.Bits) -> None:
        # BOLT #11:
        #
        # A reader MUST skip over unknown fields, an `f` field with unknown
        # `version`, or a `p`, `h`, `s` or `n` field which does not have
        # `data_length` 52, 52, 52 or 53 respectively.
        data_length = len(tagdata) // 5

        if tag == 'p' and data_length == 52:
            self.paymenthash = trim_to_bytes(tagdata)
        elif tag == 's' and data_length == 52:
            self.payment_secret = trim_to_bytes(tagdata)
        elif tag == 'c':
            self.min_final_cltv_expiry = tagdata.uint
        elif tag == 'd':
            self.tags.append(('d', trim_to_bytes(tagdata).decode('utf-8')))
        elif tag == 'h' and data_length == 52:
            self.tags.append(('h', trim_to_bytes(tagdata)))
        elif tag == 'x':
            self.tags.append(('x', tagdata.uint))
        elif tag == 'n' and data_length == 53:
            self.pubkey = coincurve.PublicKey(trim_to_bytes(tagdata))
        elif tag == '9':
            self.tags.append(('9', tagdata))
        else:
            self.unknown_tags.append((tag, tagdata))

    def _check_signature(self, hrp: str, data: bytes, sig: bytes) -> None:
        # BOLT #11:
        #
        # A reader MUST check that the `signature` is valid (see the `n` tagged
        # field specified below).
        msg = bytearray([ord(c) for c in hrp]) + data
        try:
            recovered = coincurve.PublicKey.from_signature_and_message(sig, bytes(msg))
        except ValueError as e:
            raise ValueError("Invalid signature: {}".format(e)) from e

        if self.pubkey is None:
            self.pubkey = recovered
        elif self.pubkey.format() != recovered.format():
            raise ValueError('Invalid signature')


def decode_payment_request(bolt11: str) -> PaymentParameters:
    """Turn an encoded payment request into `PaymentParameters`."""
    try:
        inv = Invoice.decode(bolt11.strip())
        amount = inv.amount_msat
    except ValueError as e:
        raise InvalidPaymentParametersError(
            "Could not decode payment request: {}".format(e)
        ) from e

    if amount is None:
        raise InvalidPaymentParametersError("Payment request has no amount")
    if inv.payment_secret is None:
        raise InvalidPaymentParametersError(
            "Payment request has no payment secret"
        )

    logger.debug("Decoded %s", inv)
    return PaymentParameters(
        total_amount=amount,
        payment_secret=inv.payment_secret,
        min_final_delay=inv.min_final_cltv_expiry,
    )
