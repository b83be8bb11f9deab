from .errors import ArithmeticOverflowError, InvalidPaymentParametersError


U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

WIDTHS = {
    32: U32_MAX,
    64: U64_MAX,
}


def check_width(value: int, bits: int, what: str) -> int:
    """Narrow `value` to an unsigned integer of `bits` width.

    Raises `ArithmeticOverflowError` rather than wrapping around.
    """
    if value < 0 or value > WIDTHS[bits]:
        raise ArithmeticOverflowError(what, value, bits)
    return value


def checked_add(a: int, b: int, bits: int, what: str) -> int:
    return check_width(a + b, bits, what)


def mul_div(a: int, b: int, divisor: int) -> int:
    """Compute floor(a * b / divisor) without losing the high bits.

    The product of two u64 values needs up to 128 bits. Python integers
    are unbounded, so the intermediate is kept exact and only the caller
    decides which width the quotient must be narrowed to.
    """
    if a < 0 or b < 0:
        raise ValueError("mul_div operands must be non-negative: {}, {}".format(a, b))
    if divisor <= 0:
        raise ValueError("mul_div divisor must be positive: {}".format(divisor))
    wide = a * b
    return wide // divisor


class Secret(object):
    """A 32-byte payment secret."""
    length = 32

    def __init__(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidPaymentParametersError(
                "payment secret must be bytes, {} received".format(type(data))
            )
        if len(data) != self.length:
            raise InvalidPaymentParametersError(
                "payment secret must be {}-byte long, {} received".format(
                    self.length, len(data))
            )
        self.data = bytes(data)

    @classmethod
    def from_hex(cls, s: str) -> 'Secret':
        try:
            raw = bytes.fromhex(s)
        except ValueError as e:
            raise InvalidPaymentParametersError(
                "payment secret is not valid hex: {}".format(s)
            ) from e
        return cls(raw)

    def to_bytes(self) -> bytes:
        return self.data

    def hex(self) -> str:
        return self.data.hex()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Secret) and self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __str__(self):
        return "Secret[0x{}]".format(self.data.hex())

    def __repr__(self):
        return str(self)
