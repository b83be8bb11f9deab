class RouteError(ValueError):
    """Base class for everything that aborts a route computation."""


class StructuralInputError(RouteError):
    """Malformed or incomplete hop records, or an empty path."""


class ArithmeticOverflowError(RouteError, OverflowError):
    """A computed value does not fit its declared width."""

    def __init__(self, what: str, value: int, bits: int):
        super().__init__(
            "{} does not fit in {} bits: {}".format(what, bits, value)
        )
        self.what = what
        self.value = value
        self.bits = bits


class IndivisibleAmountError(RouteError):
    def __init__(self, total_amount: int, path_count: int):
        super().__init__(
            "Cannot split {} evenly across {} paths (remainder {})".format(
                total_amount, path_count, total_amount % path_count
            )
        )
        self.total_amount = total_amount
        self.path_count = path_count


class InvalidPaymentParametersError(RouteError):
    """The payment request could not be turned into usable parameters."""
