"""Typed model of the hops to pay through and the payment to make.

A `Route` is one or more `Path`s, each an ordered sequence of
`HopPolicy` values: index 0 is the channel leaving the sender, the last
index is the channel reaching the recipient.
"""
from .errors import InvalidPaymentParametersError, StructuralInputError
from .primitives import Secret, U32_MAX, U64_MAX
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple, Union


def _check_uint(name: str, v: int, maximum: int) -> None:
    if isinstance(v, bool) or not isinstance(v, int):
        raise StructuralInputError(
            "{} must be an integer, {} received".format(name, type(v).__name__)
        )
    if v < 0 or v > maximum:
        raise StructuralInputError(
            "{} out of range [0, {}]: {}".format(name, maximum, v)
        )


@dataclass(frozen=True)
class HopPolicy:
    path_id: int
    channel_name: str
    required_delay: int
    base_fee: int
    proportional_fee: int

    def __post_init__(self):
        _check_uint('path_id', self.path_id, U32_MAX)
        _check_uint('required_delay', self.required_delay, U32_MAX)
        _check_uint('base_fee', self.base_fee, U64_MAX)
        _check_uint('proportional_fee', self.proportional_fee, U64_MAX)

        if not isinstance(self.channel_name, str) or self.channel_name == '':
            raise StructuralInputError(
                "channel_name must be a non-empty string: {!r}".format(
                    self.channel_name)
            )
        # The name ends up in a CSV cell, a line break would split the row.
        if '\n' in self.channel_name or '\r' in self.channel_name:
            raise StructuralInputError(
                "channel_name contains a line break: {!r}".format(
                    self.channel_name)
            )


@dataclass(frozen=True)
class Path:
    path_id: int
    hops: Tuple[HopPolicy, ...]

    def __post_init__(self):
        object.__setattr__(self, 'hops', tuple(self.hops))
        if len(self.hops) == 0:
            raise StructuralInputError(
                "path {} has no hops".format(self.path_id)
            )

        seen = set()
        for h in self.hops:
            if h.path_id != self.path_id:
                raise StructuralInputError(
                    "hop {} belongs to path {}, not path {}".format(
                        h.channel_name, h.path_id, self.path_id)
                )
            if h.channel_name in seen:
                raise StructuralInputError(
                    "channel {} appears twice in path {}".format(
                        h.channel_name, self.path_id)
                )
            seen.add(h.channel_name)

    def __len__(self) -> int:
        return len(self.hops)

    def __iter__(self) -> Iterator[HopPolicy]:
        return iter(self.hops)

    def __getitem__(self, i: int) -> HopPolicy:
        return self.hops[i]


@dataclass(frozen=True)
class Route:
    paths: Tuple[Path, ...]

    def __post_init__(self):
        object.__setattr__(self, 'paths', tuple(self.paths))
        if len(self.paths) == 0:
            raise StructuralInputError("route has no paths")

        ids = [p.path_id for p in self.paths]
        if len(set(ids)) != len(ids):
            raise StructuralInputError(
                "route contains duplicate path ids: {}".format(ids)
            )

    @classmethod
    def from_hops(cls, hops: Iterable[HopPolicy]) -> 'Route':
        """Group hops into paths by `path_id`.

        Paths are ordered by the first appearance of their id, hops keep
        the order in which they were given.
        """
        grouped: Dict[int, List[HopPolicy]] = OrderedDict()
        for h in hops:
            grouped.setdefault(h.path_id, []).append(h)

        return cls(paths=tuple(
            Path(path_id=pid, hops=tuple(hs)) for pid, hs in grouped.items()
        ))

    @property
    def is_multipath(self) -> bool:
        return len(self.paths) > 1

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)


@dataclass(frozen=True)
class PaymentParameters:
    total_amount: int
    payment_secret: Secret
    min_final_delay: int

    def __init__(self, total_amount: int,
                 payment_secret: Union[Secret, bytes],
                 min_final_delay: int):
        if not isinstance(payment_secret, Secret):
            payment_secret = Secret(payment_secret)

        if isinstance(total_amount, bool) or not isinstance(total_amount, int):
            raise InvalidPaymentParametersError(
                "total_amount must be an integer: {!r}".format(total_amount)
            )
        if total_amount <= 0 or total_amount > U64_MAX:
            raise InvalidPaymentParametersError(
                "total_amount out of range [1, {}]: {}".format(
                    U64_MAX, total_amount)
            )
        if isinstance(min_final_delay, bool) or not isinstance(min_final_delay, int) \
                or min_final_delay < 0 or min_final_delay > U32_MAX:
            raise InvalidPaymentParametersError(
                "min_final_delay out of range [0, {}]: {!r}".format(
                    U32_MAX, min_final_delay)
            )

        object.__setattr__(self, 'total_amount', total_amount)
        object.__setattr__(self, 'payment_secret', payment_secret)
        object.__setattr__(self, 'min_final_delay', min_final_delay)
