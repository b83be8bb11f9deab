from pyln.routebuilder import (
    HopPolicy, InvalidPaymentParametersError, Path, PaymentParameters,
    Route, Secret, StructuralInputError
)
from pyln.routebuilder.primitives import U32_MAX, U64_MAX
import dataclasses
import pytest


def test_hop_policy_is_immutable():
    h = HopPolicy(0, 'chan', 40, 1000, 10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        h.base_fee = 0


@pytest.mark.parametrize('kwargs', [
    dict(path_id=-1),
    dict(path_id=U32_MAX + 1),
    dict(required_delay=U32_MAX + 1),
    dict(base_fee=U64_MAX + 1),
    dict(proportional_fee=-5),
    dict(base_fee='1000'),
    dict(required_delay=True),
    dict(channel_name=''),
    dict(channel_name='a\nb'),
    dict(channel_name=None),
])
def test_hop_policy_validation(kwargs):
    fields = dict(path_id=0, channel_name='chan', required_delay=40,
                  base_fee=1000, proportional_fee=10)
    fields.update(kwargs)
    with pytest.raises(StructuralInputError):
        HopPolicy(**fields)


def test_from_hops_groups_by_first_appearance():
    route = Route.from_hops([
        HopPolicy(7, 'x0', 1, 0, 0),
        HopPolicy(2, 'y0', 1, 0, 0),
        HopPolicy(7, 'x1', 1, 0, 0),
        HopPolicy(2, 'y1', 1, 0, 0),
        HopPolicy(7, 'x2', 1, 0, 0),
    ])
    assert([p.path_id for p in route] == [7, 2])
    assert([h.channel_name for h in route.paths[0]] == ['x0', 'x1', 'x2'])
    assert([h.channel_name for h in route.paths[1]] == ['y0', 'y1'])
    assert(route.is_multipath)


def test_single_path_is_not_multipath(three_hop_route):
    assert(len(three_hop_route) == 1)
    assert(not three_hop_route.is_multipath)


def test_empty_route_and_path():
    with pytest.raises(StructuralInputError):
        Route.from_hops([])
    with pytest.raises(StructuralInputError):
        Path(path_id=0, hops=())


def test_path_rejects_foreign_and_duplicate_hops():
    with pytest.raises(StructuralInputError, match='belongs to path'):
        Path(0, [HopPolicy(0, 'a', 1, 0, 0), HopPolicy(1, 'b', 1, 0, 0)])
    with pytest.raises(StructuralInputError, match='appears twice'):
        Route.from_hops([HopPolicy(0, 'a', 1, 0, 0), HopPolicy(0, 'a', 2, 0, 0)])


def test_same_channel_on_different_paths_is_fine():
    route = Route.from_hops([HopPolicy(0, 'a', 1, 0, 0), HopPolicy(1, 'a', 1, 0, 0)])
    assert(len(route) == 2)


def test_route_rejects_duplicate_path_ids():
    p = Path(0, [HopPolicy(0, 'a', 1, 0, 0)])
    with pytest.raises(StructuralInputError):
        Route(paths=(p, p))


def test_payment_parameters(secret):
    p = PaymentParameters(120, secret.to_bytes(), 18)
    assert(p.payment_secret == secret)
    assert(p.total_amount == 120)
    assert(p.min_final_delay == 18)


@pytest.mark.parametrize('amount, delay', [
    (0, 9),
    (U64_MAX + 1, 9),
    (1.5, 9),
    (100, -1),
    (100, U32_MAX + 1),
])
def test_payment_parameters_validation(secret, amount, delay):
    with pytest.raises(InvalidPaymentParametersError):
        PaymentParameters(amount, secret, delay)


def test_payment_parameters_secret_width():
    with pytest.raises(InvalidPaymentParametersError):
        PaymentParameters(100, bytes(33), 9)
    assert(PaymentParameters(100, Secret(bytes(32)), 9).total_amount == 100)
