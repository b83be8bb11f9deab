from pyln.routebuilder import HopPolicy, PaymentParameters, Route, Secret
import pytest


SECRET_HEX = '11' * 32


@pytest.fixture
def secret():
    return Secret(bytes.fromhex(SECRET_HEX))


@pytest.fixture
def three_hop_route():
    """A single path whose hops each charge something different."""
    return Route.from_hops([
        HopPolicy(path_id=0, channel_name='alice-bob', required_delay=40,
                  base_fee=1000, proportional_fee=10),
        HopPolicy(path_id=0, channel_name='bob-carol', required_delay=65,
                  base_fee=2000, proportional_fee=500),
        HopPolicy(path_id=0, channel_name='carol-dave', required_delay=15,
                  base_fee=0, proportional_fee=3000),
    ])


@pytest.fixture
def three_path_route():
    return Route.from_hops([
        HopPolicy(0, 'a0', 40, 1, 1),
        HopPolicy(0, 'a1', 20, 1, 1),
        HopPolicy(1, 'b0', 10, 0, 0),
        HopPolicy(2, 'c0', 30, 2, 0),
        HopPolicy(2, 'c1', 12, 0, 0),
        HopPolicy(2, 'c2', 6, 0, 0),
    ])


@pytest.fixture
def params(secret):
    return PaymentParameters(total_amount=100_000_000, payment_secret=secret,
                             min_final_delay=9)
