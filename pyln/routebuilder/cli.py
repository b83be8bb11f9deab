from . import config
from .builder import build_route
from .csvfile import read_hops, write_results
from .errors import RouteError
from .invoice import decode_payment_request
from .route import Route
from typing import List, Optional
import argparse
import logging
import os


logger = logging.getLogger(__name__)


def height(s: str) -> int:
    if not (s.isascii() and s.isdigit()):
        raise argparse.ArgumentTypeError(
            "block height must be a non-negative integer: {!r}".format(s))
    return int(s)


LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='route-builder',
        description='Compute the HTLC amount, expiry and payment data '
                    'of every hop along a fixed (multi-path) route.')
    p.add_argument('output_dir', help='directory the result CSV is written to')
    p.add_argument('input_csv', help='CSV file with one row per hop')
    p.add_argument('payment_request', help='BOLT #11 payment request')
    p.add_argument('current_height', type=height,
                   help='current block height')
    p.add_argument('--log-level', default=None,
                   choices=LOG_LEVELS,
                   type=str.upper,
                   help='defaults to $ROUTEBUILDER_LOG_LEVEL or INFO')
    p.add_argument('--output-name', default=None,
                   help='defaults to $ROUTEBUILDER_OUTPUT_FILENAME or output.csv')
    return p


def run(output_dir: str, input_csv: str, payment_request: str,
        current_height: int, output_name: str) -> str:
    params = decode_payment_request(payment_request)
    route = Route.from_hops(read_hops(input_csv))
    results = build_route(route, params, current_height)

    os.makedirs(output_dir, exist_ok=True)
    dest = os.path.join(output_dir, output_name)
    write_results(dest, results)
    return dest


def main(argv: Optional[List[str]] = None) -> int:
    p = parser()
    args = p.parse_args(argv)

    level = args.log_level or config.log_level()
    if level not in LOG_LEVELS:
        p.error("ROUTEBUILDER_LOG_LEVEL must be one of {}, not {!r}".format(
            ', '.join(LOG_LEVELS), level))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler()
        ]
    )

    try:
        dest = run(args.output_dir, args.input_csv, args.payment_request,
                   args.current_height,
                   args.output_name or config.output_filename())
    except RouteError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1
    except OSError as e:
        logger.error("%s", e)
        return 1

    print("Successfully wrote output to {}".format(dest))
    return 0
