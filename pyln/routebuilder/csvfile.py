"""Reading hop policies from, and writing HTLCs to, CSV files."""
from .builder import HopResult
from .errors import RouteError, StructuralInputError
from .route import HopPolicy
from typing import Iterable, Iterator, List, TextIO
import csv
import logging
import os


logger = logging.getLogger(__name__)

INPUT_FIELDS = [
    'path_id',
    'channel_name',
    'cltv_delta',
    'base_fee_msat',
    'proportional_fee_ppm',
]

OUTPUT_FIELDS = [
    'path_id',
    'channel_name',
    'htlc_amount_msat',
    'htlc_expiry',
    'tlv',
]


def _parse_uint(row: dict, name: str, lineno: int) -> int:
    v = row.get(name)
    if v is None or v.strip() == '':
        raise StructuralInputError(
            "line {}: missing value for {}".format(lineno, name)
        )
    v = v.strip()
    # int() would also accept '+5', '1_000' and non-ASCII digits.
    if not (v.isascii() and v.isdigit()):
        raise StructuralInputError(
            "line {}: {} is not a non-negative decimal integer: {!r}".format(
                lineno, name, v)
        )
    return int(v)


def parse_hops(f: TextIO) -> Iterator[HopPolicy]:
    reader = csv.DictReader(f, skipinitialspace=True)
    if reader.fieldnames is None:
        raise StructuralInputError("hop file is empty")

    fieldnames = [n.strip() for n in reader.fieldnames]
    missing = [n for n in INPUT_FIELDS if n not in fieldnames]
    if missing:
        raise StructuralInputError(
            "hop file is missing column(s): {}".format(", ".join(missing))
        )
    reader.fieldnames = fieldnames

    for row in reader:
        lineno = reader.line_num
        if None in row:
            raise StructuralInputError(
                "line {}: more cells than columns".format(lineno)
            )
        name = row.get('channel_name')
        if name is None:
            raise StructuralInputError(
                "line {}: missing value for channel_name".format(lineno)
            )
        fields = dict(
            path_id=_parse_uint(row, 'path_id', lineno),
            channel_name=name.strip(),
            required_delay=_parse_uint(row, 'cltv_delta', lineno),
            base_fee=_parse_uint(row, 'base_fee_msat', lineno),
            proportional_fee=_parse_uint(row, 'proportional_fee_ppm', lineno),
        )
        try:
            hop = HopPolicy(**fields)
        except StructuralInputError as e:
            raise StructuralInputError("line {}: {}".format(lineno, e)) from e
        yield hop


def read_hops(path: str) -> List[HopPolicy]:
    # utf-8-sig drops the BOM spreadsheet exports like to prepend.
    with open(path, 'r', newline='', encoding='utf-8-sig') as f:
        try:
            hops = list(parse_hops(f))
        except (csv.Error, UnicodeDecodeError) as e:
            raise StructuralInputError("{}: {}".format(path, e)) from e

    logger.debug("Read %d hop(s) from %s", len(hops), path)
    return hops


def format_results(results: Iterable[HopResult], f: TextIO) -> None:
    writer = csv.writer(f, lineterminator='\n')
    writer.writerow(OUTPUT_FIELDS)
    for r in results:
        writer.writerow([
            str(r.path_id),
            r.channel_name,
            str(r.amount),
            str(r.expiry),
            r.metadata_hex,
        ])


def write_results(path: str, results: Iterable[HopResult]) -> None:
    """Write `results` to `path`, all or nothing.

    The rows go to a temporary file next to `path` which is only renamed
    into place once everything has been written.
    """
    tmp = '{}.tmp.{}'.format(path, os.getpid())
    try:
        with open(tmp, 'w', newline='', encoding='utf-8') as f:
            format_results(results, f)
        os.replace(tmp, path)
    except (OSError, RouteError):
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
