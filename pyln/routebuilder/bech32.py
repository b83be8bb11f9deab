# Copyright (c) 2017 Pieter Wuille
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

"""Bech32 decoding for BOLT #11 payment requests.

Only the checksum and character-set rules are enforced: invoices are
routinely longer than the 90 characters allowed for segwit addresses.
"""
from typing import Tuple


CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
GENERATOR = (0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3)
CHECKSUM_LEN = 6


def bech32_polymod(values: bytes) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i, g in enumerate(GENERATOR):
            if (top >> i) & 1:
                chk ^= g
    return chk


def bech32_hrp_expand(hrp: str) -> bytes:
    """Expand the HRP into values for checksum computation."""
    return bytes([ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp])


def bech32_decode(bech: str) -> Tuple[str, bytes]:
    """Split a bech32 string into its HRP and 5-bit data values.

    The checksum is verified and stripped from the returned data.
    """
    if any(ord(x) < 33 or ord(x) > 126 for x in bech):
        raise ValueError("Not a bech32-encoded string: {}".format(bech))
    if bech.lower() != bech and bech.upper() != bech:
        raise ValueError("Mixed case in bech32 string: {}".format(bech))

    bech = bech.lower()
    pos = bech.rfind('1')
    if pos < 1 or pos + CHECKSUM_LEN + 1 > len(bech):
        raise ValueError("Could not locate hrp separator '1' in {}".format(bech))

    data_part = bech[pos + 1:]
    bad = [x for x in data_part if x not in CHARSET]
    if bad:
        raise ValueError("Non-bech32 character {!r} found".format(bad[0]))

    hrp = bech[:pos]
    data = bytes([CHARSET.find(x) for x in data_part])
    if bech32_polymod(bech32_hrp_expand(hrp) + data) != 1:
        raise ValueError("Checksum verification failed for {}".format(bech))

    return hrp, data[:-CHECKSUM_LEN]
