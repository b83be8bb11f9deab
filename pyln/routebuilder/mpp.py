from .errors import IndivisibleAmountError, StructuralInputError
from typing import List


def split_amount(total_amount: int, path_count: int) -> List[int]:
    """Divide `total_amount` equally across `path_count` paths.

    A remainder is an error: nothing is rounded or redistributed.
    """
    if path_count < 1:
        raise StructuralInputError(
            "cannot split a payment across {} paths".format(path_count)
        )
    if total_amount % path_count != 0:
        raise IndivisibleAmountError(total_amount, path_count)
    return [total_amount // path_count] * path_count
