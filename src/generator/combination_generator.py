"""Core logic for generating item combinations across groups."""

import itertools
import string
from collections import OrderedDict
from typing import Dict, List, Sequence

Combination = List[str]

KEY_SEPARATOR = "|"


def group_label(index: int) -> str:
    """
    Return the label for the group at a 0-based position.

    Positions 0..25 map to A..Z. Past Z the labels continue the way
    spreadsheet columns do: AA, AB, ..., AZ, BA, ..., ZZ, AAA, ...

    Args:
        index: 0-based group position

    Returns:
        Group label
    """
    if index < 0:
        raise ValueError(f"Group index must be >= 0, got {index}")

    letters = string.ascii_uppercase
    label = ""
    n = index + 1
    while n > 0:
        n, remainder = divmod(n - 1, len(letters))
        label = letters[remainder] + label
    return label


def label_groups(items: Sequence[int]) -> "OrderedDict[str, List[str]]":
    """
    Expand group sizes into labeled groups of items.

    Example: [1, 2, 1] -> {A: [A1], B: [B1, B2], C: [C1]}

    A size of 0 still consumes a label but owns no items.

    Args:
        items: Group sizes, in request order

    Returns:
        Ordered mapping of group label to item labels
    """
    groups = OrderedDict()
    for index, count in enumerate(items):
        label = group_label(index)
        groups[label] = [f"{label}{i}" for i in range(1, count + 1)]
    return groups


def non_empty_groups(groups: Dict[str, List[str]]) -> "OrderedDict[str, List[str]]":
    """Keep only the groups that own at least one item."""
    return OrderedDict((label, codes) for label, codes in groups.items() if codes)


def choose(labels: Sequence[str], k: int) -> List[List[str]]:
    """
    Enumerate every size-k subsequence of labels (combinations, not permutations).

    Args:
        labels: Candidate labels
        k: Subsequence length

    Returns:
        List of subsequences in lexicographic index order
    """
    result: List[List[str]] = []
    if k > len(labels):
        return result

    def backtrack(start: int, path: List[str]) -> None:
        if len(path) == k:
            result.append(list(path))
            return
        # Stop early once not enough labels remain to fill the path
        for i in range(start, len(labels) - (k - len(path)) + 1):
            path.append(labels[i])
            backtrack(i + 1, path)
            path.pop()

    backtrack(0, [])
    return result


def cartesian(groups_of_items: Sequence[Sequence[str]]) -> List[Combination]:
    """
    Cartesian product of item groups; position i of each tuple comes from group i.

    The product of no groups is a single empty combination.
    """
    return [list(pick) for pick in itertools.product(*groups_of_items)]


def generate_valid_combinations(groups: Dict[str, List[str]], length: int) -> List[Combination]:
    """
    Generate every combination of `length` items taken from distinct groups.

    Args:
        groups: Ordered mapping of group label to item labels
        length: Number of groups (and items) per combination

    Returns:
        Flat list of combinations, grouped by the order choose() yields subsets
    """
    usable = non_empty_groups(groups)

    combinations: List[Combination] = []
    for label_set in choose(list(usable.keys()), length):
        arrays = [usable[label] for label in label_set]
        combinations.extend(cartesian(arrays))
    return combinations


def calculate_combinations_count(items: Sequence[int], length: int) -> int:
    """
    Calculate total combinations without generating them.

    This is the elementary symmetric sum of degree `length` over the group
    sizes: the sum, over every choice of `length` groups, of the product of
    their sizes.

    Args:
        items: Group sizes
        length: Combination length

    Returns:
        Exact number of combinations generate_valid_combinations() would return
    """
    sizes = [count for count in items if count > 0]
    if length < 0 or length > len(sizes):
        return 0

    # totals[j] holds the sum over size-j subsets seen so far
    totals = [1] + [0] * length
    for size in sizes:
        for j in range(length, 0, -1):
            totals[j] += totals[j - 1] * size
    return totals[length]


def combination_key(combination: Sequence[str]) -> str:
    """Order-independent storage key: sorted item labels joined with '|'."""
    return KEY_SEPARATOR.join(sorted(combination))


def split_into_chunks(values: Sequence, chunk_size: int = 1000) -> List[list]:
    """
    Split a sequence into chunks for batched writes.

    Args:
        values: Sequence to split
        chunk_size: Maximum entries per chunk

    Returns:
        List of lists
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    if len(values) <= chunk_size:
        return [list(values)] if values else []

    chunks = []
    for i in range(0, len(values), chunk_size):
        chunks.append(list(values[i:i + chunk_size]))
    return chunks
