"""Option list filtering and column chunking for list-style inputs."""

from typing import List, Sequence

from formgen.predicates import strict_equals

GRID_COLUMNS = 12


def _option_attr(option, attr):
    if isinstance(option, dict):
        return option.get(attr)
    return getattr(option, attr, None)


def filter_options(options: Sequence, search_term="", static_mode=False, bound_value=None) -> List:
    """Filter *options* for display.

    In static mode only the option whose ``value`` matches the bound input
    value is kept, so a single read-only label can be shown.  Values compare
    strictly: ``1`` never matches ``"1"``.  Otherwise an empty search term
    keeps every option and a non-empty one keeps options whose ``desc``
    contains the term, ignoring case.
    """
    options = list(options or [])
    if static_mode:
        if isinstance(bound_value, (list, tuple, set)):
            return [
                o for o in options
                if any(strict_equals(_option_attr(o, "value"), v) for v in bound_value)
            ]
        return [o for o in options if strict_equals(_option_attr(o, "value"), bound_value)]

    if search_term is None or search_term == "":
        return options
    needle = str(search_term).lower()
    return [o for o in options if needle in str(_option_attr(o, "desc")).lower()]


def chunk_options(options: Sequence, chunk_count: int) -> List[List]:
    """Split *options* into exactly *chunk_count* ordered groups.

    Group sizes differ by at most one; leading groups take the extra items and
    trailing groups may be empty when there are fewer options than groups.
    """
    if isinstance(chunk_count, bool) or not isinstance(chunk_count, int) or chunk_count < 1:
        raise ValueError(f"chunk count must be a positive integer, got {chunk_count!r}")
    options = list(options or [])
    base, extra = divmod(len(options), chunk_count)
    groups = []
    start = 0
    for index in range(chunk_count):
        size = base + (1 if index < extra else 0)
        groups.append(options[start:start + size])
        start += size
    return groups


def column_width(chunk_count: int) -> int:
    """Grid units per chunk column on the 12-unit grid."""
    if chunk_count < 1:
        raise ValueError(f"chunk count must be a positive integer, got {chunk_count!r}")
    return max(1, GRID_COLUMNS // chunk_count)
