"""Load-based choice of how many runs execute at once."""


def select_concurrency(
    num_combinations: int, max_concurrency: int | None = None
) -> int | None:
    """Return the worker count for a batch, or None to run sequentially.

    Fewer than 3 runs go sequentially; otherwise 2 (<= 5), 3 (<= 15),
    5 (<= 30) or 8. ``max_concurrency`` caps the result.
    """
    if num_combinations < 3:
        return None
    if num_combinations <= 5:
        chosen = 2
    elif num_combinations <= 15:
        chosen = 3
    elif num_combinations <= 30:
        chosen = 5
    else:
        chosen = 8
    if max_concurrency is not None:
        chosen = min(chosen, max_concurrency)
    return chosen
