import random

# Consecutive duplicate draws tolerated before the offset window is widened.
MAX_STALE_ATTEMPTS = 20


def shuffle_options(values, rng=None) -> list:
    """Return a Fisher-Yates shuffled copy of ``values``."""
    rng = rng or random
    result = list(values)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def synthesize_options(correct: int, count: int = 4, rng=None) -> list[str]:
    """
    Build ``count`` distinct numeric options around ``correct``.

    Each distractor sits a random offset above or below the correct value;
    the offset window is half the correct value (at least 1). Values below
    zero are clamped to zero. Repeated draws that only produce values
    already in the set widen the window, so small answers such as 0 still
    terminate.

    Returns:
        The options as strings, shuffled, with ``str(correct)`` among them.
    """
    rng = rng or random
    used = {correct}
    options = [correct]

    variation = max(1, int(correct * 0.5))
    stale = 0
    while len(options) < count:
        offset = rng.randint(1, variation)
        if rng.random() < 0.5:
            candidate = correct + offset
        else:
            candidate = max(0, correct - offset)

        if candidate in used:
            stale += 1
            if stale >= MAX_STALE_ATTEMPTS:
                variation *= 2
                stale = 0
            continue

        used.add(candidate)
        options.append(candidate)
        stale = 0

    return [str(option) for option in shuffle_options(options, rng)]
