"""Stage mapper — picks one of four illustration stages from timer progress."""

ILLUSTRATIONS = ("RellSketch", "RellLine", "RellFlat", "RellFull")

# Lower bound (inclusive) of each band, top band first.  Progress counts DOWN
# from 1.0, so the sketch shows at the start and the full drawing at the end.
_STAGE_FLOORS = (0.75, 0.5, 0.25)


def stage(progress: float) -> int:
    """Return the stage index (0--3) for *progress* = remaining / total.

    ``[0.75, 1.0] -> 0``, ``[0.5, 0.75) -> 1``, ``[0.25, 0.5) -> 2`` and
    everything below (including NaN) ``-> 3``.
    """
    for index, floor in enumerate(_STAGE_FLOORS):
        if progress >= floor:
            return index
    return len(_STAGE_FLOORS)


def illustration(stage_index: int) -> str:
    """Return the asset name for *stage_index*."""
    if not (0 <= stage_index < len(ILLUSTRATIONS)):
        raise ValueError(
            f"stage_index must be between 0 and {len(ILLUSTRATIONS) - 1}, got {stage_index}"
        )
    return ILLUSTRATIONS[stage_index]
