"""Exception hierarchy for event-study-compare.

Catch ``EventStudyError`` to handle any package-specific failure::

    try:
        aligned = align_series(raw)
    except EventStudyError as exc:
        logger.warning("Skipping %s: %s", raw.name, exc)
"""


class EventStudyError(Exception):
    """Base class for all event-study-compare errors."""


class InvalidConfiguration(EventStudyError, ValueError):
    """Simulation parameters cannot produce a valid panel.

    Raised for non-positive unit or period counts, an adoption window
    that starts after the last period or is empty, or a
    never-treated share outside ``[0, 1)``.
    """


class AlignmentError(EventStudyError):
    """An estimator's output cannot be placed on the relative-time axis."""

    def __init__(self, estimator: str, message: str):
        self.estimator = estimator
        super().__init__(f"{estimator}: {message}")


class DuplicateRelativeTime(AlignmentError):
    """Two raw entries of one estimator decode to the same relative time."""

    def __init__(self, estimator: str, relative_time: int, labels: tuple):
        self.relative_time = relative_time
        self.labels = labels
        super().__init__(
            estimator,
            f"labels {list(labels)} all map to relative time {relative_time}",
        )


class MissingReferencePeriod(AlignmentError):
    """A split-label series omits more leads than the single reference period."""

    def __init__(self, estimator: str, missing: list[int]):
        self.missing = missing
        super().__init__(
            estimator,
            f"leads missing besides the reference period: {missing}",
        )


class UnrecognizedLabel(AlignmentError, ValueError):
    """A raw label matches none of the estimator's label conventions."""
