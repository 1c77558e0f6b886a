#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
class OccurrenceError(Exception):
    pass


class UnsupportedRuleShape(OccurrenceError):
    """Raised when a recurrence rule uses a construct the expander cannot
    expand without approximating it.

    Parameters
    ----------
    field
        The rule field holding the unsupported construct.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidBound(OccurrenceError):
    """Raised when an occurrence chain has neither a count nor an end to stop at."""
