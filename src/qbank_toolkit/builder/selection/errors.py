"""
Module: builder.selection.errors

Purpose:
    Construction-time failures of the selection engine. Both are
    structural: retrying with the same inputs cannot succeed.

Key Classes:
    - SelectionError: Base class
    - InvalidRangeError: Requested id range is unusable
    - InsufficientGroupsError: Fewer distinct groups than requested questions
"""

from __future__ import annotations


class SelectionError(Exception):
    """Error during question selection."""
    pass


class InvalidRangeError(SelectionError):
    """Start/end bounds violate the pool's id space."""

    def __init__(self, start: int, end: int, max_id: int):
        super().__init__(
            f"Invalid question range [{start}, {end}] for pool with max id {max_id}"
        )
        self.start = start
        self.end = end
        self.max_id = max_id


class InsufficientGroupsError(SelectionError):
    """Not enough distinct groups in range to pick the requested count."""

    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Cannot select {requested} questions: only {available} distinct groups in range"
        )
        self.requested = requested
        self.available = available
