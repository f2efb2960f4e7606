# -*- coding: utf-8 -*-


class FocusCycleError(Exception):
    """Base class for errors raised by the focus cycle timer."""


class InvalidInput(FocusCycleError, ValueError):
    """Task or duration rejected by the new-cycle form."""


class CycleAlreadyActive(FocusCycleError, RuntimeError):
    """A cycle is already counting down; only one may be active."""

    def __init__(self, cycle_id: str):
        super().__init__(f"Cycle {cycle_id} is still active.")
        self.cycle_id = cycle_id
