# -*- coding: utf-8 -*-

from typing import Union

from domain.errors import InvalidInput
from domain.models import MAX_MINUTES, MIN_MINUTES, NewCycleData


def validate_new_cycle(task: str, minutes_amount: Union[int, str, None]) -> NewCycleData:
    """
    Validate raw form values.

    Returns the cleaned pair or raises InvalidInput with a message that is
    shown to the user as-is.
    """
    task = (task or "").strip()
    if not task:
        raise InvalidInput("Enter a task.")

    if isinstance(minutes_amount, bool):
        raise InvalidInput("Duration must be a whole number of minutes.")
    try:
        minutes = int(str(minutes_amount).strip())
    except (TypeError, ValueError):
        raise InvalidInput("Duration must be a whole number of minutes.")

    if minutes < MIN_MINUTES:
        raise InvalidInput(f"A cycle must be at least {MIN_MINUTES} minutes.")
    if minutes > MAX_MINUTES:
        raise InvalidInput(f"A cycle must be at most {MAX_MINUTES} minutes.")

    return NewCycleData(task=task, minutes_amount=minutes)
