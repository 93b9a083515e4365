"""Guarded finite state machine engine.

A machine holds its current state, an ordered table of transition rules
(``Delta``) and a reference to a mutable context owned by the caller.
Dispatching an event picks the first rule for the (state, event) pair whose
guard allows the context, runs its effect and moves to the rule's next
state. Lexer and parser are both built on it.
"""

from wordcalc.fsm.machine import Machine, validate_table
from wordcalc.fsm.states import (
    Delta,
    Effect,
    FSMError,
    Guard,
    NoTransitionError,
    TransitionTableError,
)

__all__ = [
    "Machine",
    "validate_table",
    "Delta",
    "Guard",
    "Effect",
    "FSMError",
    "NoTransitionError",
    "TransitionTableError",
]
