"""Generic guarded finite state machine."""

from __future__ import annotations

from typing import Any, Hashable, Iterable

from wordcalc.fsm.states import (
    Delta,
    NoTransitionError,
    TransitionTableError,
    label_of,
)
from wordcalc.utils.logging import get_logger

logger = get_logger("fsm.machine")


class Machine:
    """
    Finite State Machine over a caller-owned context.

    The transition table is read-only and may be shared between machines.
    The context is never copied: effects mutate it in place, and it stays
    owned by whoever created the machine.
    """

    def __init__(
        self,
        initial: Hashable,
        deltas: Iterable[Delta],
        context: Any,
        name: str = "machine",
    ) -> None:
        """
        Initialize the machine.

        Args:
            initial: Starting state
            deltas: Ordered transition rules
            context: Mutable context handed to guards and effects
            name: Label used in log events

        Raises:
            TransitionTableError: If the table is malformed
        """
        self.deltas: tuple[Delta, ...] = tuple(deltas)
        self.context = context
        self.name = name

        validate_table(self.deltas)

        if initial not in self.states:
            raise TransitionTableError(
                f"Initial state {label_of(initial)} is not referenced by the table"
            )

        self.current = initial

    @property
    def states(self) -> set[Hashable]:
        """All states referenced by the transition table."""
        states: set[Hashable] = set()
        for delta in self.deltas:
            states.add(delta.current)
            states.add(delta.next)
        return states

    def candidates(self, event: Hashable) -> list[Delta]:
        """Rules registered for the current state and the event, in table order."""
        return [d for d in self.deltas if d.matches(self.current, event)]

    def exec(self, event: Hashable) -> Delta:
        """
        Dispatch an event against the current state.

        Selects the first matching rule whose guard allows the context, runs
        its effect and moves to the rule's next state. If the effect raises,
        the exception propagates and the state is left unchanged.

        Args:
            event: Event to dispatch

        Returns:
            The rule that fired

        Raises:
            NoTransitionError: If no rule applies
        """
        selected = None
        for delta in self.candidates(event):
            if delta.allows(self.context):
                selected = delta
                break

        if selected is None:
            raise NoTransitionError(self.current, event)

        if selected.effect is not None:
            selected.effect(selected, self.context)

        previous = self.current
        self.current = selected.next

        logger.debug(
            "state_transition",
            machine=self.name,
            trigger=label_of(event),
            from_state=label_of(previous),
            to_state=label_of(self.current),
        )

        return selected


def validate_table(deltas: Iterable[Delta]) -> None:
    """
    Check that every unguarded rule is the last rule for its state/event pair.

    Raises:
        TransitionTableError: If an unguarded rule shadows a later rule
    """
    unguarded: set[tuple[Hashable, Hashable]] = set()
    for delta in deltas:
        key = (delta.current, delta.event)
        if key in unguarded:
            raise TransitionTableError(
                f"Rule for {label_of(delta.current)} x {label_of(delta.event)} "
                "is shadowed by an earlier unguarded rule"
            )
        if delta.guard is None:
            unguarded.add(key)
