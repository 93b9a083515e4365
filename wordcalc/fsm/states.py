"""Transition rule and error definitions for the guarded state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional

# A guard is a side-effect-free predicate over the machine context.
Guard = Callable[["Delta", Any], bool]

# An effect runs when its rule fires. It reports domain failures by raising.
Effect = Callable[["Delta", Any], None]


@dataclass(frozen=True)
class Delta:
    """
    A single transition rule.

    Several deltas may share a (current, event) pair; their guards must then
    be mutually exclusive. An unguarded delta always matches and has to be
    the last one for its pair.
    """

    current: Hashable
    event: Hashable
    next: Hashable
    guard: Optional[Guard] = None
    effect: Optional[Effect] = None

    def matches(self, state: Hashable, event: Hashable) -> bool:
        """Check whether this rule is registered for the state/event pair."""
        return self.current == state and self.event == event

    def allows(self, context: Any) -> bool:
        """Evaluate the guard against the context (unguarded rules always allow)."""
        if self.guard is None:
            return True
        return bool(self.guard(self, context))


def label_of(value: Hashable) -> str:
    return getattr(value, "name", None) or str(value)


class FSMError(Exception):
    """Base class for state machine configuration faults."""

    pass


class NoTransitionError(FSMError):
    """No rule applies to the current state and the dispatched event."""

    def __init__(self, state: Hashable, event: Hashable) -> None:
        self.state = state
        self.event = event
        super().__init__(
            f"No transition: {label_of(state)} x {label_of(event)}"
        )


class TransitionTableError(FSMError):
    """The transition table itself is malformed."""

    pass
