"""Tests for the guarded state machine engine."""

from __future__ import annotations

import io
import json
from dataclasses import dataclass, field
from enum import Enum, auto

import pytest

from wordcalc.fsm import (
    Delta,
    Machine,
    NoTransitionError,
    TransitionTableError,
    validate_table,
)
from wordcalc.utils.logging import configure_logging


class Light(Enum):
    OFF = auto()
    ON = auto()
    BROKEN = auto()


class Switch(Enum):
    FLIP = auto()
    KICK = auto()


@dataclass
class Counter:
    flips: int = 0
    limit: int = 3
    log: list[str] = field(default_factory=list)


def count_flip(delta: Delta, ctx: Counter) -> None:
    ctx.flips += 1
    ctx.log.append(f"{delta.current.name}->{delta.next.name}")


def under_limit(delta: Delta, ctx: Counter) -> bool:
    return ctx.flips < ctx.limit


def at_limit(delta: Delta, ctx: Counter) -> bool:
    return ctx.flips >= ctx.limit


class Fuse(Exception):
    pass


def blow_fuse(delta: Delta, ctx: Counter) -> None:
    raise Fuse("blown")


DELTAS = (
    Delta(Light.OFF, Switch.FLIP, Light.ON, guard=under_limit, effect=count_flip),
    Delta(Light.OFF, Switch.FLIP, Light.BROKEN, guard=at_limit),
    Delta(Light.ON, Switch.FLIP, Light.OFF, effect=count_flip),
    Delta(Light.ON, Switch.KICK, Light.BROKEN, effect=blow_fuse),
)


class TestExec:
    """Rule selection and state changes."""

    def test_unguarded_rule_fires(self) -> None:
        machine = Machine(Light.ON, DELTAS, Counter())

        fired = machine.exec(Switch.FLIP)

        assert machine.current is Light.OFF
        assert fired is DELTAS[2]

    def test_guard_selects_between_rules_for_same_pair(self) -> None:
        ctx = Counter(flips=0, limit=1)
        machine = Machine(Light.OFF, DELTAS, ctx)

        machine.exec(Switch.FLIP)
        machine.exec(Switch.FLIP)
        machine.exec(Switch.FLIP)

        assert machine.current is Light.BROKEN
        assert ctx.log == ["OFF->ON", "ON->OFF"]

    def test_effect_mutates_caller_context_in_place(self) -> None:
        ctx = Counter()
        machine = Machine(Light.OFF, DELTAS, ctx)

        machine.exec(Switch.FLIP)

        assert machine.context is ctx
        assert ctx.flips == 1

    def test_unknown_pair_raises_no_transition(self) -> None:
        machine = Machine(Light.OFF, DELTAS, Counter())

        with pytest.raises(NoTransitionError) as exc_info:
            machine.exec(Switch.KICK)

        assert exc_info.value.state is Light.OFF
        assert exc_info.value.event is Switch.KICK
        assert "OFF" in str(exc_info.value)
        assert "KICK" in str(exc_info.value)

    def test_all_guards_false_raises_no_transition(self) -> None:
        deltas = (
            Delta(Light.OFF, Switch.FLIP, Light.ON, guard=lambda d, c: False),
            Delta(Light.OFF, Switch.FLIP, Light.BROKEN, guard=lambda d, c: False),
        )
        machine = Machine(Light.OFF, deltas, Counter())

        with pytest.raises(NoTransitionError):
            machine.exec(Switch.FLIP)

        assert machine.current is Light.OFF

    def test_effect_error_propagates_and_keeps_state(self) -> None:
        machine = Machine(Light.ON, DELTAS, Counter())

        with pytest.raises(Fuse):
            machine.exec(Switch.KICK)

        assert machine.current is Light.ON

    def test_guard_error_propagates_verbatim(self) -> None:
        def broken_guard(delta: Delta, ctx: Counter) -> bool:
            raise KeyError("missing")

        deltas = (Delta(Light.OFF, Switch.FLIP, Light.ON, guard=broken_guard),)
        machine = Machine(Light.OFF, deltas, Counter())

        with pytest.raises(KeyError):
            machine.exec(Switch.FLIP)

        assert machine.current is Light.OFF

    def test_guards_are_evaluated_in_table_order(self) -> None:
        seen: list[str] = []

        def first(delta: Delta, ctx: Counter) -> bool:
            seen.append("first")
            return True

        def second(delta: Delta, ctx: Counter) -> bool:
            seen.append("second")
            return True

        deltas = (
            Delta(Light.OFF, Switch.FLIP, Light.ON, guard=first),
            Delta(Light.OFF, Switch.FLIP, Light.BROKEN, guard=second),
        )
        machine = Machine(Light.OFF, deltas, Counter())

        machine.exec(Switch.FLIP)

        assert machine.current is Light.ON
        assert seen == ["first"]

    def test_dispatch_is_deterministic(self) -> None:
        outcomes = set()
        for _ in range(5):
            machine = Machine(Light.OFF, DELTAS, Counter(flips=2, limit=3))
            outcomes.add(machine.exec(Switch.FLIP))

        assert outcomes == {DELTAS[0]}


class TestTable:
    """Transition table validation."""

    def test_states_lists_every_referenced_state(self) -> None:
        machine = Machine(Light.OFF, DELTAS, Counter())

        assert machine.states == {Light.OFF, Light.ON, Light.BROKEN}

    def test_initial_state_must_be_referenced(self) -> None:
        deltas = (Delta(Light.ON, Switch.FLIP, Light.OFF),)

        with pytest.raises(TransitionTableError):
            Machine(Light.BROKEN, deltas, Counter())

    def test_unguarded_rule_must_come_last_for_its_pair(self) -> None:
        deltas = (
            Delta(Light.OFF, Switch.FLIP, Light.ON),
            Delta(Light.OFF, Switch.FLIP, Light.BROKEN, guard=at_limit),
        )

        with pytest.raises(TransitionTableError):
            validate_table(deltas)

    def test_unguarded_fallback_after_guarded_rule_is_allowed(self) -> None:
        deltas = (
            Delta(Light.OFF, Switch.FLIP, Light.BROKEN, guard=at_limit),
            Delta(Light.OFF, Switch.FLIP, Light.ON),
        )

        validate_table(deltas)
        machine = Machine(Light.OFF, deltas, Counter(flips=0))
        machine.exec(Switch.FLIP)

        assert machine.current is Light.ON

    def test_candidates_follow_table_order(self) -> None:
        machine = Machine(Light.OFF, DELTAS, Counter())

        assert machine.candidates(Switch.FLIP) == [DELTAS[0], DELTAS[1]]
        assert machine.candidates(Switch.KICK) == []


class TestLogging:
    """Transitions are logged at debug level."""

    def test_transition_is_logged(self) -> None:
        stream = io.StringIO()
        configure_logging(level="debug", format_type="json", stream=stream)
        machine = Machine(Light.ON, DELTAS, Counter(), name="lamp")

        machine.exec(Switch.FLIP)

        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        [record] = [r for r in records if r["event"] == "state_transition"]
        assert record["machine"] == "lamp"
        assert record["trigger"] == "FLIP"
        assert record["from_state"] == "ON"
        assert record["to_state"] == "OFF"
        assert machine.current is Light.OFF
