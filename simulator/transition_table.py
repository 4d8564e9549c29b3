from collections.abc import Mapping
from typing import NamedTuple, Optional

from simulator.constants import ACCEPT_STATE
from simulator.graph import Graph, project
from simulator.rules import CompileError, parse, transition_key

# === Lookup Outcomes ===
MATCHED = "matched"
IMPLICIT_ACCEPT = "implicit_accept"
IMPLICIT_REJECT = "implicit_reject"


class Transition(NamedTuple):
    from_state: str
    read: str
    write: str
    move: str
    to_state: str
    rule_index: int
    label: str


class Lookup(NamedTuple):
    outcome: str
    transition: Optional[Transition] = None

    @property
    def matched(self):
        return self.outcome == MATCHED


class TransitionTable(Mapping):
    """Read-only mapping from "state:symbol" to the transition it fires."""

    def __init__(self, transitions=()):
        self._transitions = tuple(transitions)
        self._by_key = {transition_key(t.from_state, t.read): t for t in self._transitions}

    def __getitem__(self, key):
        return self._by_key[key]

    def __iter__(self):
        return iter(self._by_key)

    def __len__(self):
        return len(self._by_key)

    def __repr__(self):
        return f"TransitionTable({len(self)} transitions)"

    @property
    def transitions(self):
        """Transitions ordered by rule index."""
        return self._transitions

    def lookup(self, state, symbol):
        transition = self._by_key.get(transition_key(state, symbol))
        if transition is not None:
            return Lookup(MATCHED, transition)
        if state == ACCEPT_STATE:
            return Lookup(IMPLICIT_ACCEPT)
        return Lookup(IMPLICIT_REJECT)


class CompiledMachine(NamedTuple):
    table: TransitionTable
    graph: Graph


def build(rules):
    if not rules:
        raise CompileError("No valid states found.")

    seen = {}
    transitions = []
    for rule in rules:
        if rule.key in seen:
            first = seen[rule.key]
            raise CompileError(
                f"Duplicate transition for ({rule.from_state}, {rule.read}), "
                f"already defined on line {first.line_index + 1}",
                line_number=rule.line_index + 1,
            )
        seen[rule.key] = rule
        transitions.append(Transition(
            rule.from_state,
            rule.read,
            rule.write,
            rule.move,
            rule.to_state,
            len(transitions),
            rule.label,
        ))

    table = TransitionTable(transitions)
    return CompiledMachine(table, project(table))


def compile_source(source_text):
    """Parse and build in one go; nothing is returned unless both succeed."""
    return build(parse(source_text))
