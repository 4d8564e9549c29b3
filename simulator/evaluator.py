from typing import NamedTuple

import numpy as np

from simulator.constants import ACCEPT_STATE, BLANK, MAX_BATCH_STEPS, MOVES, START_STATE, Status
from simulator.transition_table import IMPLICIT_ACCEPT


def evaluate(table, input_string, max_steps=MAX_BATCH_STEPS):
    """Run input_string to a verdict without keeping any history.

    Returns Status.ACCEPTED or Status.REJECTED. A run that is still going
    after max_steps iterations counts as rejected.
    """
    tape = {i: symbol for i, symbol in enumerate(input_string) if symbol != BLANK}
    head = 0
    state = START_STATE

    for _ in range(max_steps):
        symbol = tape.get(head, BLANK)
        lookup = table.lookup(state, symbol)
        if not lookup.matched:
            return Status.ACCEPTED if lookup.outcome == IMPLICIT_ACCEPT else Status.REJECTED

        transition = lookup.transition
        new_head = head + MOVES[transition.move]
        if new_head < 0:
            return Status.REJECTED

        if transition.write == BLANK:
            tape.pop(head, None)
        else:
            tape[head] = transition.write
        head = new_head
        state = transition.to_state
        if state == ACCEPT_STATE:
            return Status.ACCEPTED

    return Status.REJECTED


def evaluate_batch(table, inputs, max_steps=MAX_BATCH_STEPS):
    """Boolean acceptance array, one entry per input."""
    inputs = list(inputs)
    return np.fromiter(
        (evaluate(table, s, max_steps) == Status.ACCEPTED for s in inputs),
        dtype=np.bool_,
        count=len(inputs),
    )


# === Test Suites ===
class SuiteCase(NamedTuple):
    id: int
    input: str
    status: Status = Status.IDLE


def make_suite_cases(inputs):
    return [SuiteCase(i, input_string) for i, input_string in enumerate(inputs, start=1)]


def run_suite_cases(table, cases, max_steps=MAX_BATCH_STEPS):
    """Return copies of the cases with their verdicts filled in."""
    accepted = evaluate_batch(table, [case.input for case in cases], max_steps)
    return [
        case._replace(status=Status.ACCEPTED if ok else Status.REJECTED)
        for case, ok in zip(cases, accepted)
    ]


def summarize_results(cases):
    summary = {"total": len(cases), "accepted": 0, "rejected": 0, "idle": 0}
    for case in cases:
        key = case.status.value.lower()
        summary[key] = summary.get(key, 0) + 1
    return summary
