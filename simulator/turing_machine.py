from collections import deque
from typing import NamedTuple

from simulator.constants import (
    ACCEPT_STATE,
    BLANK,
    MAX_HISTORY,
    MOVES,
    START_STATE,
    Status,
)
from simulator.graph import project
from simulator.transition_table import IMPLICIT_ACCEPT, TransitionTable, compile_source


class Snapshot(NamedTuple):
    tape: dict
    head: int
    current_state: str
    status: Status
    step_count: int


class TuringMachine:
    """Single-tape machine driven one step at a time.

    The machine never schedules itself; callers invoke step() as often as
    they like and read tape, head, status and last_error back.
    """

    def __init__(self, table=None, max_history=MAX_HISTORY):
        self.table = table if table is not None else TransitionTable()
        self.graph = project(self.table)
        self.history = deque(maxlen=max_history)
        self.input_string = ""
        self.tape = {}
        self.head = 0
        self.current_state = START_STATE
        self.status = Status.IDLE
        self.step_count = 0
        self.last_error = None

    # === Program ===
    def compile(self, source_text):
        """Compile and swap in a new program, then restart the current input.

        A CompileError propagates and leaves the loaded program untouched.
        """
        compiled = compile_source(source_text)
        self.table, self.graph = compiled.table, compiled.graph
        self.load_input(self.input_string)
        return compiled

    def set_max_history(self, size):
        """Resize the undo history, keeping the most recent snapshots."""
        self.history = deque(self.history, maxlen=size)

    # === Run Control ===
    def load_input(self, input_string):
        self.input_string = input_string
        self.tape = {i: symbol for i, symbol in enumerate(input_string) if symbol != BLANK}
        self.head = 0
        self._restart()

    def set_head_position(self, index):
        if index < 0:
            raise ValueError(f"Head position must be non-negative, got {index}.")
        self.head = index
        self._restart()

    def _restart(self):
        self.current_state = START_STATE
        self.step_count = 0
        self.status = Status.IDLE
        self.last_error = None
        self.history.clear()

    def play(self):
        if not self.status.is_terminal:
            self.status = Status.RUNNING

    def pause(self):
        if self.status == Status.RUNNING:
            self.status = Status.PAUSED

    # === Stepping ===
    def read_symbol(self):
        return self.tape.get(self.head, BLANK)

    def snapshot(self):
        return Snapshot(dict(self.tape), self.head, self.current_state, self.status, self.step_count)

    def step(self):
        if self.status.is_terminal:
            return self.status

        symbol = self.read_symbol()
        lookup = self.table.lookup(self.current_state, symbol)
        self.history.append(self.snapshot())

        if not lookup.matched:
            if lookup.outcome == IMPLICIT_ACCEPT:
                self.status = Status.ACCEPTED
            else:
                self.status = Status.REJECTED
                self.last_error = f"No transition for ({self.current_state}, {symbol})"
            return self.status

        transition = lookup.transition
        new_head = self.head + MOVES[transition.move]
        if new_head < 0:
            self.status = Status.REJECTED
            self.last_error = "Crash: head moved past the left end of the tape."
            return self.status

        if transition.write == BLANK:
            self.tape.pop(self.head, None)
        else:
            self.tape[self.head] = transition.write
        self.head = new_head
        self.current_state = transition.to_state
        self.step_count += 1
        if transition.to_state == ACCEPT_STATE:
            self.status = Status.ACCEPTED
        return self.status

    def step_back(self):
        if not self.history:
            return self.status
        previous = self.history.pop()
        self.tape = dict(previous.tape)
        self.head = previous.head
        self.current_state = previous.current_state
        self.step_count = previous.step_count
        self.status = Status.PAUSED
        self.last_error = None
        return self.status

    def run(self, max_steps=10000):
        """Step until the machine halts or max_steps calls have been made."""
        steps = 0
        while not self.status.is_terminal and steps < max_steps:
            self.step()
            steps += 1
        return steps

    # === Views ===
    @property
    def halted(self):
        return self.status.is_terminal

    def active_transition(self):
        """The transition the next step would fire, or None."""
        if self.status.is_terminal:
            return None
        return self.table.lookup(self.current_state, self.read_symbol()).transition

    def tape_window(self, radius=7):
        """(index, symbol) pairs around the head, clipped at the left end."""
        start = max(0, self.head - radius)
        return [(i, self.tape.get(i, BLANK)) for i in range(start, self.head + radius + 1)]

    def tape_contents(self):
        """Tape text from index 0 to the last written cell, blanks included."""
        if not self.tape:
            return ""
        return "".join(self.tape.get(i, BLANK) for i in range(max(self.tape) + 1))
