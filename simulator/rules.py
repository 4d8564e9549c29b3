import re
from typing import NamedTuple, Optional

COMMENT_PREFIXES = ("//", "#", ";")

# <state> <read>/<write>,<move> <next>   [// or # or ; comment]
RULE_PATTERN = re.compile(
    r"^(\w+)\s+([^\s/])\s*/\s*([^\s/])\s*,\s*([RLS])\s+(\w+)(?:\s*(?://|#|;).*)?$"
)


class CompileError(ValueError):
    """Raised when machine source text cannot be turned into a transition table."""

    def __init__(self, message, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class Rule(NamedTuple):
    from_state: str
    read: str
    write: str
    move: str
    to_state: str
    line_index: int

    @property
    def key(self):
        return transition_key(self.from_state, self.read)

    @property
    def label(self):
        return f"{self.read}/{self.write},{self.move}"


def transition_key(state, symbol):
    return f"{state}:{symbol}"


def is_skippable(line):
    """Blank lines and lines holding nothing but a comment carry no rule."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIXES)


def parse_line(line, line_index=0):
    match = RULE_PATTERN.match(line.strip())
    if match is None:
        raise CompileError(f"Syntax error in '{line.strip()}'", line_number=line_index + 1)
    from_state, read, write, move, to_state = match.groups()
    return Rule(from_state, read, write, move, to_state, line_index)


def parse(source_text):
    """Split source text into rules, in source order."""
    rules = []
    for line_index, line in enumerate(source_text.splitlines()):
        if is_skippable(line):
            continue
        rules.append(parse_line(line, line_index))
    return rules
