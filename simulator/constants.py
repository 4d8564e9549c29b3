from enum import Enum

# === Reserved Names ===
START_STATE = "q0"
ACCEPT_STATE = "ha"
BLANK = "_"

# === Head Movement ===
MOVES = {"L": -1, "R": 1, "S": 0}

# === Limits ===
MAX_HISTORY = 2000
MAX_BATCH_STEPS = 5000

# === Diagram Colours ===
THEME = {
    "primary": "#ea580c",
    "success": "#10b981",
    "error": "#ef4444",
    "stroke": "#94a3b8",
    "text": "#312e81",
}


class Status(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self):
        return self in (Status.ACCEPTED, Status.REJECTED)
