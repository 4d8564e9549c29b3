import json
import os
from datetime import datetime

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "max_history": 2000,
    "max_batch_steps": 5000,
    "play_interval_ms": 500,
    "tape_window": 7,
    "default_input": "abba",
    "machine_file": "",
    "output_directory": "logs/",
    "log_file_prefix": "turing_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_history": int,
    "max_batch_steps": int,
    "play_interval_ms": int,
    "tape_window": int,
    "default_input": str,
    "machine_file": str,
    "output_directory": str,
    "log_file_prefix": str
}

POSITIVE_KEYS = ["max_history", "max_batch_steps", "play_interval_ms"]

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; reject it for numeric keys
        if not isinstance(config[key], expected_type) or isinstance(config[key], bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    for key in POSITIVE_KEYS:
        if config[key] <= 0:
            raise ValueError(f"Config key '{key}' must be positive, got {config[key]}.")
    if config["tape_window"] < 0:
        raise ValueError("Config key 'tape_window' must not be negative.")

def load_config(path=None, verbose=False):
    config = DEFAULT_CONFIG.copy()

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found at: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        # Merge defaults with overrides
        config.update(user_config)

    validate_config(config)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path=DEFAULT_CONFIG_PATH):
    validate_config(config)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
    return path
