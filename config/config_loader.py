import json
import os
from datetime import datetime

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "verbose": False,
    "log_results": False,
    "output_directory": "logs/",
    "log_file_prefix": "turing_",
    "results_directory": "results/",
}

# Expected types for validation
CONFIG_SCHEMA = {
    "verbose": bool,
    "log_results": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "results_directory": str,
}


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    unknown = set(config) - set(CONFIG_SCHEMA)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")


def load_config(path=None, echo=False):
    """
    Load the runtime config, merged over DEFAULT_CONFIG.

    Without an explicit path, a missing default file just yields the
    defaults. An explicit path that does not exist is an error.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not os.path.exists(path):
            return DEFAULT_CONFIG.copy()
    elif not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    if echo:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config
