"""
Configuration management for the Lox interpreter.
"""

import logging
import os
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List

import yaml


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoxConfig:
    """Interpreter and runner settings, loadable from a YAML file."""

    max_call_depth: int = 255
    native_functions: bool = True
    detailed_errors: bool = False
    repl_prompt: str = "> "
    log_level: str = "WARNING"
    log_file: str | None = None

    @classmethod
    def load_from_file(cls, config_path: str) -> 'LoxConfig':
        """Load configuration from YAML file."""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoxConfig':
        """Create a configuration from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logging.getLogger("LoxConfig").warning("ignoring unknown configuration keys: %s", ", ".join(unknown))

        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain mapping."""
        return asdict(self)

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=True)

    def validate(self) -> List[str]:
        """Validate the configuration and return any errors."""
        errors = []

        if not isinstance(self.max_call_depth, int) or isinstance(self.max_call_depth, bool) \
                or self.max_call_depth <= 0:
            errors.append(f"max_call_depth must be a positive integer, got {self.max_call_depth!r}")

        if not isinstance(self.native_functions, bool):
            errors.append(f"native_functions must be true or false, got {self.native_functions!r}")

        if not isinstance(self.detailed_errors, bool):
            errors.append(f"detailed_errors must be true or false, got {self.detailed_errors!r}")

        if not isinstance(self.repl_prompt, str):
            errors.append(f"repl_prompt must be a string, got {self.repl_prompt!r}")

        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

        if self.log_file is not None and not isinstance(self.log_file, str):
            errors.append(f"log_file must be a path string, got {self.log_file!r}")

        return errors
