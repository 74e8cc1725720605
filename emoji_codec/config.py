"""
Emoji Codec - Generator Configuration
"""
from __future__ import annotations
import os
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

# Environment variable naming an optional YAML config for the generator CLI
CONFIG_ENV_VAR = "EMOJI_CODEC_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class GeneratorConfig:
    """Configuration for one generation run."""

    # Paths (relative paths resolve against the working directory)
    input_path: str = "emoji.json"
    output_path: str = "emoji_table.py"

    # Logging
    log_level: str = "INFO"  # "DEBUG", "INFO", "WARNING", "ERROR"

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level} (must be one of {LOG_LEVELS})")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GeneratorConfig":
        """Create from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**d)

    @classmethod
    def from_yaml(cls, path: str) -> "GeneratorConfig":
        """Load from YAML file."""
        import yaml
        with open(path, encoding="utf-8") as f:
            d = yaml.safe_load(f) or {}
        if not isinstance(d, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        return cls.from_dict(d)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "GeneratorConfig":
        """Load the file named by EMOJI_CODEC_CONFIG, or defaults when it is unset."""
        environ = os.environ if environ is None else environ
        path = environ.get(CONFIG_ENV_VAR)
        if not path:
            return cls()
        return cls.from_yaml(path)
