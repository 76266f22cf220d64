"""
Parser configuration.

Provides:
- ParserConfig with dict round-tripping
- Loading from JSON or YAML files
- Configuration validation
"""
from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Configuration validation error."""
    pass


@dataclass
class ParserConfig:
    """
    Settings for the document driver and loader.

    Attributes:
        encoding: Codec used to decode bytes input
        legacy_literal_quotes: End literals at the first quote, ignoring backslashes
        max_workers: Thread count for parse_regions
        skip_invalid: Loader skips malformed lines instead of stopping
    """
    encoding: str = "utf-8"
    legacy_literal_quotes: bool = False
    max_workers: int = 4
    skip_invalid: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "encoding": self.encoding,
            "legacy_literal_quotes": self.legacy_literal_quotes,
            "max_workers": self.max_workers,
            "skip_invalid": self.skip_invalid,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        return cls(
            encoding=data.get("encoding", "utf-8"),
            legacy_literal_quotes=data.get("legacy_literal_quotes", False),
            max_workers=data.get("max_workers", 4),
            skip_invalid=data.get("skip_invalid", False),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ParserConfig":
        """
        Load configuration from a .json, .yaml or .yml file.

        Raises:
            ConfigValidationError: If the file type is unknown or the values are invalid
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")

        if path.suffix.lower() == ".json":
            data = json.loads(text)
        elif path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            raise ConfigValidationError(f"Unsupported config file type: {path.suffix}")

        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config file {path} must contain a mapping")

        config = cls.from_dict(data)
        config.validate_or_raise()
        logger.debug(f"Loaded parser config from {path}")
        return config

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns list of error messages (empty if valid).
        """
        errors = []

        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError):
            errors.append(f"Unknown encoding: {self.encoding}")

        if not isinstance(self.max_workers, int) or self.max_workers < 1:
            errors.append("max_workers must be at least 1")

        if not isinstance(self.legacy_literal_quotes, bool):
            errors.append("legacy_literal_quotes must be a boolean")

        if not isinstance(self.skip_invalid, bool):
            errors.append("skip_invalid must be a boolean")

        return errors

    def validate_or_raise(self) -> None:
        """Validate configuration, raising on errors."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))
