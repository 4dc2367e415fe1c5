"""Homepage configuration loader."""

import hashlib
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from curation.config.constants import COMPONENT_CONFIG
from curation.config.error_hints import format_validation_error
from curation.config.schemas.homepage import HomepageConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """homepage.yaml was missing or invalid."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: Validation error details (loc, msg, type).
            file_path: Configuration file that was rejected.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"{file_path}: {len(errors)} configuration error(s)")

    def format_errors(self, *, include_hints: bool = True) -> list[str]:
        """Render each error as a human-readable line."""
        return [
            format_validation_error(
                error["loc"], error["msg"], error["type"], include_hint=include_hints
            )
            for error in self.errors
        ]


class ConfigLoader:
    """Loads homepage.yaml into a validated, immutable HomepageConfig."""

    def __init__(self) -> None:
        """Initialize the loader."""
        self._checksum: str | None = None
        self._log = logger.bind(component=COMPONENT_CONFIG)

    @property
    def checksum(self) -> str | None:
        """SHA-256 of the last loaded file, if any."""
        return self._checksum

    def load(self, path: Path | None = None) -> HomepageConfig:
        """Load and validate a configuration file.

        Args:
            path: Path to homepage.yaml; defaults are used when None.

        Returns:
            Validated configuration.

        Raises:
            ConfigValidationError: If the file is missing, unparsable or invalid.
        """
        if path is None:
            self._log.info("config_defaults_used")
            return HomepageConfig()

        file_path = str(path)
        try:
            content = path.read_bytes()
        except FileNotFoundError as e:
            raise ConfigValidationError(
                [{"loc": "file", "msg": str(e), "type": "file_not_found"}], file_path
            ) from e

        self._checksum = hashlib.sha256(content).hexdigest()

        try:
            data = yaml.safe_load(content.decode("utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                [{"loc": "file", "msg": str(e), "type": "yaml_parse_error"}], file_path
            ) from e

        try:
            config = HomepageConfig.model_validate(data)
        except ValidationError as e:
            errors = [
                {
                    "loc": ".".join(str(part) for part in err["loc"]) or "root",
                    "msg": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            self._log.error(
                "config_validation_failed",
                file_path=file_path,
                validation_error_count=len(errors),
            )
            raise ConfigValidationError(errors, file_path) from e

        self._log.info(
            "config_file_loaded",
            file_path=file_path,
            file_sha256=self._checksum,
            language_count=len(config.languages),
        )
        return config


def load_config(path: Path | None = None) -> HomepageConfig:
    """Load homepage configuration from an optional path."""
    return ConfigLoader().load(path)
