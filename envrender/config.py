"""Project config loader and validation for envrender YAML files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from envrender.exceptions import ConfigValidationError, SourceIOError, ValidationError


LOG_LEVELS = ('debug', 'info', 'warn', 'error')


@dataclass
class RenderConfig:
    """
    Options that may be pinned in a project config file.

    Attributes:
        all_env: Expose the entire environment to templates
        vars: Variables source, absolute or relative to the config file
        output: Output file, absolute or relative to the config file
        interpolate: Expand ${VAR} references inside .env values
        log_level: One of LOG_LEVELS
    """
    all_env: bool = False
    vars: Optional[Path] = None
    output: Optional[Path] = None
    interpolate: bool = True
    log_level: str = 'warn'


class ConfigLoader:
    """Loads and validates an envrender YAML config file."""

    BOOL_FIELDS = {'all_env', 'interpolate'}
    PATH_FIELDS = {'vars', 'output'}
    KNOWN_FIELDS = BOOL_FIELDS | PATH_FIELDS | {'log_level'}

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, config_path: Path) -> RenderConfig:
        """Load and validate a config file.

        Raises:
            SourceIOError: The file cannot be read
            ConfigValidationError: The file is not a valid config
        """
        self.errors = []
        config_path = Path(config_path)
        try:
            text = config_path.read_text(encoding='utf-8')
        except OSError as e:
            raise SourceIOError(config_path, e.strerror or str(e))

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse YAML: {e}")
            self._raise_validation_errors()

        if data is None:
            return RenderConfig()

        if not isinstance(data, dict):
            self._add_error(f"Config must be a YAML mapping, got {type(data).__name__}")
            self._raise_validation_errors()

        self._validate(data)
        if self.errors:
            self._raise_validation_errors()

        return self._build(data, config_path.resolve().parent)

    def _validate(self, data: Dict[str, Any]) -> None:
        for key in data:
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'", str(key))

        for key in self.BOOL_FIELDS & data.keys():
            if not isinstance(data[key], bool):
                self._add_error(f"must be a boolean, got {type(data[key]).__name__}", key)

        for key in self.PATH_FIELDS & data.keys():
            value = data[key]
            if not isinstance(value, str) or not value.strip():
                self._add_error("must be a non-empty string path", key)

        if 'log_level' in data and data['log_level'] not in LOG_LEVELS:
            self._add_error(f"must be one of {list(LOG_LEVELS)}", 'log_level')

    def _build(self, data: Dict[str, Any], base_dir: Path) -> RenderConfig:
        config = RenderConfig(
            all_env=data.get('all_env', False),
            interpolate=data.get('interpolate', True),
            log_level=data.get('log_level', 'warn'),
        )
        # Relative paths are anchored at the config file, not the cwd
        if 'vars' in data:
            config.vars = base_dir / data['vars']
        if 'output' in data:
            config.output = base_dir / data['output']
        return config

    def _add_error(self, message: str, path: str = "") -> None:
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self) -> None:
        raise ConfigValidationError(self.errors)
