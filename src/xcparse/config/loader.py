"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (XCPARSE__SECTION__KEY)
3. Explicit config file passed by the caller
4. Working directory config (./.xcparse.yaml)
5. Global config (~/.config/xcparse/config.yaml)
6. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from xcparse.config.models import LoggingConfig, ReaderConfig, ReportConfig, XcparseConfig
from xcparse.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/xcparse/config.yaml").expanduser()
LOCAL_CONFIG_NAME = ".xcparse.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class XcparseSettings(BaseSettings):
        """Root config. Env vars: XCPARSE__LOGGING__LEVEL, XCPARSE__READER__XCRUN_PATH, etc."""

        model_config = SettingsConfigDict(
            env_prefix="XCPARSE__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        reader: ReaderConfig = ReaderConfig()
        report: ReportConfig = ReportConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return XcparseSettings


def load_config(
    config_path: Path | None = None,
    *,
    cwd: Path | None = None,
    **kwargs: Any,
) -> XcparseConfig:
    """Load config: defaults < global < local < explicit file < env vars < kwargs.

    Args:
        config_path: Explicit YAML file. Must exist when given.
        cwd: Directory searched for .xcparse.yaml (default: current directory).
        **kwargs: Override values per section (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax, a missing explicit file,
            or validation errors.
    """
    yaml_config = _load_yaml(GLOBAL_CONFIG_PATH)
    yaml_config = _deep_merge(yaml_config, _load_yaml((cwd or Path.cwd()) / LOCAL_CONFIG_NAME))

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError.parse_error(str(config_path), "file does not exist")
        yaml_config = _deep_merge(yaml_config, _load_yaml(config_path))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    return XcparseConfig.model_validate(settings.model_dump())
