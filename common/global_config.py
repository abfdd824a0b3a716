import os
import warnings
import yaml
from pathlib import Path
from typing import Any

from dotenv import load_dotenv, dotenv_values
from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)

from .config_models import (
    LoggingConfig,
    MiniMaxConfig,
    PreviewConfig,
    ServerConfig,
    StoryboardDefaultsConfig,
    TimeoutConfig,
    VideoPollingConfig,
)

# Get the path to the root directory (one level up from common)
root_dir = Path(__file__).parent.parent

DEVELOPMENT_ENVS = {"dev", "development", "local"}


def _recursive_update(default: dict, override: dict) -> dict:
    """Recursively update nested dictionaries."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(default.get(key), dict):
            _recursive_update(default[key], value)
        else:
            default[key] = value
    return default


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r") as file:
            return yaml.safe_load(file) or {}
    except yaml.YAMLError as e:
        raise RuntimeError(f"Invalid YAML in {path}: {e}")


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Settings source that loads from YAML files with priority:
    1. .global_config.yaml (highest priority, git-ignored)
    2. production_config.yaml (if DEV_ENV=prod)
    3. global_config.yaml (base config)
    """

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        self.yaml_data = self._load_yaml_files()

    def _load_yaml_files(self) -> dict[str, Any]:
        config_path = root_dir / "common" / "global_config.yaml"
        if not config_path.exists():
            raise RuntimeError(f"Required config file not found: {config_path}")
        config_data = _read_yaml(config_path)

        if os.getenv("DEV_ENV") == "prod":
            prod_config_path = root_dir / "common" / "production_config.yaml"
            if prod_config_path.exists():
                prod_config_data = _read_yaml(prod_config_path)
                if prod_config_data:
                    config_data = _recursive_update(config_data, prod_config_data)
                    logger.warning(
                        "Overwriting common/global_config.yaml with common/production_config.yaml"
                    )

        custom_config_path = root_dir / ".global_config.yaml"
        if custom_config_path.exists():
            custom_config_data = _read_yaml(custom_config_path)
            if custom_config_data:
                config_data = _recursive_update(config_data, custom_config_data)
                warning_msg = (
                    "Overwriting default common/global_config.yaml with .global_config.yaml"
                )
                if config_data.get("logging", {}).get("verbose"):
                    warning_msg += f"\nCustom .global_config.yaml values:\n---\n{yaml.dump(custom_config_data, default_flow_style=False)}"
                logger.warning(warning_msg)

        return config_data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML data."""
        field_value = self.yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete YAML configuration."""
        return self.yaml_data


class Config(BaseSettings):
    """
    Global configuration using Pydantic Settings.
    Loads from:
    1. Environment variables (from .env or .prod.env)
    2. YAML files (global_config.yaml, production_config.yaml, .global_config.yaml)
    """

    model_config = SettingsConfigDict(
        env_file=str(root_dir / ".env"),
        env_file_encoding="utf-8",
        # Nested overrides, e.g. MINIMAX__BASE_URL or VIDEO_POLLING__MAX_ATTEMPTS
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="allow",
    )

    # Top-level fields
    service_name: str
    dot_global_config_health_check: bool
    use_mock_mode: bool = False
    minimax: MiniMaxConfig
    timeouts: TimeoutConfig
    video_polling: VideoPollingConfig
    preview: PreviewConfig
    storyboard_defaults: StoryboardDefaultsConfig
    logging: LoggingConfig
    server: ServerConfig

    # Environment variables. Provider credentials stay optional here so the
    # server can boot without them; the generation client rejects their
    # absence on first use.
    DEV_ENV: str = "prod"
    MINIMAX_API_KEY: str | None = None
    MINIMAX_GROUP_ID: str | None = None

    # Runtime environment (computed)
    is_local: bool = Field(default=False)
    running_on: str = Field(default="")

    @field_validator("is_local", mode="before")
    @classmethod
    def set_is_local(cls, v: Any) -> bool:
        """Set is_local based on GITHUB_ACTIONS env var."""
        return os.getenv("GITHUB_ACTIONS") != "true"

    @field_validator("running_on", mode="before")
    @classmethod
    def set_running_on(cls, v: Any) -> str:
        """Set running_on based on is_local."""
        is_local = os.getenv("GITHUB_ACTIONS") != "true"
        return "local" if is_local else "CI"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize the priority order of settings sources.
        Priority (highest to lowest):
        1. Environment variables
        2. .env file
        3. YAML files (custom .global_config.yaml > production_config.yaml > global_config.yaml)
        4. Init settings (passed to constructor)
        """
        return (
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            init_settings,
        )

    @property
    def is_development(self) -> bool:
        """True when error responses may carry stack traces."""
        return self.DEV_ENV.lower() in DEVELOPMENT_ENVS

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()


# Load .env file first, to get DEV_ENV if it's defined there
load_dotenv(dotenv_path=root_dir / ".env", override=True)

# Now, check DEV_ENV and load .prod.env if it's 'prod', overriding .env
if os.getenv("DEV_ENV") == "prod":
    load_dotenv(dotenv_path=root_dir / ".prod.env", override=True)

is_local = os.getenv("GITHUB_ACTIONS") != "true"
if is_local:
    env_file_to_check = ".prod.env" if os.getenv("DEV_ENV") == "prod" else ".env"
    env_values = dotenv_values(root_dir / env_file_to_check)
    if not env_values:
        warnings.warn(f"{env_file_to_check} file not found or empty", UserWarning)

# Create a singleton instance
global_config = Config()
