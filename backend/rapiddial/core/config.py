"""
Configuration Management
Loads settings from environment variables and engine tunables from YAML files
"""
import yaml
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Make .env values visible to ${VAR} substitution in the YAML config
load_dotenv()


# Built-in engine defaults (overridable from config/*.yaml)
DEFAULT_ENGINE_CONFIG: Dict[str, Any] = {
    "calling_list": {
        "max_prospects": 50,
        "cluster_count": 3,
    },
    "scoring": {
        "specialty_weights": {
            "Chiropractor": 30,
            "Dental": 25,
            "Medical": 28,
            "Physical Therapy": 22,
            "Dermatology": 20,
            "Other": 15,
        },
        "default_specialty_weight": 15,
    },
}


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API Settings
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Database
    database_url: str = "sqlite:///./rapiddial.db"
    database_echo: bool = False
    storage_timeout_seconds: float = 5.0

    # Redis (call-outcome catalog cache)
    redis_url: Optional[str] = None
    outcome_cache_ttl_seconds: int = 300

    # Supabase Storage (recording archive)
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None
    recordings_bucket: str = "recordings"

    # Twilio credentials used to download recordings
    twilio_account_sid: Optional[str] = None
    twilio_auth_token: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance for the running process"""
    return Settings()


class ConfigManager:
    """Manages loading and merging configuration from multiple sources"""

    def __init__(self, env: str = "development", config_dir: Optional[Path] = None):
        self.env = env
        self.config_dir = config_dir or Path(__file__).parent.parent.parent / "config"
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration files in order of precedence"""
        self._config = _copy_tree(DEFAULT_ENGINE_CONFIG)

        default_path = self.config_dir / "default.yaml"
        if default_path.exists():
            self._deep_merge(self._config, self._load_yaml(default_path))

        # Environment-specific overrides
        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            self._deep_merge(self._config, self._load_yaml(env_path))

        self._substitute_env_vars(self._config)

    def _load_yaml(self, path: Path) -> Dict:
        """Load YAML file"""
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}

    def _substitute_env_vars(self, config: Dict) -> None:
        """Replace ${VAR_NAME} with environment variable values"""
        for key, value in config.items():
            if isinstance(value, dict):
                self._substitute_env_vars(value)
            elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                env_var = value[2:-1]
                config[key] = os.getenv(env_var, value)

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Recursively merge override into base"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation
        Example: config.get("calling_list.max_prospects") -> 50
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value


def _copy_tree(tree: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: _copy_tree(value) if isinstance(value, dict) else value
        for key, value in tree.items()
    }
