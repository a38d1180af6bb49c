"""
Configuration Validation Module
Validates storage and integration settings on startup
"""
import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass

from rapiddial.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""
    component: str
    setting: str
    is_valid: bool
    message: str


class ConfigValidator:
    """
    Validates integration settings at startup.

    The database is the only hard requirement. Redis, Supabase Storage and
    Twilio credentials are optional: the engine runs without them with the
    outcome cache, recording archive, or authenticated recording download
    disabled respectively.
    """

    # (component, settings attributes, description)
    OPTIONAL_GROUPS = [
        ("cache", ("redis_url",), "Redis outcome catalog cache"),
        ("recordings", ("supabase_url", "supabase_service_key"), "Supabase recording archive"),
        ("telephony", ("twilio_account_sid", "twilio_auth_token"), "Twilio recording download"),
    ]

    def __init__(self, settings: Settings, strict: bool = False):
        """
        Initialize validator.

        Args:
            settings: Settings to validate
            strict: If True, treat warnings as errors
        """
        self.settings = settings
        self.strict = strict
        self.results: List[ValidationResult] = []

    def validate_all(self) -> Tuple[bool, List[ValidationResult]]:
        """
        Validate all settings.

        Returns:
            Tuple of (all_valid, list of results)
        """
        self.results = []

        self._validate_database()

        for component, attributes, description in self.OPTIONAL_GROUPS:
            values = [getattr(self.settings, attr) for attr in attributes]
            names = ", ".join(attr.upper() for attr in attributes)
            if all(values):
                self._add_success(component, names, f"{description} configured")
            elif any(values):
                self._add_error(component, names,
                    f"{description} is partially configured; set all of {names}")
            else:
                self._add_warning(component, names,
                    f"{description} not configured (feature disabled)")

        errors = [r for r in self.results if not r.is_valid]
        return len(errors) == 0, self.results

    def _validate_database(self) -> None:
        url = self.settings.database_url
        if not url:
            self._add_error("database", "DATABASE_URL", "DATABASE_URL must be set")
        elif url.startswith("sqlite") and self.settings.environment == "production":
            self._add_error("database", "DATABASE_URL",
                "SQLite is not supported in production; point DATABASE_URL at PostgreSQL")
        elif url.startswith("sqlite"):
            self._add_warning("database", "DATABASE_URL",
                "Using local SQLite database (development only)")
        else:
            self._add_success("database", "DATABASE_URL", "Database configured")

    def _add_success(self, component: str, setting: str, message: str):
        self.results.append(ValidationResult(
            component=component,
            setting=setting,
            is_valid=True,
            message=message
        ))

    def _add_error(self, component: str, setting: str, message: str):
        self.results.append(ValidationResult(
            component=component,
            setting=setting,
            is_valid=False,
            message=message
        ))

    def _add_warning(self, component: str, setting: str, message: str):
        self.results.append(ValidationResult(
            component=component,
            setting=setting,
            is_valid=not self.strict,  # Warnings become errors in strict mode
            message=f"WARNING: {message}"
        ))

    def log_results(self):
        """Log all validation results."""
        for r in self.results:
            if not r.is_valid:
                logger.error(f"[{r.component}] {r.message}")
            elif "WARNING" in r.message:
                logger.warning(f"[{r.component}] {r.message}")
            else:
                logger.info(f"[{r.component}] {r.message}")

    def get_error_summary(self) -> Optional[str]:
        """Get summary of errors for exception message."""
        errors = [r for r in self.results if not r.is_valid]
        if not errors:
            return None

        lines = ["Configuration errors:"]
        for r in errors:
            lines.append(f"  - {r.setting}: {r.message}")
        return "\n".join(lines)


def validate_settings_on_startup(settings: Settings, strict: bool = False) -> None:
    """
    Validate settings at startup.

    Raises:
        RuntimeError: If required configuration is missing or inconsistent
    """
    validator = ConfigValidator(settings, strict=strict)
    all_valid, _ = validator.validate_all()
    validator.log_results()

    if not all_valid:
        raise RuntimeError(validator.get_error_summary())

    logger.info("Configuration validated successfully")
