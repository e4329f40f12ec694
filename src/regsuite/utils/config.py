"""Configuration management for regsuite."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from regsuite.utils.exceptions import ConfigurationError, InvalidConfiguration

# Third-party hosts whose failures never count as a navigation failure.
DEFAULT_IGNORABLE_DOMAINS: tuple[str, ...] = (
    "googlesyndication",
    "googleapis",
    "googleads",
    "analytics",
    "doubleclick",
    "facebook",
    "twitter",
)


@dataclass
class AppConfig:
    """Application configuration."""

    output_dir: Path
    base_url: str = "https://demoqa.com"
    form_path: str = "/automation-practice-form"
    page_timeout: int = 60000  # ms
    element_timeout: int = 20000  # ms
    max_attempts: int = 3
    retry_delay: int = 1000  # ms between attempts
    confirm_timeout: int = 1000  # ms predicate window per attempt
    viewport: tuple[int, int] = (1280, 800)
    headless: bool = True
    ignorable_domains: tuple[str, ...] = field(
        default=DEFAULT_IGNORABLE_DOMAINS
    )

    @property
    def form_url(self) -> str:
        """Absolute URL of the registration form."""
        return self.base_url.rstrip("/") + "/" + self.form_path.lstrip("/")

    def validate(self) -> None:
        """Check the retry and timing settings.

        Raises:
            InvalidConfiguration: If max_attempts is below 1 or any timeout or
                delay is negative.
        """
        if self.max_attempts < 1:
            raise InvalidConfiguration(
                f"max_attempts must be >= 1, got {self.max_attempts}"
            )
        timings = ("page_timeout", "element_timeout", "retry_delay", "confirm_timeout")
        for name in timings:
            value = getattr(self, name)
            if value < 0:
                raise InvalidConfiguration(f"{name} must be >= 0, got {value}")


class ConfigLoader:
    """Loads configuration from environment variables."""

    @staticmethod
    def load() -> AppConfig:
        """Load configuration from environment.

        Raises:
            ConfigurationError: If required configuration is missing or invalid.
        """
        load_dotenv()  # Load .env file if present

        output_dir = Path(os.environ.get("REGSUITE_OUTPUT", "./output"))

        config = AppConfig(
            output_dir=output_dir,
            base_url=os.environ.get("REGSUITE_BASE_URL", "https://demoqa.com"),
            form_path=os.environ.get(
                "REGSUITE_FORM_PATH", "/automation-practice-form"
            ),
            page_timeout=ConfigLoader._get_int_env("REGSUITE_PAGE_TIMEOUT", 60000),
            element_timeout=ConfigLoader._get_int_env(
                "REGSUITE_ELEMENT_TIMEOUT", 20000
            ),
            max_attempts=ConfigLoader._get_int_env("REGSUITE_MAX_ATTEMPTS", 3),
            retry_delay=ConfigLoader._get_int_env("REGSUITE_RETRY_DELAY", 1000),
            confirm_timeout=ConfigLoader._get_int_env(
                "REGSUITE_CONFIRM_TIMEOUT", 1000
            ),
            viewport=ConfigLoader._get_viewport_env("REGSUITE_VIEWPORT", (1280, 800)),
            headless=ConfigLoader._get_bool_env("REGSUITE_HEADLESS", True),
            ignorable_domains=ConfigLoader._get_list_env(
                "REGSUITE_IGNORABLE_DOMAINS", DEFAULT_IGNORABLE_DOMAINS
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _get_int_env(name: str, default: int) -> int:
        """Get an integer environment variable.

        Args:
            name: The environment variable name.
            default: The default value if not set.

        Returns:
            The integer value.

        Raises:
            ConfigurationError: If the value is not a valid integer.
        """
        value = os.environ.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for {name}: '{value}' is not a valid integer"
            ) from e

    @staticmethod
    def _get_bool_env(name: str, default: bool) -> bool:
        value = os.environ.get(name)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ConfigurationError(
            f"Invalid value for {name}: '{value}' is not a valid boolean"
        )

    @staticmethod
    def _get_viewport_env(name: str, default: tuple[int, int]) -> tuple[int, int]:
        """Parse a ``WIDTHxHEIGHT`` environment variable."""
        value = os.environ.get(name)
        if value is None:
            return default
        parts = value.lower().split("x")
        try:
            width, height = (int(p) for p in parts)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for {name}: '{value}' is not WIDTHxHEIGHT"
            ) from e
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Invalid value for {name}: '{value}' must be positive"
            )
        return (width, height)

    @staticmethod
    def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
        value = os.environ.get(name)
        if value is None:
            return default
        return tuple(item.strip() for item in value.split(",") if item.strip())
