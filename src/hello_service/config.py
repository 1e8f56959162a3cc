import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ALLOWED_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_TRUTHY = ("true", "1", "yes", "on")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration loaded from environment variables."""

    service_name: str
    environment: str
    log_level: str
    metrics_namespace: str

    # --- Diagnostic Logging ---
    log_event: bool
    max_logged_event_kb: int

    # --- Derived Properties ---
    @property
    def max_logged_event_bytes(self) -> int:
        return self.max_logged_event_kb * 1024

    @classmethod
    def load_from_env(cls) -> "AppConfig":
        """
        Loads configuration from environment variables, performing validation and type casting.
        Fails fast with a ConfigurationError if anything is invalid.
        """
        try:
            service_name = os.getenv("SERVICE_NAME", "hello-service").strip()
            if not service_name:
                raise ValueError("SERVICE_NAME must not be empty.")

            # Set by the provisioning layer; the handler only uses it as a metric dimension.
            environment = os.getenv("ENVIRONMENT", "production").strip()
            if not environment:
                raise ValueError("ENVIRONMENT must not be empty.")

            log_level = os.getenv("LOG_LEVEL", "INFO").upper()
            if log_level not in ALLOWED_LOG_LEVELS:
                raise ValueError(
                    f"LOG_LEVEL must be one of {ALLOWED_LOG_LEVELS}, not '{log_level}'"
                )

            metrics_namespace = os.getenv(
                "METRICS_NAMESPACE", "ServerlessAuthService"
            ).strip()
            if not metrics_namespace:
                raise ValueError("METRICS_NAMESPACE must not be empty.")

            log_event = os.getenv("LOG_EVENT", "true").lower() in _TRUTHY

            max_logged_event_kb = int(os.getenv("MAX_LOGGED_EVENT_KB", "64"))
            if max_logged_event_kb <= 0:
                raise ValueError("MAX_LOGGED_EVENT_KB must be a positive integer.")

        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid value for an environment variable: {e}"
            ) from e

        return cls(
            service_name=service_name,
            environment=environment,
            log_level=log_level,
            metrics_namespace=metrics_namespace,
            log_event=log_event,
            max_logged_event_kb=max_logged_event_kb,
        )


# --- Singleton Factory Function (Lazy-loaded and Cached) ---
@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Loads the application configuration from environment variables.
    The result is cached using lru_cache, so the environment is only read once
    on the first call. This avoids import-time side effects.
    """
    logger.info("Loading application configuration from environment...")
    return AppConfig.load_from_env()
