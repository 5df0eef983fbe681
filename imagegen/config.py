"""Configuration management and logging setup."""

import logging
from typing import Optional, Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict

from imagegen.core.base_model import BaseImageModel
from imagegen.core.model_factory import ModelFactory

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Model family -> settings field prefix
FAMILY_PREFIXES = {
    "dalle3": "dalle3",
    "gpt-image-1": "gpt_image1",
    "stable-image-core": "stable_image_core",
    "stable-image-ultra": "stable_image_ultra",
}


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file.

    API keys should live in the environment, never in code.

    Attributes:
        dalle3_endpoint / dalle3_api_key / dalle3_deployment: DALL-E 3 target
        gpt_image1_endpoint / gpt_image1_api_key / gpt_image1_deployment: GPT-Image-1 target
        stable_image_core_endpoint / stable_image_core_api_key: Stable Image Core target
        stable_image_ultra_endpoint / stable_image_ultra_api_key: Stable Image Ultra target
        default_model: Family used when none is named
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        max_retries: Retries after the first attempt
        timeout: Dispatch timeout in seconds
        retry_delay: Base backoff delay in seconds
        run_integration_tests: Whether to run integration tests
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    # DALL-E 3
    dalle3_endpoint: str = ""
    dalle3_api_key: Optional[str] = None
    dalle3_deployment: str = ""

    # GPT-Image-1
    gpt_image1_endpoint: str = ""
    gpt_image1_api_key: Optional[str] = None
    gpt_image1_deployment: str = ""

    # Stable Image
    stable_image_core_endpoint: str = ""
    stable_image_core_api_key: Optional[str] = None
    stable_image_ultra_endpoint: str = ""
    stable_image_ultra_api_key: Optional[str] = None

    # Call policy
    default_model: str = "dalle3"
    log_level: str = "INFO"
    max_retries: int = 3
    timeout: float = 300.0
    retry_delay: float = 1.0

    # Testing
    run_integration_tests: bool = False

    def credentials_for(self, family: str) -> Tuple[str, Optional[str], Optional[str]]:
        """Get the endpoint, API key and deployment configured for a family.

        Args:
            family: Model family name

        Returns:
            Tuple of (endpoint, api_key, deployment); deployment is None for
            families that have none

        Raises:
            ValueError: If the family is unknown
        """
        prefix = FAMILY_PREFIXES.get(family.lower())
        if prefix is None:
            raise ValueError(
                f"Unknown model family: '{family}'. "
                f"Supported families: {', '.join(FAMILY_PREFIXES)}"
            )

        endpoint = getattr(self, f"{prefix}_endpoint")
        api_key = getattr(self, f"{prefix}_api_key")
        deployment = getattr(self, f"{prefix}_deployment", None)
        return endpoint, api_key, deployment

    def validate_required_keys(self, family: Optional[str] = None) -> None:
        """Validate that the values a family needs are present.

        Args:
            family: Model family to check (defaults to default_model)

        Raises:
            ValueError: If a required value is missing
        """
        family = family or self.default_model
        endpoint, api_key, deployment = self.credentials_for(family)
        prefix = FAMILY_PREFIXES[family.lower()].upper()

        if not endpoint:
            raise ValueError(
                f"{prefix}_ENDPOINT is required when using the {family} model. "
                "Please set it in your .env file or environment variables."
            )

        if not api_key:
            raise ValueError(
                f"{prefix}_API_KEY is required when using the {family} model. "
                "Please set it in your .env file or environment variables."
            )

        if deployment is not None and not deployment:
            raise ValueError(
                f"{prefix}_DEPLOYMENT is required when using the {family} model."
            )


def model_from_settings(
    family: Optional[str] = None,
    config: Optional[Settings] = None
) -> BaseImageModel:
    """Build a model descriptor from settings.

    Args:
        family: Model family (defaults to the settings' default_model)
        config: Settings to read (defaults to the global settings)

    Returns:
        A validated descriptor using the settings' timeout and retry policy

    Raises:
        ValueError: If required settings are missing
        ConfigurationError: If a configured value is invalid
    """
    config = config or settings
    family = family or config.default_model
    config.validate_required_keys(family)
    endpoint, api_key, deployment = config.credentials_for(family)

    def apply_policy(options) -> None:
        options.timeout = config.timeout
        options.max_retry_attempts = config.max_retries
        options.retry_delay = config.retry_delay

    return ModelFactory.create_model(
        family,
        endpoint,
        api_key,
        deployment_name=deployment,
        configure=apply_policy
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging with the project's format.

    Args:
        level: Logging level name (defaults to the settings' log_level)
    """
    logging.basicConfig(
        level=level or settings.log_level,
        format=LOG_FORMAT
    )


# Global settings instance
settings = Settings()
