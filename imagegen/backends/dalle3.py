"""DALL-E 3 model descriptor, request and response."""

from typing import Any, Callable, ClassVar, Optional

from imagegen.backends.azure_openai import (
    AzureOpenAIImageModel,
    DeploymentOptions,
    ImageGenerationResponse,
)
from imagegen.core.exceptions import ConfigurationError, RequestValidationError
from imagegen.core.models import ImageRequest
from imagegen.core.validation import is_blank, matches_choice

SUPPORTED_SIZES = ("1024x1024", "1792x1024", "1024x1792")
SUPPORTED_QUALITIES = ("standard", "hd")
SUPPORTED_STYLES = ("natural", "vivid")
SUPPORTED_RESPONSE_FORMATS = ("url", "b64_json")

DallE3Response = ImageGenerationResponse


class DallE3Options(DeploymentOptions):
    """Configuration options for DALL-E 3.

    Attributes:
        default_style: Image style used by build_request()
        default_response_format: Response format used by build_request()
    """

    api_version: str = "2024-02-01"
    model_name: Optional[str] = "dall-e-3"
    default_size: str = "1024x1024"
    default_quality: str = "standard"
    default_style: str = "vivid"
    default_response_format: str = "url"

    def validate_defaults(self) -> None:
        if not matches_choice(self.default_size, SUPPORTED_SIZES):
            raise ConfigurationError(
                "default_size", f"Default size must be one of: {', '.join(SUPPORTED_SIZES)}"
            )

        if not matches_choice(self.default_quality, SUPPORTED_QUALITIES):
            raise ConfigurationError(
                "default_quality",
                f"Default quality must be one of: {', '.join(SUPPORTED_QUALITIES)}"
            )

        if not matches_choice(self.default_style, SUPPORTED_STYLES):
            raise ConfigurationError(
                "default_style", f"Default style must be one of: {', '.join(SUPPORTED_STYLES)}"
            )

        if not matches_choice(self.default_response_format, SUPPORTED_RESPONSE_FORMATS):
            raise ConfigurationError(
                "default_response_format",
                f"Default response format must be one of: {', '.join(SUPPORTED_RESPONSE_FORMATS)}"
            )


class DallE3Request(ImageRequest):
    """Request body for DALL-E 3 image generation.

    Attributes:
        prompt: Text prompt for the image
        size: One of 1024x1024, 1792x1024 or 1024x1792
        n: Number of images; DALL-E 3 only supports 1
        quality: "standard" or "hd"
        style: "natural" or "vivid"
        response_format: "url" or "b64_json"
    """

    prompt: str = ""
    size: str = "1024x1024"
    n: int = 1
    quality: str = "standard"
    style: str = "vivid"
    response_format: Optional[str] = "url"

    def validate_request(self) -> None:
        if is_blank(self.prompt):
            raise RequestValidationError("prompt", "Prompt is required")

        if not matches_choice(self.size, SUPPORTED_SIZES):
            raise RequestValidationError(
                "size", f"Invalid size. Must be one of: {', '.join(SUPPORTED_SIZES)}"
            )

        if self.n != 1:
            raise RequestValidationError(
                "n", "DALL-E 3 only supports generating 1 image per request (n must be 1)"
            )

        if not matches_choice(self.quality, SUPPORTED_QUALITIES):
            raise RequestValidationError(
                "quality", f"Invalid quality. Must be one of: {', '.join(SUPPORTED_QUALITIES)}"
            )

        if not matches_choice(self.style, SUPPORTED_STYLES):
            raise RequestValidationError(
                "style", f"Invalid style. Must be one of: {', '.join(SUPPORTED_STYLES)}"
            )

        if self.response_format and not matches_choice(
            self.response_format, SUPPORTED_RESPONSE_FORMATS
        ):
            raise RequestValidationError(
                "response_format",
                f"Invalid response format. Must be one of: {', '.join(SUPPORTED_RESPONSE_FORMATS)}"
            )


class DallE3Model(AzureOpenAIImageModel):
    """DALL-E 3 descriptor. DALL-E 3 does not support image editing."""

    family: ClassVar[str] = "dalle3"
    options_class: ClassVar = DallE3Options
    response_model: ClassVar = DallE3Response

    @property
    def default_style(self) -> str:
        return self._options.default_style

    @property
    def default_response_format(self) -> str:
        return self._options.default_response_format

    @classmethod
    def create(
        cls,
        endpoint: str,
        api_key: str,
        deployment_name: str,
        configure: Optional[Callable[[DallE3Options], None]] = None
    ) -> "DallE3Model":
        """Create a DALL-E 3 descriptor.

        Args:
            endpoint: Azure OpenAI resource endpoint
            api_key: API key
            deployment_name: Deployment hosting DALL-E 3
            configure: Optional callback adjusting the options before validation

        Returns:
            A validated DallE3Model

        Raises:
            ConfigurationError: If any option is invalid
        """
        options = DallE3Options(
            endpoint=endpoint,
            api_key=api_key,
            deployment_name=deployment_name
        )
        return cls.from_options(options, configure)

    def build_request(self, prompt: str, **overrides: Any) -> DallE3Request:
        values = {
            "prompt": prompt,
            "size": self.default_size,
            "quality": self.default_quality,
            "style": self.default_style,
            "response_format": self.default_response_format,
        }
        values.update(overrides)
        return DallE3Request(**values)
