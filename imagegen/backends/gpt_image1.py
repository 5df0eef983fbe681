"""GPT-Image-1 model descriptor, request and response."""

from typing import Any, Callable, ClassVar, Optional

from imagegen.backends.azure_openai import (
    AzureOpenAIImageModel,
    DeploymentOptions,
    ImageGenerationResponse,
)
from imagegen.core.exceptions import ConfigurationError, RequestValidationError
from imagegen.core.models import ImageRequest
from imagegen.core.validation import is_blank, matches_choice

SUPPORTED_SIZES = ("1024x1024", "1024x1536", "1536x1024")
SUPPORTED_QUALITIES = ("low", "medium", "high")
SUPPORTED_OUTPUT_FORMATS = ("PNG", "JPEG")

GPTImage1Response = ImageGenerationResponse


class GPTImage1Options(DeploymentOptions):
    """Configuration options for GPT-Image-1.

    Attributes:
        default_output_format: Output format used by build_request()
        default_compression: Output compression (0-100) used by build_request()
    """

    api_version: str = "2025-04-01-preview"
    model_name: Optional[str] = "gpt-image-1"
    default_size: str = "1024x1024"
    default_quality: str = "high"
    default_output_format: str = "PNG"
    default_compression: int = 100

    def validate_defaults(self) -> None:
        if not 0 <= self.default_compression <= 100:
            raise ConfigurationError(
                "default_compression", "Default compression must be between 0 and 100"
            )

        if not matches_choice(self.default_size, SUPPORTED_SIZES):
            raise ConfigurationError(
                "default_size", f"Default size must be one of: {', '.join(SUPPORTED_SIZES)}"
            )

        if not matches_choice(self.default_quality, SUPPORTED_QUALITIES):
            raise ConfigurationError(
                "default_quality",
                f"Default quality must be one of: {', '.join(SUPPORTED_QUALITIES)}"
            )

        if not matches_choice(self.default_output_format, SUPPORTED_OUTPUT_FORMATS):
            raise ConfigurationError(
                "default_output_format", "Default output format must be PNG or JPEG"
            )


class GPTImage1Request(ImageRequest):
    """Request body for GPT-Image-1 image generation.

    Attributes:
        model: Model identifier sent to the service
        prompt: Text prompt for the image
        size: One of 1024x1024, 1024x1536 or 1536x1024
        n: Number of images (1-10)
        quality: "low", "medium" or "high"
        output_format: "PNG" or "JPEG"
        output_compression: Compression level (0-100)
        user: Optional end-user identifier for abuse monitoring
    """

    model: str = "gpt-image-1"
    prompt: str = ""
    size: str = "1024x1024"
    n: Optional[int] = 1
    quality: str = "high"
    output_format: Optional[str] = "PNG"
    output_compression: Optional[int] = 100
    user: Optional[str] = None

    def validate_request(self) -> None:
        if is_blank(self.model):
            raise RequestValidationError("model", "Model is required")

        if is_blank(self.prompt):
            raise RequestValidationError("prompt", "Prompt is required")

        if not matches_choice(self.size, SUPPORTED_SIZES):
            raise RequestValidationError(
                "size", f"Invalid size. Must be one of: {', '.join(SUPPORTED_SIZES)}"
            )

        if self.n is not None and not 1 <= self.n <= 10:
            raise RequestValidationError("n", "N must be between 1 and 10")

        if not matches_choice(self.quality, SUPPORTED_QUALITIES):
            raise RequestValidationError(
                "quality", f"Invalid quality. Must be one of: {', '.join(SUPPORTED_QUALITIES)}"
            )

        if self.output_format and not matches_choice(self.output_format, SUPPORTED_OUTPUT_FORMATS):
            raise RequestValidationError(
                "output_format", "Invalid output format. Must be PNG or JPEG"
            )

        if self.output_compression is not None and not 0 <= self.output_compression <= 100:
            raise RequestValidationError(
                "output_compression", "Output compression must be between 0 and 100"
            )


class GPTImage1Model(AzureOpenAIImageModel):
    """GPT-Image-1 descriptor."""

    family: ClassVar[str] = "gpt-image-1"
    options_class: ClassVar = GPTImage1Options
    response_model: ClassVar = GPTImage1Response

    @property
    def default_output_format(self) -> str:
        return self._options.default_output_format

    @property
    def default_compression(self) -> int:
        return self._options.default_compression

    @classmethod
    def create(
        cls,
        endpoint: str,
        api_key: str,
        deployment_name: str,
        configure: Optional[Callable[[GPTImage1Options], None]] = None
    ) -> "GPTImage1Model":
        """Create a GPT-Image-1 descriptor.

        Args:
            endpoint: Azure OpenAI resource endpoint
            api_key: API key
            deployment_name: Deployment hosting GPT-Image-1
            configure: Optional callback adjusting the options before validation

        Returns:
            A validated GPTImage1Model

        Raises:
            ConfigurationError: If any option is invalid
        """
        options = GPTImage1Options(
            endpoint=endpoint,
            api_key=api_key,
            deployment_name=deployment_name
        )
        return cls.from_options(options, configure)

    def build_request(self, prompt: str, **overrides: Any) -> GPTImage1Request:
        values = {
            "model": self.model_name,
            "prompt": prompt,
            "size": self.default_size,
            "quality": self.default_quality,
            "output_format": self.default_output_format,
            "output_compression": self.default_compression,
        }
        values.update(overrides)
        return GPTImage1Request(**values)
