"""Abstract base class for image generation model descriptors."""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict

from imagegen.core.exceptions import ConfigurationError, InvalidArgumentError
from imagegen.core.models import ImageRequest, ImageResponse
from imagegen.core.validation import is_absolute_uri, is_blank, is_finite_number

DEFAULT_TIMEOUT = 300.0
DEFAULT_MAX_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0

OptionsT = TypeVar("OptionsT", bound="ModelOptions")
ModelT = TypeVar("ModelT", bound="BaseImageModel")


class ModelOptions(BaseModel):
    """Mutable configuration for a model descriptor.

    Options are filled with defaults, handed to an optional configure callback,
    then validated once when the descriptor is built. Assignments made by the
    callback are not validated until then.

    Attributes:
        endpoint: Absolute base URI of the service
        api_key: Bearer token sent with every request
        api_version: Value of the ``api-version`` query parameter
        model_name: Model identifier
        timeout: Deadline for one dispatch in seconds, covering all attempts
        max_retry_attempts: Retries after the first attempt
        retry_delay: Base backoff delay in seconds
    """

    model_config = ConfigDict(protected_namespaces=())

    endpoint: Optional[str] = ""
    api_key: Optional[str] = ""
    api_version: str = ""
    model_name: Optional[str] = ""
    timeout: float = DEFAULT_TIMEOUT
    max_retry_attempts: int = DEFAULT_MAX_RETRY_ATTEMPTS
    retry_delay: float = DEFAULT_RETRY_DELAY

    def validate_options(self) -> None:
        """Validate options in a fixed order.

        Raises:
            ConfigurationError: Naming the first invalid option
        """
        if is_blank(self.endpoint):
            raise ConfigurationError("endpoint", "Endpoint is required")

        if not is_absolute_uri(self.endpoint):
            raise ConfigurationError("endpoint", "Endpoint must be a valid absolute URI")

        if is_blank(self.api_key):
            raise ConfigurationError("api_key", "API key is required")

        self.validate_identity()

        if is_blank(self.model_name):
            raise ConfigurationError("model_name", "Model name is required")

        if not is_finite_number(self.timeout) or self.timeout <= 0:
            raise ConfigurationError("timeout", "Timeout must be greater than zero")

        if (
            isinstance(self.max_retry_attempts, bool)
            or not isinstance(self.max_retry_attempts, int)
            or self.max_retry_attempts < 0
        ):
            raise ConfigurationError(
                "max_retry_attempts", "Max retry attempts must be non-negative"
            )

        if not is_finite_number(self.retry_delay) or self.retry_delay < 0:
            raise ConfigurationError("retry_delay", "Retry delay must be non-negative")

        self.validate_defaults()

    def validate_identity(self) -> None:
        """Hook for family-specific identity options such as a deployment name."""

    def validate_defaults(self) -> None:
        """Hook for family-specific request defaults."""


class BaseImageModel(ABC):
    """Descriptor contract that all image generation models implement.

    A descriptor identifies one backend target and its call policy. The
    transport is written against this contract only, so adding a model family
    never touches the dispatch code.

    Descriptors keep a private copy of their validated options and expose them
    through read-only properties, so one instance can be shared across
    concurrent dispatches.

    Attributes:
        family: Registry name of the model family
        options_class: Options type accepted by the constructor
        response_model: Response type returned when the caller names none
        requires_deployment: Whether create() takes a deployment name
    """

    family: ClassVar[str] = ""
    options_class: ClassVar[Type[ModelOptions]] = ModelOptions
    response_model: ClassVar[Type[ImageResponse]] = ImageResponse
    requires_deployment: ClassVar[bool] = False

    def __init__(self, options: ModelOptions):
        """Validate and freeze the options.

        Args:
            options: Model configuration options

        Raises:
            InvalidArgumentError: If options is None
            ConfigurationError: If any option is invalid
        """
        if options is None:
            raise InvalidArgumentError("options is required")

        options.validate_options()
        self._options = options.model_copy(deep=True)

    @classmethod
    def from_options(
        cls: Type[ModelT],
        options: ModelOptions,
        configure: Optional[Callable[[Any], None]] = None
    ) -> ModelT:
        """Apply an optional configure callback, then build the descriptor."""
        if configure is not None:
            configure(options)
        return cls(options)

    @property
    def model_name(self) -> str:
        return self._options.model_name

    @property
    def endpoint(self) -> str:
        return self._options.endpoint

    @property
    def api_key(self) -> str:
        return self._options.api_key

    @property
    def api_version(self) -> str:
        return self._options.api_version

    @property
    def timeout(self) -> float:
        return self._options.timeout

    @property
    def max_retry_attempts(self) -> int:
        return self._options.max_retry_attempts

    @property
    def retry_delay(self) -> float:
        return self._options.retry_delay

    @property
    @abstractmethod
    def generation_path(self) -> str:
        """Get the generation endpoint path, relative to the base endpoint."""
        pass

    @abstractmethod
    def build_request(self, prompt: str, **overrides: Any) -> ImageRequest:
        """Build a request filled with this model's defaults.

        Args:
            prompt: Text prompt describing the desired image
            **overrides: Request fields that replace the defaults

        Returns:
            A request of the type this model's backend expects
        """
        pass

    def __repr__(self) -> str:
        """String representation of the model. Never includes the API key."""
        return (
            f"{self.__class__.__name__}(model_name='{self.model_name}', "
            f"endpoint='{self.endpoint}')"
        )
