"""Async client for Azure-hosted image generation models."""

import logging

from imagegen.backends.azure_openai import ImageData, ImageGenerationResponse
from imagegen.backends.dalle3 import DallE3Model, DallE3Options, DallE3Request
from imagegen.backends.gpt_image1 import GPTImage1Model, GPTImage1Options, GPTImage1Request
from imagegen.backends.stable_image import (
    StableImageCoreModel,
    StableImageCoreRequest,
    StableImageResponse,
    StableImageUltraModel,
    StableImageUltraRequest,
)
from imagegen.core.client import ImageClient
from imagegen.core.exceptions import (
    ClientError,
    ConfigurationError,
    HTTPStatusError,
    ImageGenError,
    InvalidArgumentError,
    NetworkError,
    RequestCancelledError,
    RequestTimeoutError,
    RequestValidationError,
    SerializationError,
    ServerError,
    StorageError,
)
from imagegen.core.model_factory import ModelFactory
from imagegen.core.storage import ByteSink, FileByteSink
from imagegen.core.transport import Transport
from imagegen.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ByteSink",
    "ClientError",
    "ConfigurationError",
    "DallE3Model",
    "DallE3Options",
    "DallE3Request",
    "FileByteSink",
    "GPTImage1Model",
    "GPTImage1Options",
    "GPTImage1Request",
    "HTTPStatusError",
    "ImageClient",
    "ImageData",
    "ImageGenError",
    "ImageGenerationResponse",
    "InvalidArgumentError",
    "ModelFactory",
    "NetworkError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "RequestValidationError",
    "SerializationError",
    "ServerError",
    "StableImageCoreModel",
    "StableImageCoreRequest",
    "StableImageResponse",
    "StableImageUltraModel",
    "StableImageUltraRequest",
    "StorageError",
    "Transport",
    "__version__",
]
