"""Factory for creating model descriptors by family name."""

import logging
from typing import Any, Callable, Dict, Optional, Type

from imagegen.backends.dalle3 import DallE3Model
from imagegen.backends.gpt_image1 import GPTImage1Model
from imagegen.backends.stable_image import StableImageCoreModel, StableImageUltraModel
from imagegen.core.base_model import BaseImageModel

logger = logging.getLogger(__name__)


class ModelFactory:
    """Factory class for creating model descriptors.

    Families are looked up in a registry keyed by each descriptor's ``family``
    name. Custom families can be added with register().
    """

    _registry: Dict[str, Type[BaseImageModel]] = {
        model_class.family: model_class
        for model_class in (
            DallE3Model,
            GPTImage1Model,
            StableImageCoreModel,
            StableImageUltraModel,
        )
    }

    @classmethod
    def create_model(
        cls,
        family: str,
        endpoint: str,
        api_key: str,
        deployment_name: Optional[str] = None,
        configure: Optional[Callable[[Any], None]] = None
    ) -> BaseImageModel:
        """Create a descriptor for a model family.

        Args:
            family: Family name (e.g., "dalle3", "gpt-image-1", "stable-image-core")
            endpoint: Service endpoint
            api_key: API key
            deployment_name: Deployment name, required by Azure OpenAI families
            configure: Optional callback adjusting the options before validation

        Returns:
            A validated descriptor

        Raises:
            ValueError: If the family is not supported
            ConfigurationError: If any option is invalid
        """
        family_lower = family.lower()
        model_class = cls._registry.get(family_lower)
        if model_class is None:
            supported = ", ".join(cls.get_supported_models())
            raise ValueError(
                f"Unsupported model family: '{family}'. "
                f"Supported families: {supported}"
            )

        logger.info(f"Creating {family_lower} model descriptor")

        if model_class.requires_deployment:
            return model_class.create(endpoint, api_key, deployment_name, configure=configure)
        return model_class.create(endpoint, api_key, configure=configure)

    @classmethod
    def register(cls, model_class: Type[BaseImageModel]) -> None:
        """Register a descriptor class under its family name.

        Args:
            model_class: Descriptor class with a non-empty ``family``

        Raises:
            ValueError: If the class has no family name
        """
        if not model_class.family:
            raise ValueError(f"{model_class.__name__} does not define a family name")
        cls._registry[model_class.family.lower()] = model_class
        logger.info(f"Registered model family: {model_class.family}")

    @classmethod
    def get_supported_models(cls) -> list[str]:
        """Get the registered family names."""
        return sorted(cls._registry)

    @classmethod
    def is_supported(cls, family: str) -> bool:
        """Check if a model family is registered."""
        return family.lower() in cls._registry
