"""Image generation client facade."""

import asyncio
import logging
from typing import Optional, Type

from pydantic import BaseModel

from imagegen.core.base_model import BaseImageModel
from imagegen.core.exceptions import InvalidArgumentError
from imagegen.core.transport import ResponseT, Transport

logger = logging.getLogger(__name__)


class ImageClient:
    """Single entry point for generating images with any model family.

    The client delegates every call to one shared Transport and owns its
    lifetime. Use it as an async context manager so the connection pool is
    released on every exit path:

        async with ImageClient() as client:
            model = DallE3Model.create(endpoint, api_key, "dall-e-3")
            request = model.build_request("A lighthouse at dawn")
            request.validate_request()
            response = await client.generate_image(model, request)

    Attributes:
        transport: The transport all calls go through
    """

    def __init__(self, transport: Optional[Transport] = None):
        """Initialize the client.

        Args:
            transport: Optional transport (a new one is created by default)
        """
        self.transport = transport or Transport()

    async def generate_image(
        self,
        model: BaseImageModel,
        request: BaseModel,
        response_type: Optional[Type[ResponseT]] = None,
        cancel_event: Optional[asyncio.Event] = None
    ) -> ResponseT:
        """Generate an image with the given model and request.

        Args:
            model: Model descriptor
            request: Model-specific request, already validated by the caller
            response_type: Response model to parse into (defaults to the
                model family's response model)
            cancel_event: Optional event; setting it cancels the call

        Returns:
            The model-specific response

        Raises:
            InvalidArgumentError: If model or request is missing
            ImageGenError: Any failure raised by the transport
        """
        if model is None:
            raise InvalidArgumentError("model is required")
        if request is None:
            raise InvalidArgumentError("request is required")

        response_type = response_type or model.response_model

        logger.info(f"Generating image with model {model.model_name}")
        try:
            response = await self.transport.dispatch(model, request, response_type, cancel_event)
        except Exception as e:
            logger.error(f"Image generation failed with model {model.model_name}: {e}")
            raise

        logger.info(f"Image generation completed successfully with model {model.model_name}")
        return response

    async def download_image(
        self,
        url: str,
        cancel_event: Optional[asyncio.Event] = None
    ) -> bytes:
        """Download image bytes from a URL returned in a response.

        Args:
            url: Image URL
            cancel_event: Optional event; setting it cancels the download

        Returns:
            Raw image bytes
        """
        return await self.transport.download(url, cancel_event=cancel_event)

    async def aclose(self) -> None:
        """Release the transport's connection resources."""
        await self.transport.aclose()

    async def __aenter__(self) -> "ImageClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
