"""Unit tests for the Stable Image models."""

from unittest.mock import AsyncMock, Mock

import pytest

from imagegen.backends.azure_openai import ImageData
from imagegen.backends.stable_image import (
    StableImageCoreModel,
    StableImageCoreRequest,
    StableImageRequest,
    StableImageResponse,
    StableImageUltraModel,
    StableImageUltraRequest,
)
from imagegen.core.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    RequestValidationError,
    SerializationError,
)
from imagegen.core.storage import FileByteSink

ENDPOINT = "https://test-model.eastus.models.ai.azure.com/"


class TestStableImageModels:
    """Tests for StableImageCoreModel and StableImageUltraModel."""

    def test_core_defaults(self, test_api_key):
        """Test Stable Image Core defaults."""
        model = StableImageCoreModel.create(ENDPOINT, test_api_key)

        assert isinstance(model, StableImageCoreModel)
        assert model.model_name == "Stable-Image-Core"
        assert model.api_version == "2024-05-01-preview"
        assert model.default_size == "1024x1024"
        assert model.default_output_format == "png"
        assert model.generation_path == "images/generations"
        assert model.timeout == 300.0

    def test_ultra_defaults(self, test_api_key):
        """Test Stable Image Ultra defaults."""
        model = StableImageUltraModel.create(ENDPOINT, test_api_key)

        assert isinstance(model, StableImageUltraModel)
        assert model.model_name == "Stable-Image-Ultra"
        assert model.api_version == "2024-05-01-preview"

    def test_no_deployment_required(self):
        """Test that Stable Image models take no deployment name."""
        assert StableImageCoreModel.requires_deployment is False
        assert StableImageUltraModel.requires_deployment is False

    def test_missing_api_key(self):
        """Test that an API key is required."""
        with pytest.raises(ConfigurationError) as exc_info:
            StableImageCoreModel.create(ENDPOINT, "")

        assert exc_info.value.field == "api_key"

    def test_blank_model_name_rejected(self, test_api_key):
        """Test that clearing the model name is rejected."""
        def configure(options):
            options.model_name = " "

        with pytest.raises(ConfigurationError) as exc_info:
            StableImageUltraModel.create(ENDPOINT, test_api_key, configure=configure)

        assert exc_info.value.field == "model_name"

    @pytest.mark.parametrize("values, field", [
        ({"default_size": "big"}, "default_size"),
        ({"default_output_format": "gif"}, "default_output_format"),
    ])
    def test_invalid_defaults(self, test_api_key, values, field):
        """Test that invalid request defaults are rejected."""
        def configure(options):
            for name, value in values.items():
                setattr(options, name, value)

        with pytest.raises(ConfigurationError) as exc_info:
            StableImageCoreModel.create(ENDPOINT, test_api_key, configure=configure)

        assert exc_info.value.field == field

    def test_build_request_core(self, stable_core_model, sample_prompt):
        """Test that the core model builds a core request."""
        request = stable_core_model.build_request(sample_prompt, seed=7, negative_prompt="blurry")

        assert isinstance(request, StableImageCoreRequest)
        assert request.model == "Stable-Image-Core"
        assert request.size == "1024x1024"
        assert request.output_format == "png"
        assert request.seed == 7
        assert request.negative_prompt == "blurry"

    def test_build_request_ultra(self, stable_ultra_model, sample_prompt):
        """Test that the ultra model builds an ultra request."""
        request = stable_ultra_model.build_request(sample_prompt)

        assert isinstance(request, StableImageUltraRequest)
        assert request.model == "Stable-Image-Ultra"


class TestStableImageRequest:
    """Tests for StableImageRequest validation."""

    def test_request_defaults(self):
        """Test per-model request defaults."""
        assert StableImageCoreRequest().model == "Stable-Image-Core"
        assert StableImageUltraRequest().model == "Stable-Image-Ultra"

    @pytest.mark.parametrize("size", ["1024x1024", "512x768", "2048x1152"])
    def test_valid_sizes(self, size):
        """Test that any positive WxH size is accepted."""
        StableImageCoreRequest(prompt="A cat", size=size).validate_request()

    @pytest.mark.parametrize("output_format", ["png", "JPG", "jpeg", "webp"])
    def test_valid_output_formats(self, output_format):
        """Test supported output formats in any case."""
        StableImageCoreRequest(prompt="A cat", output_format=output_format).validate_request()

    @pytest.mark.parametrize("values, field", [
        ({"model": ""}, "model"),
        ({"prompt": ""}, "prompt"),
        ({"size": "1024"}, "size"),
        ({"size": "0x1024"}, "size"),
        ({"output_format": "gif"}, "output_format"),
        ({"seed": -1}, "seed"),
    ])
    def test_invalid_request(self, values, field):
        """Test that invalid fields are reported by name."""
        request = StableImageCoreRequest(**{"prompt": "A cat", **values})

        with pytest.raises(RequestValidationError) as exc_info:
            request.validate_request()

        assert exc_info.value.field == field

    def test_base_request_requires_model(self):
        """Test that the shared request has no default model."""
        with pytest.raises(RequestValidationError) as exc_info:
            StableImageRequest(prompt="A cat").validate_request()

        assert exc_info.value.field == "model"


class TestStableImageResponse:
    """Tests for StableImageResponse."""

    def test_parse_with_metadata(self, fake_image_b64):
        """Test parsing a response with metadata."""
        response = StableImageResponse.model_validate({
            "image": fake_image_b64,
            "metadata": {"width": 1024, "height": 768, "format": "png", "seed": 42},
        })

        assert response.has_image
        assert response.metadata.width == 1024
        assert response.metadata.seed == 42

    def test_get_image_bytes(self, fake_image_b64, fake_image_bytes):
        """Test decoding the image."""
        assert StableImageResponse(image=fake_image_b64).get_image_bytes() == fake_image_bytes

    def test_get_image_bytes_without_image(self):
        """Test that a response without an image raises ValueError."""
        response = StableImageResponse()

        assert not response.has_image
        with pytest.raises(ValueError):
            response.get_image_bytes()

    def test_get_image_bytes_invalid_base64(self):
        """Test that invalid base64 raises SerializationError."""
        with pytest.raises(SerializationError):
            StableImageResponse(image="%%%").get_image_bytes()

    @pytest.mark.asyncio
    async def test_save_image(self, tmp_path, fake_image_b64, fake_image_bytes):
        """Test writing the image to a file sink."""
        sink = FileByteSink(tmp_path)

        await StableImageResponse(image=fake_image_b64).save_image(sink, "out/image.png")

        assert (tmp_path / "out" / "image.png").read_bytes() == fake_image_bytes

    @pytest.mark.asyncio
    async def test_save_image_blank_destination(self, fake_image_b64):
        """Test that a blank destination is rejected."""
        with pytest.raises(InvalidArgumentError):
            await StableImageResponse(image=fake_image_b64).save_image(FileByteSink(), "  ")

    @pytest.mark.asyncio
    async def test_save_image_matches_openai_image_data(self, tmp_path, fake_image_b64, fake_image_bytes):
        """Test that Stable Image and OpenAI images save through the same call."""
        client = Mock()
        client.download_image = AsyncMock()
        sink = FileByteSink(tmp_path)
        images = {
            "stable.png": StableImageResponse(image=fake_image_b64),
            "openai.png": ImageData(b64_json=fake_image_b64),
        }

        for destination, image in images.items():
            await image.save_image(sink, destination, client)

        assert (tmp_path / "stable.png").read_bytes() == fake_image_bytes
        assert (tmp_path / "openai.png").read_bytes() == fake_image_bytes
        client.download_image.assert_not_called()
