"""Shared test fixtures and configuration."""

import base64

import pytest
import os

from imagegen.backends.dalle3 import DallE3Model
from imagegen.backends.gpt_image1 import GPTImage1Model
from imagegen.backends.stable_image import StableImageCoreModel, StableImageUltraModel

TEST_OPENAI_ENDPOINT = "https://test-resource.openai.azure.com/"
TEST_AI_ENDPOINT = "https://test-model.eastus.models.ai.azure.com/"
TEST_API_KEY = "test-api-key-12345"

# PNG signature followed by filler; never decoded as an image
FAKE_PNG_BYTES = b"\x89PNG\r\n\x1a\nfake_image_data"


def fast_policy(options):
    """Configure callback giving short timeouts and instant retries."""
    options.timeout = 5.0
    options.retry_delay = 0.0


@pytest.fixture
def sample_prompt():
    """Return a sample prompt for testing."""
    return "A lighthouse on a cliff at dawn"


@pytest.fixture
def test_api_key():
    """Return a test API key."""
    return TEST_API_KEY


@pytest.fixture
def fake_image_bytes():
    """Return raw bytes standing in for an image."""
    return FAKE_PNG_BYTES


@pytest.fixture
def fake_image_b64(fake_image_bytes):
    """Return the fake image as base64 text."""
    return base64.b64encode(fake_image_bytes).decode("ascii")


@pytest.fixture
def dalle3_model():
    """Return a DALL-E 3 descriptor with a fast retry policy."""
    return DallE3Model.create(TEST_OPENAI_ENDPOINT, TEST_API_KEY, "dalle3-deploy", configure=fast_policy)


@pytest.fixture
def gpt_image1_model():
    """Return a GPT-Image-1 descriptor with a fast retry policy."""
    return GPTImage1Model.create(TEST_OPENAI_ENDPOINT, TEST_API_KEY, "gpt-image-deploy", configure=fast_policy)


@pytest.fixture
def stable_core_model():
    """Return a Stable Image Core descriptor with a fast retry policy."""
    return StableImageCoreModel.create(TEST_AI_ENDPOINT, TEST_API_KEY, configure=fast_policy)


@pytest.fixture
def stable_ultra_model():
    """Return a Stable Image Ultra descriptor with a fast retry policy."""
    return StableImageUltraModel.create(TEST_AI_ENDPOINT, TEST_API_KEY, configure=fast_policy)


@pytest.fixture
def dalle3_url():
    """Return the generation URI the DALL-E 3 fixture model posts to."""
    return (
        "https://test-resource.openai.azure.com/openai/deployments/dalle3-deploy/"
        "images/generations?api-version=2024-02-01"
    )


@pytest.fixture
def stable_core_url():
    """Return the generation URI the Stable Image Core fixture model posts to."""
    return "https://test-model.eastus.models.ai.azure.com/images/generations?api-version=2024-05-01-preview"


# Skip integration tests unless explicitly requested
def pytest_collection_modifyitems(config, items):
    """Automatically skip integration tests unless RUN_INTEGRATION_TESTS is set."""
    skip_integration = pytest.mark.skip(reason="Integration tests disabled (set RUN_INTEGRATION_TESTS=true to enable)")

    for item in items:
        if "integration" in item.keywords:
            if not os.getenv("RUN_INTEGRATION_TESTS", "").lower() == "true":
                item.add_marker(skip_integration)
