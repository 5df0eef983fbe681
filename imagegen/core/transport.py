"""Shared HTTP transport that dispatches requests to any image model.

The transport is written once against the BaseImageModel contract. For each
dispatch it:

1. Builds the final URI from the model's endpoint, generation path and API version.
2. Serializes the request as JSON.
3. Attaches the bearer credential and client identification per request.
4. Sends with bounded retries (network errors and 5xx only) and exponential backoff.
5. Parses the body into the caller's response type or raises a typed error.

All per-call state lives in the dispatch coroutine, so one transport can serve
concurrent dispatches for models with different credentials.
"""

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from imagegen.core.base_model import BaseImageModel
from imagegen.core.exceptions import (
    ClientError,
    InvalidArgumentError,
    NetworkError,
    RequestCancelledError,
    RequestTimeoutError,
    SerializationError,
    ServerError,
)
from imagegen.core.models import serialize_body
from imagegen.version import __version__

USER_AGENT = f"imagegen/{__version__}"
DEFAULT_DOWNLOAD_TIMEOUT = 60.0
RETRYABLE_ERRORS = (NetworkError, ServerError)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def build_request_uri(model: BaseImageModel) -> str:
    """Build the generation URI for a model.

    The generation path is resolved against the endpoint, then the API version
    is appended as a query parameter, keeping any query already present.

    Args:
        model: Model descriptor

    Returns:
        Absolute request URI
    """
    parts = urlsplit(urljoin(model.endpoint, model.generation_path))
    version = f"api-version={quote(model.api_version, safe='')}"
    query = f"{parts.query}&{version}" if parts.query else version
    return urlunsplit(parts._replace(query=query))


class Transport:
    """Send-with-retry engine shared by every model family.

    Attributes:
        http_client: Pooled httpx client used for every call
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None
    ):
        """Initialize the transport.

        Args:
            http_client: Optional client to use instead of creating one. A
                client passed in is not closed by aclose().
            logger: Optional logger (defaults to this module's logger)
            sleep: Optional coroutine function used for backoff delays
        """
        # Deadlines are enforced per dispatch, not by httpx.
        self.http_client = http_client or httpx.AsyncClient(timeout=None)
        self._owns_client = http_client is None
        self._logger = logger or logging.getLogger(__name__)
        self._sleep = sleep or asyncio.sleep
        self._closed = False

    async def dispatch(
        self,
        model: BaseImageModel,
        request: BaseModel,
        response_type: Type[ResponseT],
        cancel_event: Optional[asyncio.Event] = None
    ) -> ResponseT:
        """Execute one generation request with bounded retry.

        Args:
            model: Validated model descriptor
            request: Request body of the type the model's backend expects
            response_type: Pydantic model the response body is parsed into
            cancel_event: Optional event; setting it cancels the dispatch

        Returns:
            The parsed response

        Raises:
            InvalidArgumentError: If model, request or response_type is missing
            ClientError: On a non-success status below 500 (not retried)
            ServerError: On status 500 or above after all attempts
            NetworkError: On transport failure after all attempts
            RequestTimeoutError: If the model's timeout elapses
            RequestCancelledError: If cancel_event is set
            SerializationError: If the body is empty or does not parse
        """
        if model is None:
            raise InvalidArgumentError("model is required")
        if request is None:
            raise InvalidArgumentError("request is required")
        if response_type is None:
            raise InvalidArgumentError("response_type is required")

        uri = build_request_uri(model)
        body = serialize_body(request)

        try:
            async with asyncio.timeout(model.timeout):
                response = await self._send_with_retry(model, uri, body, cancel_event)
        except RequestTimeoutError:
            raise
        except TimeoutError as e:
            self._logger.warning(f"Request to {model.model_name} timed out after {model.timeout}s")
            raise RequestTimeoutError(model.timeout) from e

        return self._parse_response(response, response_type)

    async def download(
        self,
        url: str,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: float = DEFAULT_DOWNLOAD_TIMEOUT
    ) -> bytes:
        """Download generated image bytes from a service-provided URL.

        No credential is attached; image URLs are pre-signed. Downloads are not
        retried.

        Args:
            url: Image URL from a response
            cancel_event: Optional event; setting it cancels the download
            timeout: Deadline in seconds

        Returns:
            Raw image bytes
        """
        if not url:
            raise InvalidArgumentError("url is required")

        self._logger.debug(f"Downloading image from {url}")
        try:
            async with asyncio.timeout(timeout):
                response = await self._guard(
                    self.http_client.get(url, headers={"User-Agent": USER_AGENT}),
                    cancel_event
                )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(timeout) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Failed to download image from URL: {url}") from e
        except TimeoutError as e:
            raise RequestTimeoutError(timeout) from e

        self._raise_for_status(response)
        return response.content

    async def _send_with_retry(
        self,
        model: BaseImageModel,
        uri: str,
        body: Dict[str, Any],
        cancel_event: Optional[asyncio.Event]
    ) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(model.max_retry_attempts + 1),
            wait=wait_exponential(multiplier=model.retry_delay, exp_base=2),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            sleep=functools.partial(self._backoff, cancel_event=cancel_event),
            before_sleep=self._log_retry,
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                number = attempt.retry_state.attempt_number
                self._logger.debug(f"Sending POST request to {uri} (attempt {number})")
                return await self._send_once(model, uri, body, cancel_event)

    async def _send_once(
        self,
        model: BaseImageModel,
        uri: str,
        body: Dict[str, Any],
        cancel_event: Optional[asyncio.Event]
    ) -> httpx.Response:
        try:
            response = await self._guard(
                self.http_client.post(uri, json=body, headers=self._build_headers(model)),
                cancel_event
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(model.timeout) from e
        except httpx.TransportError as e:
            self._logger.debug(f"Network error calling {model.model_name}: {e}")
            raise NetworkError(f"Network error occurred: {e}") from e

        if response.is_success:
            self._logger.debug(f"Request successful with status {response.status_code}")
            return response

        self._logger.debug(
            f"Request failed with status {response.status_code}: {response.text}"
        )
        self._raise_for_status(response)

    @staticmethod
    def _build_headers(model: BaseImageModel) -> Dict[str, str]:
        # Built per request; the shared client never holds a credential.
        return {
            "Authorization": f"Bearer {model.api_key}",
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return

        body = response.text
        message = f"Request failed with status {response.status_code}: {body}"
        if response.status_code >= 500:
            raise ServerError(message, response.status_code, body)
        raise ClientError(message, response.status_code, body)

    @staticmethod
    def _parse_response(response: httpx.Response, response_type: Type[ResponseT]) -> ResponseT:
        body = response.text
        if not body.strip():
            raise SerializationError("Empty response received from server")

        try:
            return response_type.model_validate_json(body)
        except ValidationError as e:
            raise SerializationError(f"Failed to deserialize response: {e}") from e

    async def _backoff(self, seconds: float, cancel_event: Optional[asyncio.Event] = None) -> None:
        self._logger.debug(f"Waiting {seconds}s before retry")
        await self._guard(self._sleep(seconds), cancel_event)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        self._logger.warning(
            f"Attempt {retry_state.attempt_number} failed ({error}); "
            f"retrying in {retry_state.next_action.sleep}s"
        )

    @staticmethod
    async def _guard(operation: Awaitable[Any], cancel_event: Optional[asyncio.Event]) -> Any:
        """Await an operation, aborting it if the cancel event fires first."""
        if cancel_event is None:
            return await operation

        if cancel_event.is_set():
            if asyncio.iscoroutine(operation):
                operation.close()
            raise RequestCancelledError("Request was cancelled by the caller")

        operation_task = asyncio.ensure_future(operation)
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait(
                {operation_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            pending = [task for task in (operation_task, cancel_task) if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.wait(pending)

        if operation_task.done() and not operation_task.cancelled():
            return operation_task.result()
        raise RequestCancelledError("Request was cancelled by the caller")

    async def aclose(self) -> None:
        """Release the connection pool. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
