"""
Host Client - talks to the application that owns the knowledge model and
stores replies, via its HTTP API.

The crawler itself never touches the network; this client fetches the
knowledge model before a crawl and sends the collected replies after it.
"""

import json
import warnings

import httpx
from dataclasses import dataclass
from typing import Any

from .knowledge_model import KnowledgeModel

# Default host URL
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 30.0


@dataclass
class HostResult:
    """Result from any host request."""
    success: bool
    data: Any | None
    error: str | None = None


def _warn_if_insecure(base_url: str) -> None:
    if not base_url.startswith("https://") and "localhost" not in base_url and "127.0.0.1" not in base_url:
        warnings.warn(
            f"Using unencrypted HTTP connection to {base_url}. "
            "Consider using HTTPS for non-localhost connections.",
            UserWarning,
            stacklevel=3,
        )


def _knowledge_model_from_result(result: HostResult) -> KnowledgeModel | None:
    if not result.success or not isinstance(result.data, dict):
        return None
    try:
        return KnowledgeModel.from_dict(result.data)
    except (KeyError, ValueError):
        return None


class HostClient:
    """
    Client for the host application's HTTP API.

    Transport and protocol failures are reported through HostResult rather
    than raised.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the host application
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = None

        _warn_if_insecure(self.base_url)

    def start(self) -> bool:
        """Initialize the HTTP client and verify connectivity."""
        try:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
            )
            response = self._client.get("/health")
            return response.status_code == 200
        except httpx.RequestError:
            if self._client is not None:
                self._client.close()
                self._client = None
            return False

    def stop(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False

    def _request(self, method: str, endpoint: str, json_data: Any = None) -> HostResult:
        if not self._client:
            return HostResult(success=False, data=None, error="Client not started")

        try:
            response = self._client.request(method, endpoint, json=json_data)
            response.raise_for_status()
            data = response.json() if response.content else None
            return HostResult(success=True, data=data, error=None)
        except httpx.HTTPStatusError as e:
            return HostResult(success=False, data=None, error=f"HTTP {e.response.status_code}: {e}")
        except httpx.RequestError as e:
            return HostResult(success=False, data=None, error=str(e))
        except json.JSONDecodeError as e:
            return HostResult(success=False, data=None, error=f"Invalid JSON response: {e}")

    def fetch_knowledge_model(self) -> KnowledgeModel | None:
        """
        Fetch the knowledge model the replies are for.

        Returns:
            KnowledgeModel, None if the request failed or the document
            could not be loaded
        """
        return _knowledge_model_from_result(self._request("GET", "/knowledge-model"))

    def send_replies(self, replies: dict[str, dict]) -> HostResult:
        """
        Send collected replies to the host.

        Args:
            replies: Reply JSON keyed by dotted path (ReplyCollector.to_dict())
        """
        return self._request("POST", "/replies", {"replies": replies})


class AsyncHostClient:
    """
    Async version of HostClient using httpx.AsyncClient.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

        _warn_if_insecure(self.base_url)

    async def start(self) -> bool:
        """Initialize the async HTTP client."""
        try:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
            )
            response = await self._client.get("/health")
            return response.status_code == 200
        except httpx.RequestError:
            if self._client is not None:
                await self._client.aclose()
                self._client = None
            return False

    async def stop(self) -> None:
        """Close the async HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()
        return False

    async def _request(self, method: str, endpoint: str, json_data: Any = None) -> HostResult:
        if not self._client:
            return HostResult(success=False, data=None, error="Client not started")

        try:
            response = await self._client.request(method, endpoint, json=json_data)
            response.raise_for_status()
            data = response.json() if response.content else None
            return HostResult(success=True, data=data, error=None)
        except httpx.HTTPStatusError as e:
            return HostResult(success=False, data=None, error=f"HTTP {e.response.status_code}: {e}")
        except httpx.RequestError as e:
            return HostResult(success=False, data=None, error=str(e))
        except json.JSONDecodeError as e:
            return HostResult(success=False, data=None, error=f"Invalid JSON response: {e}")

    async def fetch_knowledge_model(self) -> KnowledgeModel | None:
        """Fetch the knowledge model (async)."""
        return _knowledge_model_from_result(await self._request("GET", "/knowledge-model"))

    async def send_replies(self, replies: dict[str, dict]) -> HostResult:
        """Send collected replies (async)."""
        return await self._request("POST", "/replies", {"replies": replies})
