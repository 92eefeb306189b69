"""HTTP transport for the object store REST API."""

from dataclasses import dataclass

import httpx

from photo_album.domain.errors import RemoteStoreError
from photo_album.services.deletion import ObjectStoreTransport, RemoteResponse


@dataclass
class HttpxObjectStoreTransport(ObjectStoreTransport):
    """Object store transport using httpx."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxObjectStoreTransport":
        """Create a transport with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient())

    async def delete(
        self, url: str, headers: dict[str, str], timeout: float
    ) -> RemoteResponse:
        """Send a signed DELETE; transport failures become remote errors."""
        try:
            response = await self.http_client.delete(
                url, headers=headers, timeout=timeout
            )
        except httpx.TimeoutException as exc:
            raise RemoteStoreError(
                "Object storage delete failed", detail="Request timed out"
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteStoreError(
                "Object storage delete failed", detail=type(exc).__name__
            ) from exc
        return RemoteResponse(status_code=response.status_code, body=response.text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
