import asyncio
import time
from functools import wraps
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from core.entities import QueryParams
from core.exceptions import DatabaseError, DocumentNotFoundError, TransportError
from core.interfaces import DocumentGateway
from utilities.monitoring import MonitoringFactory

logger = MonitoringFactory.get_logger("rest-gateway")


class RestDocumentGateway(DocumentGateway):
    """
    aiohttp transport for ``/api/<collection>[/<id>]`` document stores.

    The session is created lazily on the first request and shared by every
    reference of the owning database.
    """

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/api",
        auth_token: Optional[str] = None,
        timeout: float = 10.0,
        pool_size: int = 10,
        session: Optional[aiohttp.ClientSession] = None
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")
        self.__auth = auth_token
        self.__timeout = timeout
        self.__pool_size = pool_size
        self.__session = session
        self.__owns_session = session is None
        self.__lock = asyncio.Lock()
        logger.info(f"RestDocumentGateway initialized for {self.base_url}{self.api_prefix}")

    async def __aenter__(self):
        await self.create_pool()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close_pool()

    async def create_pool(self):
        """Create the connection pool if it doesn't exist"""
        if self.__session is None:
            async with self.__lock:
                if self.__session is None:
                    conn = aiohttp.TCPConnector(limit=self.__pool_size)
                    self.__session = aiohttp.ClientSession(
                        connector=conn,
                        timeout=aiohttp.ClientTimeout(total=self.__timeout)
                    )
                    self.__owns_session = True
                    logger.debug("Created new connection pool")

    async def close_pool(self):
        """Close the connection pool"""
        if self.__session is not None:
            async with self.__lock:
                if self.__session is not None:
                    if self.__owns_session:
                        await self.__session.close()
                    self.__session = None
                    logger.debug("Closed connection pool")

    async def close(self) -> None:
        await self.close_pool()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.__auth:
            headers["Authorization"] = f"Bearer {self.__auth}"
        return headers

    def url_for(self, collection: str, document_id: Optional[str] = None) -> str:
        url = f"{self.base_url}{self.api_prefix}/{quote(collection, safe='')}"
        if document_id is not None:
            url += f"/{quote(document_id, safe='')}"
        return url

    def _with_session(func):
        """Decorator to handle session management"""
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            await self.create_pool()
            return await func(self, self.__session, *args, **kwargs)
        return wrapper

    @_with_session
    async def _request(
        self,
        session: aiohttp.ClientSession,
        method: str,
        collection: str,
        document_id: Optional[str] = None,
        params: Optional[QueryParams] = None,
        body: Any = None
    ) -> Any:
        url = self.url_for(collection, document_id)
        status = 0
        started = time.perf_counter()
        try:
            async with session.request(
                method, url, params=params, json=body, headers=self._headers()
            ) as response:
                status = response.status
                if status == 404:
                    raise DocumentNotFoundError(collection, document_id)
                if not 200 <= status < 300:
                    reason = await response.text()
                    raise TransportError(f"{method} {url} failed with {status}: {reason[:200]}", status=status)
                payload = await response.json(content_type=None)
                logger.debug(f"{method} {url} -> {status}")
                return payload
        except DocumentNotFoundError:
            logger.debug(f"{method} {url} -> 404")
            raise
        except DatabaseError as e:
            logger.error(f"Request failed: {e}")
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"{method} {url} failed: {e!r}")
            raise TransportError(f"{method} {url} failed: {e!r}") from e
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            MonitoringFactory.record_metric(
                "gateway.request.duration_ms", elapsed_ms, method=method, status=str(status)
            )

    async def get(
        self,
        collection: str,
        document_id: Optional[str] = None,
        params: Optional[QueryParams] = None
    ) -> Any:
        return await self._request("GET", collection, document_id, params=params)

    async def put(self, collection: str, document_id: str, document: Dict[str, Any]) -> Any:
        return await self._request("PUT", collection, document_id, body=document)

    async def patch(self, collection: str, document_id: str, fields: Dict[str, Any]) -> Any:
        return await self._request("PATCH", collection, document_id, body=fields)

    async def delete(self, collection: str, document_id: str) -> None:
        await self._request("DELETE", collection, document_id)
