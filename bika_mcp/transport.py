"""Authenticated HTTP transport to the Bika OpenAPI."""

import logging
from typing import Dict, Optional, Union

import httpx

from .config import BikaConfig
from .errors import ErrorKind, Failure
from .translator import RequestDescriptor

logger = logging.getLogger("bika_mcp.transport")


class BikaTransport:
    """
    Sends one RequestDescriptor and classifies the outcome.

    Every request carries the bearer token and a JSON content type; callers may
    override headers per call. Any non-2xx response becomes a Failure holding
    the status code and the response text verbatim. Successful responses are
    returned unparsed.
    """

    def __init__(self, config: BikaConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._transport = transport

    def headers(self, overrides: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        h = {
            "Authorization": f"Bearer {self._config.api_token}",
            "Content-Type": "application/json",
        }
        if overrides:
            h.update(overrides)
        return h

    def url_for(self, request: RequestDescriptor) -> str:
        return f"{self._config.base_url}{request.target()}"

    async def send(
        self, request: RequestDescriptor, headers: Optional[Dict[str, str]] = None
    ) -> Union[httpx.Response, Failure]:
        url = self.url_for(request)
        kwargs = {}
        if request.body is not None:
            kwargs["json"] = request.body

        try:
            async with httpx.AsyncClient(headers=self.headers(headers), transport=self._transport) as client:
                response = await client.request(request.method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{request.method} {request.path} failed before a response: {e}")
            return Failure(ErrorKind.TRANSPORT, f"Bika API request failed: {e}")

        if not response.is_success:
            logger.warning(f"{request.method} {request.path} -> HTTP {response.status_code}")
            return Failure(ErrorKind.TRANSPORT, f"Bika API error: {response.status_code} - {response.text}")

        logger.debug(f"{request.method} {request.path} -> HTTP {response.status_code}")
        return response
