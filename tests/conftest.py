import httpx
import pytest

from bika_mcp.config import BikaConfig
from bika_mcp.dispatcher import Dispatcher

BASE_URL = "https://bika.test/api/openapi/bika"


class EchoTransport:
    """Answers every request with the request it was asked to send."""

    def __init__(self) -> None:
        self.sent = []

    async def send(self, request):
        self.sent.append(request)
        return httpx.Response(200, json=request.as_dict())


class CannedTransport:
    def __init__(self, response) -> None:
        self.response = response
        self.sent = []

    async def send(self, request):
        self.sent.append(request)
        return self.response


@pytest.fixture
def config() -> BikaConfig:
    return BikaConfig(api_token="tok_test", base_url=BASE_URL, default_space_id="spc1")


@pytest.fixture
def config_without_space() -> BikaConfig:
    return BikaConfig(api_token="tok_test", base_url=BASE_URL)


@pytest.fixture
def echo() -> EchoTransport:
    return EchoTransport()


@pytest.fixture
def dispatcher(config, echo) -> Dispatcher:
    return Dispatcher(config, transport=echo)
