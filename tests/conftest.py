from typing import Callable, List

import httpx
import pytest

from pyrequests.config import Config


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_config() -> Callable[..., Config]:
    """Build a Config whose transport is a RecordingTransport around ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> Config:
        return Config(transport=RecordingTransport(handler), **kwargs)

    return factory


@pytest.fixture
def ok_config(make_config) -> Config:
    """Config answering every request with 200 and an empty JSON object."""
    return make_config(lambda request: httpx.Response(200, text="{}"))
