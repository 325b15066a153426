import pytest

from newcity_monitor.models import Item


class FakeResponse:
    def __init__(self, status_code=200, text="", payload=None):
        self.status_code = status_code
        self.text = text
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no body")
        return self._payload

    def raise_for_status(self):
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Records calls and answers them from a queue of responses."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.closed = False

    def _next(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        resp = self.responses.pop(0) if self.responses else FakeResponse(200, payload={"id": "1"})
        if isinstance(resp, Exception):
            raise resp
        return resp

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)

    def close(self):
        self.closed = True


@pytest.fixture
def choco():
    return Item("Choco", "Rich", ("E",))


@pytest.fixture
def mint():
    return Item("Mint", "Cool")
