from __future__ import annotations

from collections.abc import Sequence

from npm_downloads_client.config import NpmDownloadsClientConfig, RetryConfig


class Response:
    def __init__(self, status_code: int, payload: object = None):
        self.status_code = status_code
        self._payload = payload

    def json(self) -> object:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


Step = Response | Exception


class SyncSequencedClient:
    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.calls = 0
        self.urls: list[str] = []
        self.methods: list[str] = []

    def request(self, method: str, url: str, *, content=None):
        self.calls += 1
        self.methods.append(method)
        self.urls.append(url)
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    def close(self):
        return None


class AsyncSequencedClient:
    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.calls = 0
        self.urls: list[str] = []
        self.closed = False

    async def request(self, method: str, url: str, *, content=None):
        self.calls += 1
        self.urls.append(url)
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    async def aclose(self):
        self.closed = True


class RecordingSleeper:
    def __init__(self):
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class AsyncRecordingSleeper:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def build_config(*, max_retries: int = 3, delay_seconds: float = 0.0) -> NpmDownloadsClientConfig:
    cfg = NpmDownloadsClientConfig(
        retry=RetryConfig(max_retries=max_retries, delay_seconds=delay_seconds),
    )
    cfg.validate()
    return cfg
