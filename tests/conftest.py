import asyncio
import socket
from typing import List, Optional

import pytest
import pytest_asyncio
import uvicorn

from latency_rounds.config import LoadConfig
from latency_rounds.mock_target import create_app


class RecordingSleep:
    """Stands in for asyncio.sleep so inter-round delays are recorded, not waited."""

    def __init__(self, events: Optional[List] = None):
        self.calls: List[float] = []
        self.events = events

    async def __call__(self, seconds: float):
        self.calls.append(seconds)
        if self.events is not None:
            self.events.append(("sleep", seconds))


@pytest.fixture
def make_sleep():
    return RecordingSleep


@pytest.fixture
def spec_config():
    return LoadConfig(
        base_url="http://proxy.test",
        rounds=3,
        requests_per_round=30,
        round_delay_ms=30_000,
        slow_threshold_ms=500,
    )


@pytest_asyncio.fixture
async def hung_target():
    """Mock target served over a real socket by uvicorn, answering only after 2s."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    app = create_app(delay_ms=2000)
    config = uvicorn.Config(app, log_level="warning", timeout_graceful_shutdown=3)
    server = uvicorn.Server(config)
    task = asyncio.create_task(server.serve(sockets=[sock]))
    while not server.started:
        await asyncio.sleep(0.01)

    yield f"http://127.0.0.1:{port}", app

    server.should_exit = True
    await task
    sock.close()
