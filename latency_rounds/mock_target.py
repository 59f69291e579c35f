"""
Stand-in for the proxy's model listing endpoint.

Every request to /api/v1/models sleeps for a fixed delay before answering, so the
load generator can be pointed at something with a known latency.

Run it with:  MOCK_DELAY_MS=600 python -m latency_rounds.mock_target
"""
import asyncio
import os
from typing import Optional

from fastapi import FastAPI
import uvicorn

MOCK_HOST = os.getenv("MOCK_HOST", "127.0.0.1")
MOCK_PORT = int(os.getenv("MOCK_PORT", "8000"))
MOCK_DELAY_MS = int(os.getenv("MOCK_DELAY_MS", "0"))

MODELS = [
    {"id": "mock/fast-model", "object": "model"},
    {"id": "mock/slow-model", "object": "model"},
]


def create_app(delay_ms: int = 0) -> FastAPI:
    app = FastAPI(title="Mock models endpoint")
    app.state.delay_ms = delay_ms
    app.state.hits = 0

    @app.get("/api/v1/models")
    async def list_models(round: Optional[int] = None, id: Optional[int] = None):
        app.state.hits += 1
        if app.state.delay_ms:
            await asyncio.sleep(app.state.delay_ms / 1000.0)
        return {"object": "list", "data": MODELS, "round": round, "id": id}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    print(f"[mock] Serving /api/v1/models on http://{MOCK_HOST}:{MOCK_PORT} (delay {MOCK_DELAY_MS}ms)")
    uvicorn.run(create_app(MOCK_DELAY_MS), host=MOCK_HOST, port=MOCK_PORT, log_level="warning")
