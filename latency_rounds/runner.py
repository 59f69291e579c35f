import asyncio
import time
from typing import Awaitable, Callable, List, Optional

import httpx

from .config import DEFAULT_SLOW_THRESHOLD_MS, LoadConfig
from .results import RequestResult, RoundSummary

Sleeper = Callable[[float], Awaitable[object]]


def _describe(exc: Exception) -> str:
    message = str(exc)
    name = type(exc).__name__
    return f"{name}: {message}" if message else name


def _ms(value: float) -> str:
    return f"{value:,.0f}"


def build_client(config: LoadConfig) -> httpx.AsyncClient:
    """Client sized so a whole round is in flight at once, with the configured timeout."""
    limits = httpx.Limits(max_connections=config.requests_per_round)
    return httpx.AsyncClient(timeout=config.request_timeout_s, limits=limits)


async def make_request(
    client: httpx.AsyncClient,
    url: str,
    round: int,
    id: int,
    threshold_ms: float = DEFAULT_SLOW_THRESHOLD_MS,
) -> RequestResult:
    """
    Fire one GET and time it from dispatch to settlement.
    Any HTTP status counts as a response; only transport failures become errors.
    """
    start = time.perf_counter()
    try:
        resp = await client.get(url, params={"round": round, "id": id})
    except httpx.HTTPError as e:
        duration_ms = (time.perf_counter() - start) * 1000.0
        error = _describe(e)
        print(f"   ❌ Round {round}, Request {id}: {error} ({duration_ms:.0f}ms)")
        return RequestResult(id=id, round=round, duration_ms=duration_ms, error=error)

    duration_ms = (time.perf_counter() - start) * 1000.0
    if duration_ms > threshold_ms:
        print(
            f"   ✅ Round {round}, Request {id}: {duration_ms:.0f}ms "
            f"(>{_ms(threshold_ms)}ms - should count!)"
        )
    return RequestResult(id=id, round=round, duration_ms=duration_ms, status=resp.status_code)


async def run_round(client: httpx.AsyncClient, config: LoadConfig, round: int) -> RoundSummary:
    """Launch the whole batch at once and wait for every request to settle."""
    n = config.requests_per_round
    print(f"🚀 Round {round}: Launching {n} concurrent requests...")

    tasks = [
        make_request(client, config.models_url, round, i, config.slow_threshold_ms)
        for i in range(1, n + 1)
    ]
    results: List[RequestResult] = await asyncio.gather(*tasks)

    summary = RoundSummary.from_results(round, results, config.slow_threshold_ms)
    print(
        f"   📊 Round {round} results: {summary.slow_count}/{summary.total} requests "
        f">{_ms(summary.threshold_ms)}ms, avg: {summary.average_ms:.0f}ms, "
        f"max: {summary.max_ms:.0f}ms, errors: {summary.error_count}"
    )
    return summary


async def _run(client: httpx.AsyncClient, config: LoadConfig, sleep: Sleeper) -> List[RoundSummary]:
    summaries: List[RoundSummary] = []
    for round in range(1, config.rounds + 1):
        summaries.append(await run_round(client, config, round))

        if round < config.rounds:
            print(f"   ⏰ Waiting {config.round_delay_ms / 1000.0:.1f} seconds before next round...\n")
            await sleep(config.round_delay_ms / 1000.0)
    return summaries


async def run_rounds(
    config: LoadConfig,
    client: Optional[httpx.AsyncClient] = None,
    sleep: Sleeper = asyncio.sleep,
) -> List[RoundSummary]:
    """
    Run every configured round in order and return one summary per round.

    Without a client, one is built from the config (see build_client) and closed at
    the end. A client passed in is used as-is and left open for the caller; its own
    timeout and pool limits apply, not config.request_timeout_s.
    """
    print("🎯 LATENCY ROUND LOAD GENERATION")
    print(f"📍 Target: {config.models_url}")
    print(
        f"🔄 {config.rounds} rounds x {config.requests_per_round} requests, "
        f"slow threshold {_ms(config.slow_threshold_ms)}ms, "
        f"delay {_ms(config.round_delay_ms)}ms\n"
    )

    if client is not None:
        summaries = await _run(client, config, sleep)
    else:
        async with build_client(config) as owned:
            summaries = await _run(owned, config, sleep)

    total = sum(s.total for s in summaries)
    slow = sum(s.slow_count for s in summaries)
    errors = sum(s.error_count for s in summaries)
    print(f"\n🎉 Done: {slow}/{total} requests >{_ms(config.slow_threshold_ms)}ms, {errors} errors")
    print("🔍 Only client-side timings were observed; check the target's metrics backend to confirm")
    return summaries
