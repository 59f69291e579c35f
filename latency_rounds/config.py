import os
from typing import Mapping, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

# -----------------------------
# Defaults (overridable via environment)
# -----------------------------
DEFAULT_TARGET_URL = "http://127.0.0.1:8000"
DEFAULT_ROUNDS = 3
DEFAULT_REQUESTS_PER_ROUND = 30
DEFAULT_ROUND_DELAY_MS = 30_000
DEFAULT_SLOW_THRESHOLD_MS = 500
DEFAULT_REQUEST_TIMEOUT = 10.0

MODELS_PATH = "/api/v1/models"


class LoadConfig(BaseModel):
    """Settings for one load run: where to aim, how many rounds, how big, how slow is slow."""

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_TARGET_URL
    rounds: int = Field(DEFAULT_ROUNDS, ge=1)
    requests_per_round: int = Field(DEFAULT_REQUESTS_PER_ROUND, ge=1)
    round_delay_ms: int = Field(DEFAULT_ROUND_DELAY_MS, ge=0)
    slow_threshold_ms: float = Field(DEFAULT_SLOW_THRESHOLD_MS, ge=0)
    # httpx would otherwise wait 5s per phase; make it explicit
    request_timeout_s: float = Field(DEFAULT_REQUEST_TIMEOUT, gt=0)

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"base_url is not a valid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"base_url must be an http(s) URL with a host, got {value!r}")
        return value

    @property
    def models_url(self) -> str:
        return f"{self.base_url}{MODELS_PATH}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LoadConfig":
        """
        Build a config from TARGET_URL, ROUNDS, REQUESTS_PER_ROUND, ROUND_DELAY_MS,
        SLOW_THRESHOLD_MS and REQUEST_TIMEOUT. Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("TARGET_URL", DEFAULT_TARGET_URL),
            rounds=int(env.get("ROUNDS", DEFAULT_ROUNDS)),
            requests_per_round=int(env.get("REQUESTS_PER_ROUND", DEFAULT_REQUESTS_PER_ROUND)),
            round_delay_ms=int(env.get("ROUND_DELAY_MS", DEFAULT_ROUND_DELAY_MS)),
            slow_threshold_ms=float(env.get("SLOW_THRESHOLD_MS", DEFAULT_SLOW_THRESHOLD_MS)),
            request_timeout_s=float(env.get("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        )
