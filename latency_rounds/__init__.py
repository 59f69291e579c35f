from .config import LoadConfig
from .results import RequestResult, RoundSummary
from .runner import build_client, make_request, run_round, run_rounds

__all__ = [
    "LoadConfig",
    "RequestResult",
    "RoundSummary",
    "build_client",
    "make_request",
    "run_round",
    "run_rounds",
]
