import asyncio
import sys

from pydantic import ValidationError

from .config import LoadConfig
from .runner import run_rounds


def main() -> int:
    try:
        config = LoadConfig.from_env()
    except (ValidationError, ValueError) as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        asyncio.run(run_rounds(config))
    except KeyboardInterrupt:
        print("\n⛔ Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
