"""Container healthcheck: probe the osquery schema server's /health route.

Exit code 0 means the server answered and identified itself as healthy.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Final
from urllib.request import Request, urlopen

SERVICE_NAME: Final[str] = "osquery-schema-mcp"
URL: Final[str] = os.getenv("OSQUERY_SCHEMA_MCP_HEALTH_URL", "http://127.0.0.1:8000/health")


def main() -> int:
    try:
        req = Request(URL, headers={"User-Agent": f"{SERVICE_NAME}/healthcheck"})  # noqa: S310
        with urlopen(req, timeout=4) as resp:  # noqa: S310 - operator supplied URL
            if resp.status != 200:
                print(f"unexpected status: {resp.status}", file=sys.stderr)
                return 1
            data = json.loads(resp.read().decode("utf-8"))
    except Exception as exc:
        print(f"healthcheck error: {exc}", file=sys.stderr)
        return 1

    if data.get("status") != "healthy" or data.get("service") != SERVICE_NAME:
        print(f"payload not healthy: {data}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - used by Docker
    raise SystemExit(main())
