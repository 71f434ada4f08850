#!/usr/bin/env python3
"""
One-time script to fetch real log server responses and save them as test fixtures.
Run this against a running server to capture the actual response shapes.
"""

import asyncio
import json
from pathlib import Path

from app.core.config import get_settings
from app.services.log_api import LogApiClient


async def main():
    settings = get_settings()
    client = LogApiClient(settings.api_base_url, timeout=settings.request_timeout_seconds)

    print(f"Fetching logs from {settings.api_base_url}...")
    try:
        data = {
            "logs": await client.get_logs(),
            "all_logs": await client.get_all_logs(),
        }
    finally:
        await client.close()

    # Save to fixtures directory
    fixtures_dir = Path(__file__).parent.parent / "tests" / "fixtures"
    fixtures_dir.mkdir(parents=True, exist_ok=True)

    for name, records in data.items():
        filename = fixtures_dir / f"{name}.json"
        with open(filename, "w") as f:
            json.dump([r.model_dump(by_alias=True) for r in records], f, indent=2)
        print(f"Saved {len(records)} records to {filename}")

    print("\nDone! Check tests/fixtures/ for captured responses.")


if __name__ == "__main__":
    asyncio.run(main())
