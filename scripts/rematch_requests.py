#!/usr/bin/env python3
"""
Script to rescan the catalog for a user's open rental requests.

Useful after bulk catalog changes (imports, price updates) so stored
matchedProperties reflect the current listings.

Usage: ACCESS_TOKEN=... python scripts/rematch_requests.py [api_base]
"""

import asyncio
import os
import sys

import httpx

API_BASE = "http://localhost:8000/api/v1"
OPEN_STATUSES = ("active", "matched")


async def rematch_requests(api_base: str, token: str):
    """Rematch every open rental request of the token's user"""
    headers = {"Authorization": f"Bearer {token}"}

    async with httpx.AsyncClient(base_url=api_base, headers=headers, timeout=30.0) as client:
        response = await client.get("/rental-requests/")
        response.raise_for_status()
        requests = [r for r in response.json()["data"] if r["status"] in OPEN_STATUSES]

        print(f"Found {len(requests)} open rental requests")

        for request in requests:
            request_id = request["id"]
            try:
                result = await client.post(f"/rental-requests/{request_id}/rematch")
                result.raise_for_status()
                body = result.json()
                print(f"✅ {request_id}: {body['matchedCount']} matches (status={body['data']['status']})")
            except httpx.HTTPError as e:
                print(f"❌ {request_id}: {e}")


if __name__ == "__main__":
    access_token = os.environ.get("ACCESS_TOKEN")
    if not access_token:
        print("ACCESS_TOKEN environment variable is required")
        sys.exit(1)

    asyncio.run(rematch_requests(sys.argv[1] if len(sys.argv) > 1 else API_BASE, access_token))
