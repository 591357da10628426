"""Tests that the server handles concurrent requests against one link store.

Uniqueness and click counts must hold with no in-process locking: the store's
UNIQUE constraint and atomic UPDATE are the only coordination.
"""

import asyncio

import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Many simultaneous requests on a shared store."""

    async def test_concurrent_create_requests(self, client):
        """Concurrent POST /api/links with different URLs all succeed with unique codes."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [client.post("/api/links", json={"url": url}) for url in urls]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        short_codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 201, f"Request {i}: status {r.status_code} body={r.text}"
            data = r.json()
            assert data["original_url"] == urls[i]
            short_codes.append(data["short_code"])

        assert len(short_codes) == len(set(short_codes)), "All short_codes must be unique under concurrency"

    async def test_concurrent_same_custom_code(self, client):
        """Exactly one request wins a contested custom code; the rest get 409."""
        tasks = [
            client.post("/api/links", json={"url": f"https://example.com/{i}", "customCode": "contest"})
            for i in range(15)
        ]
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses == [201] + [409] * 14

        listing = (await client.get("/api/links")).json()
        assert [row["short_code"] for row in listing] == ["contest"]

    async def test_concurrent_redirect_requests(self, client):
        """Concurrent redirects all succeed and every click is counted."""
        create_resp = await client.post(
            "/api/links",
            json={"url": "https://example.com/redirect-target"},
        )
        assert create_resp.status_code == 201
        short_code = create_resp.json()["short_code"]

        concurrency = 25
        tasks = [
            client.get(f"/{short_code}", follow_redirects=False)
            for _ in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"

        stats = (await client.get(f"/api/links/{short_code}")).json()
        assert stats["total_clicks"] == concurrency

    async def test_concurrent_health_requests(self, client):
        """Many concurrent GET /healthz requests all succeed."""
        responses = await asyncio.gather(*[client.get("/healthz") for _ in range(30)])

        assert all(r.status_code == 200 for r in responses)
        assert all(r.json()["ok"] for r in responses)
