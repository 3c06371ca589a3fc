import pytest

from DiscordMirror import metrics
from DiscordMirror.metrics import get_counter, reset_counters


def test_counters_accumulate_and_reset():
    metrics.inc_counter("example")
    metrics.inc_counter("example", 2)
    metrics.observe_histogram("latency", 42)
    assert get_counter("example") == 3
    assert get_counter("never.touched") == 0

    reset_counters()
    assert get_counter("example") == 0
    assert metrics.get_counters() == {}


def test_observe_histogram_buckets():
    metrics.observe_histogram("latency", 3)
    metrics.observe_histogram("latency", 5)
    metrics.observe_histogram("latency", 0)

    counters = metrics.get_counters()
    assert counters["histo.latency.le_5"] == 2
    assert counters["histo.latency.le_1"] == 1
    assert counters["histo.latency.sum"] == 8
    assert counters["histo.latency.count"] == 3


def test_observe_histogram_overflow_bucket():
    metrics.observe_histogram("latency", 10_000, buckets=[1, 5, 10])

    counters = metrics.get_counters()
    assert counters["histo.latency.gt_10"] == 1
    assert counters["histo.latency.sum"] == 10_000
    assert counters["histo.latency.count"] == 1


@pytest.mark.asyncio
async def test_ingest_counts_outcomes_per_kind(pipeline):
    ok = await pipeline.ingest("user", payload={"id": "1", "username": "ada"})
    assert ok.ok
    bad = await pipeline.ingest("user")
    assert not bad.ok

    assert get_counter("ingest.ok.user") == 1
    assert get_counter("ingest.error.user") == 1
    assert get_counter("store.upsert") == 1


@pytest.mark.asyncio
async def test_fetch_records_call_latency(pipeline, discord_client):
    discord_client.users[7] = {"id": "7", "username": "grace"}

    res = await pipeline.ingest("user", identity=7)
    assert res.ok

    counters = metrics.get_counters()
    assert counters["fetch.call"] == 1
    assert counters["histo.fetch.ms.count"] == 1
    assert "fetch.failure" not in counters
