from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from DiscordMirror.payloads import PermissionOverwrite
from DiscordMirror.transcoders import (
    DEFAULT_CONTENT_TYPE,
    canonicalize_permission_overwrites,
    coerce_snowflake,
    emoji_key,
    extract_nested_id,
    infer_content_type,
    parse_timestamp,
    synthesize_placeholder_email,
)


@pytest.mark.parametrize("value", [None, ""])
def test_parse_timestamp_empty_is_none(value):
    assert parse_timestamp(value) is None


def test_parse_timestamp_iso_with_zulu():
    assert parse_timestamp("2024-01-02T03:04:05Z") == datetime(
        2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc
    )


def test_parse_timestamp_iso_with_offset_keeps_instant():
    parsed = parse_timestamp("2024-01-02T05:04:05.123+02:00")
    assert parsed == datetime(2024, 1, 2, 3, 4, 5, 123000, tzinfo=timezone.utc)


def test_parse_timestamp_epoch_seconds():
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp(1_700_000_000) == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)


def test_parse_timestamp_naive_datetime_is_utc():
    naive = datetime(2024, 5, 6, 7, 8, 9)
    assert parse_timestamp(naive) == naive.replace(tzinfo=timezone.utc)


def test_parse_timestamp_aware_datetime_passes_through():
    aware = datetime(2024, 5, 6, tzinfo=timezone(timedelta(hours=-5)))
    assert parse_timestamp(aware) is aware


@pytest.mark.parametrize("value", ["not-a-date", "2024-13-45", True, 1.5, 10**20, [], {}])
def test_parse_timestamp_garbage_is_none(value):
    assert parse_timestamp(value) is None


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture], deadline=None)
@given(st.one_of(st.none(), st.text(), st.integers(), st.floats(), st.booleans(), st.datetimes()))
def test_parse_timestamp_never_raises(value):
    out = parse_timestamp(value)
    assert out is None or out.tzinfo is not None


def test_canonicalize_overwrites_empty_inputs():
    assert canonicalize_permission_overwrites(None) == []
    assert canonicalize_permission_overwrites([]) == []
    assert canonicalize_permission_overwrites("junk") == []


def test_canonicalize_single_map_with_defaults():
    assert canonicalize_permission_overwrites({"id": 1, "allow": 1024}) == [
        {"id": 1, "type": 0, "allow": "1024", "deny": "0"}
    ]


def test_canonicalize_list_of_models():
    out = canonicalize_permission_overwrites(
        [
            PermissionOverwrite(id=5, type=1, allow="8", deny=2048),
            {"id": 6, "type": 0, "allow": None, "deny": "16"},
        ]
    )
    assert out == [
        {"id": 5, "type": 1, "allow": "8", "deny": "2048"},
        {"id": 6, "type": 0, "allow": "0", "deny": "16"},
    ]


def test_canonicalize_skips_non_object_entries():
    assert canonicalize_permission_overwrites([{"id": 1}, 7, "x"]) == [
        {"id": 1, "type": 0, "allow": "0", "deny": "0"}
    ]


def test_placeholder_email():
    assert synthesize_placeholder_email(42, "discord.local") == "discord+42@discord.local"
    assert synthesize_placeholder_email(7, "example.org") == "discord+7@example.org"


def test_extract_nested_id():
    assert extract_nested_id({"id": 9, "name": "x"}) == 9
    assert extract_nested_id(PermissionOverwrite(id=3)) == 3
    assert extract_nested_id(9) is None
    assert extract_nested_id(None) is None
    assert extract_nested_id("9") is None


@pytest.mark.parametrize(
    "value, expected",
    [(12, 12), ("12", 12), ("0012", 12), (True, None), (-1, None), ("12a", None), ("", None),
     ("١٢", None), (None, None), (1.0, None)],
)
def test_coerce_snowflake(value, expected):
    assert coerce_snowflake(value) == expected


def test_emoji_key_prefers_custom_id():
    assert emoji_key(123, "blob") == "123"
    assert emoji_key(None, "👍") == "👍"
    assert emoji_key(None, None) is None


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("report.PDF", "application/pdf"),
        ("cat.jpeg", "image/jpeg"),
        ("cat.JPG", "image/jpeg"),
        ("clip.mov", "video/quicktime"),
        ("song.flac", "audio/flac"),
        ("archive.tar.gz", DEFAULT_CONTENT_TYPE),
        ("README", DEFAULT_CONTENT_TYPE),
        (None, None),
    ],
)
def test_infer_content_type(filename, expected):
    assert infer_content_type(filename) == expected
