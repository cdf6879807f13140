"""Unit tests for backoff calculation and Retry-After parsing."""

import random
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest

from infrastructure.resilience.retry.backoff import (
    capped_delay,
    compute_backoff_delay,
    parse_retry_after,
    resolve_retry_delay,
    retry_after_from_response,
)
from tests.factories.resilience import make_response

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.unit
class TestCappedDelay:
    @pytest.mark.parametrize(
        "attempt,expected",
        [(1, 1000), (2, 2000), (3, 4000), (4, 8000), (6, 32000), (7, 60000), (12, 60000)],
    )
    def test_exponential_growth_capped_at_max(self, attempt, expected):
        assert capped_delay(attempt, 1000, 60000) == expected

    def test_rejects_attempt_zero(self):
        with pytest.raises(ValueError):
            capped_delay(0, 1000, 60000)


@pytest.mark.unit
class TestComputeBackoffDelay:
    def test_no_jitter_at_lower_bound(self):
        assert compute_backoff_delay(3, 1000, 60000, rand=lambda: 0.0) == 4000

    def test_full_jitter_adds_quarter(self):
        assert compute_backoff_delay(3, 1000, 60000, rand=lambda: 1.0) == 5000

    def test_jitter_applies_to_capped_value(self):
        assert compute_backoff_delay(10, 1000, 60000, rand=lambda: 0.5) == 67500

    @pytest.mark.parametrize("attempt", range(1, 10))
    def test_random_jitter_stays_within_bounds(self, attempt):
        rng = random.Random(attempt)
        capped = capped_delay(attempt, 500, 20000)

        for _ in range(50):
            delay = compute_backoff_delay(attempt, 500, 20000, rand=rng.random)
            assert capped <= delay <= capped * 1.25


@pytest.mark.unit
class TestResolveRetryDelay:
    def test_uses_backoff_without_server_delay(self, retry_policy_factory):
        policy = retry_policy_factory(base_delay_ms=100, max_delay_ms=1000)

        assert resolve_retry_delay(2, policy, None, rand=lambda: 0.0) == 200

    def test_server_delay_overrides_without_jitter(self, retry_policy_factory):
        policy = retry_policy_factory()

        assert resolve_retry_delay(1, policy, 5000, rand=lambda: 1.0) == 5000

    def test_server_delay_is_not_capped(self, retry_policy_factory):
        policy = retry_policy_factory(base_delay_ms=100, max_delay_ms=1000)

        assert resolve_retry_delay(1, policy, 120000) == 120000

    def test_zero_server_delay_is_honoured(self, retry_policy_factory):
        assert resolve_retry_delay(3, retry_policy_factory(), 0) == 0

    def test_negative_server_delay_is_ignored(self, retry_policy_factory):
        policy = retry_policy_factory()

        assert resolve_retry_delay(1, policy, -1, rand=lambda: 0.0) == 1000


@pytest.mark.unit
class TestParseRetryAfter:
    def test_integer_seconds(self):
        assert parse_retry_after("5", now=NOW) == 5000

    def test_integer_seconds_with_whitespace(self):
        assert parse_retry_after(" 30 ", now=NOW) == 30000

    def test_zero_seconds(self):
        assert parse_retry_after("0", now=NOW) == 0

    def test_raw_int_value(self):
        assert parse_retry_after(2, now=NOW) == 2000

    def test_future_http_date(self):
        value = format_datetime(NOW + timedelta(seconds=90), usegmt=True)

        assert parse_retry_after(value, now=NOW) == 90000

    def test_past_http_date_yields_no_override(self):
        value = format_datetime(NOW - timedelta(seconds=10), usegmt=True)

        assert parse_retry_after(value, now=NOW) is None

    def test_http_date_equal_to_now_yields_no_override(self):
        value = format_datetime(NOW, usegmt=True)

        assert parse_retry_after(value, now=NOW) is None

    @pytest.mark.parametrize("value", ["soon", "-5", "1.5", "", "   ", None, True])
    def test_unparseable_values_yield_no_override(self, value):
        assert parse_retry_after(value, now=NOW) is None

    def test_negative_int_yields_no_override(self):
        assert parse_retry_after(-3, now=NOW) is None

    @pytest.mark.parametrize("value", ["9" * 400, "9" * 5000, 10**400])
    def test_oversized_seconds_yield_no_override(self, value):
        assert parse_retry_after(value, now=NOW) is None


@pytest.mark.unit
class TestRetryAfterFromResponse:
    def test_reads_headers_mapping(self):
        assert retry_after_from_response(make_response({"Retry-After": "5"})) == 5000

    def test_reads_lowercase_header(self):
        assert retry_after_from_response(make_response({"retry-after": "3"})) == 3000

    def test_reads_mapping_like_response(self):
        assert retry_after_from_response({"retry-after": "4"}) == 4000

    def test_missing_header(self):
        assert retry_after_from_response(make_response()) is None

    def test_no_response(self):
        assert retry_after_from_response(None) is None

    def test_response_without_header_lookup(self):
        assert retry_after_from_response(object()) is None

    def test_passes_current_time(self):
        value = format_datetime(NOW + timedelta(seconds=2), usegmt=True)
        response = make_response({"Retry-After": value})

        assert retry_after_from_response(response, now=NOW) == 2000
