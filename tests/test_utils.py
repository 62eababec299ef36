"""Tests for rssclient.utils — sanitization, date parsing, time formatting, truncation."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

from rssclient.utils import (
    MIN_TIMESTAMP,
    HtmlSanitizer,
    parse_date,
    published_ts,
    sanitize_html,
    time_ago,
    truncate,
)


# ── sanitize_html ─────────────────────────────────────────────────────────────


class TestSanitizeHtml:
    def test_none_returns_empty(self):
        assert sanitize_html(None) == ""

    def test_empty_returns_empty(self):
        assert sanitize_html("") == ""

    def test_plain_text_passthrough(self):
        assert sanitize_html("Hello world") == "Hello world"

    def test_strips_html_tags(self):
        assert sanitize_html("<b>Bold</b> and <i>italic</i>") == "Bold and italic"

    def test_decodes_entities(self):
        assert sanitize_html("Tom &amp; Jerry") == "Tom & Jerry"

    def test_collapses_whitespace(self):
        assert sanitize_html("too   much\n\nspace") == "too much space"

    def test_malformed_markup_does_not_raise(self):
        assert sanitize_html("a < b & c") == "a < b & c"

    def test_sanitizer_object_delegates(self):
        assert HtmlSanitizer().clean("  Hello &amp; World  ") == "Hello & World"


# ── parse_date / published_ts ─────────────────────────────────────────────────


class TestParseDate:
    def test_rfc822(self):
        dt = parse_date("Sat, 15 Jun 2024 12:00:00 GMT")
        assert dt == datetime(2024, 6, 15, 12, tzinfo=timezone.utc)

    def test_iso8601_naive_is_utc(self):
        assert parse_date("2024-06-15T12:00:00") == datetime(2024, 6, 15, 12, tzinfo=timezone.utc)

    def test_garbage_returns_none(self):
        assert parse_date("not a date") is None
        assert parse_date("") is None
        assert parse_date(None) is None


class TestPublishedTs:
    def test_none_returns_minimum(self):
        assert published_ts(None) == MIN_TIMESTAMP

    def test_bad_format_returns_minimum(self):
        assert published_ts("not a date") == MIN_TIMESTAMP

    def test_custom_default(self):
        assert published_ts("", default=0.0) == 0.0

    def test_valid_date_returns_timestamp(self):
        dt = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        assert published_ts(format_datetime(dt)) == dt.timestamp()


# ── time_ago ──────────────────────────────────────────────────────────────────


class TestTimeAgo:
    def test_none_returns_empty(self):
        assert time_ago(None) == ""

    def test_bad_format_returns_empty(self):
        assert time_ago("not a date") == ""

    def test_just_now(self, monkeypatch):
        now = datetime.now(timezone.utc)
        monkeypatch.setattr("rssclient.utils.time.time", lambda: now.timestamp() + 30)
        assert time_ago(format_datetime(now)) == "just now"

    def test_minutes_ago(self, monkeypatch):
        now = datetime.now(timezone.utc)
        monkeypatch.setattr("rssclient.utils.time.time", lambda: now.timestamp() + 300)
        assert time_ago(format_datetime(now)) == "5m ago"

    def test_hours_ago(self, monkeypatch):
        now = datetime.now(timezone.utc)
        monkeypatch.setattr("rssclient.utils.time.time", lambda: now.timestamp() + 7200)
        assert time_ago(format_datetime(now)) == "2h ago"

    def test_days_ago(self):
        published = format_datetime(datetime.now(timezone.utc) - timedelta(days=2, minutes=1))
        assert time_ago(published) == "2d ago"


# ── truncate ──────────────────────────────────────────────────────────────────


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("Hello", max_len=200) == "Hello"

    def test_exact_length_unchanged(self):
        text = "a" * 200
        assert truncate(text, max_len=200) == text

    def test_long_text_truncated_with_ellipsis(self):
        result = truncate("word " * 50, max_len=30)
        assert result.endswith("…")
        assert len(result) <= 30

    def test_truncates_at_word_boundary(self):
        result = truncate("one two three four five six", max_len=15)
        assert result == "one two three…"
