# tests/test_cancel.py
# SPDX-License-Identifier: Apache-2.0
import pytest

from pointnow_console.api.errors import RequestCancelled
from pointnow_console.core.cancel import CancellationToken, RequestTracker


def test_token_cancel():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    assert token.cancelled
    with pytest.raises(RequestCancelled):
        token.raise_if_cancelled()


def test_latest_request_wins():
    tracker = RequestTracker()
    first = tracker.begin("customers:search")
    second = tracker.begin("customers:search")
    assert first.cancelled
    assert not second.cancelled
    assert tracker.is_current("customers:search", second)
    assert not tracker.is_current("customers:search", first)


def test_keys_are_independent():
    tracker = RequestTracker()
    search = tracker.begin("customers:search")
    tracker.begin("leaderboard")
    assert not search.cancelled


def test_cancel_all():
    tracker = RequestTracker()
    tokens = [tracker.begin("a"), tracker.begin("b")]
    tracker.cancel_all()
    assert all(t.cancelled for t in tokens)
    assert not tracker.is_current("a", tokens[0])
