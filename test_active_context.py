#!/usr/bin/env python3
"""
Single active location: last write wins, risk replacement, reset
"""

from flood_engine.assessment import score_context
from utils.active_context import ActiveLocationTracker


def test_commit_with_current_token(valley_context):
    tracker = ActiveLocationTracker()
    token = tracker.begin()
    assert tracker.current is None
    assert tracker.commit(token, valley_context)
    assert tracker.current is valley_context


def test_slow_acquisition_is_dropped(valley_context, plain_context):
    tracker = ActiveLocationTracker()
    slow = tracker.begin()
    fast = tracker.begin()

    assert tracker.commit(fast, plain_context)
    assert not tracker.commit(slow, valley_context)
    assert tracker.current is plain_context


def test_begin_discards_previous_context(valley_context):
    tracker = ActiveLocationTracker()
    tracker.commit(tracker.begin(), valley_context)
    tracker.begin()
    assert tracker.current is None


def test_risk_is_replaced_not_accumulated(valley_context):
    tracker = ActiveLocationTracker()
    tracker.commit(tracker.begin(), valley_context)

    first = score_context(valley_context, 10, 24)
    second = score_context(valley_context, 0, 12)
    assert tracker.record_risk(valley_context, first)
    assert tracker.record_risk(valley_context, second)
    assert tracker.current.risk is second


def test_risk_for_superseded_location_is_discarded(valley_context, plain_context):
    tracker = ActiveLocationTracker()
    tracker.commit(tracker.begin(), valley_context)
    risk = score_context(valley_context, 10, 24)

    tracker.commit(tracker.begin(), plain_context)
    assert not tracker.record_risk(valley_context, risk)
    assert valley_context.risk is None
    assert plain_context.risk is None


def test_reset_invalidates_inflight_acquisition(plain_context):
    tracker = ActiveLocationTracker()
    token = tracker.begin()
    tracker.reset()
    assert tracker.current is None
    assert not tracker.commit(token, plain_context)
    assert tracker.generation == 2


def test_scoring_leaves_context_untouched(valley_context):
    before = valley_context.to_dict()
    score_context(valley_context, 25, 72)
    assert valley_context.to_dict() == before
