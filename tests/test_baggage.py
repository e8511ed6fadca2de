from datetime import datetime

import pytest

from flight_operations.baggage import BaggageLedger, BaggageStatus

NOW = datetime(2026, 11, 2, 7, 0)


def make_ledger():
    return BaggageLedger(clock=lambda: NOW)


def test_check_bag_assigns_sequential_tags_and_flags():
    ledger = make_ledger()

    first = ledger.check_bag(18.5, "Blue suitcase")
    second = ledger.check_bag(27.0, "Golf clubs", fragile=True)

    assert (first, second) == ("BAG000001", "BAG000002")
    bag = ledger.get_bag(second)
    assert bag.oversize is True
    assert bag.fragile is True
    assert bag.status is BaggageStatus.CHECKED
    assert bag.location == "Check-in"
    assert ledger.get_bag(first).oversize is False
    assert ledger.total_weight == 45.5


def test_oversize_limit_is_exclusive():
    ledger = make_ledger()
    tag = ledger.check_bag(23.0)
    assert ledger.get_bag(tag).oversize is False


def test_status_machine():
    ledger = make_ledger()
    tag = ledger.check_bag(10.0)

    assert ledger.claim(tag) is False
    assert ledger.update_status(tag, BaggageStatus.IN_TRANSIT, "JFK ramp")
    assert ledger.update_status(tag, BaggageStatus.ARRIVED, "LAX belt 4")
    assert ledger.claim(tag)
    assert ledger.get_bag(tag).location == "Claimed by passenger"
    assert ledger.mark_as_lost(tag) is False
    assert ledger.update_status("BAG999999", BaggageStatus.CLAIMED, "x") is False


def test_lost_and_damaged_reports():
    ledger = make_ledger()
    lost = ledger.check_bag(12.0)
    damaged = ledger.check_bag(8.0)
    ledger.check_bag(5.0)

    assert ledger.mark_as_lost(lost)
    assert ledger.mark_as_damaged(damaged)

    assert [bag.tag_number for bag in ledger.lost_bags()] == [lost]
    assert [bag.tag_number for bag in ledger.damaged_bags()] == [damaged]
    assert ledger.update_status(lost, BaggageStatus.ARRIVED, "LAX office")
    assert ledger.lost_bags() == []
    assert ledger.has_bag(lost)
    assert not ledger.has_bag("BAG000004")


def test_check_bag_rejects_non_positive_weight():
    ledger = make_ledger()

    with pytest.raises(ValueError):
        ledger.check_bag(0.0)
    with pytest.raises(ValueError):
        ledger.check_bag(-4.0)
    assert ledger.total_weight == 0
    assert ledger.check_bag(4.0) == "BAG000001"
