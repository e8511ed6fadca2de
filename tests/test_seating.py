import random

import pytest

from flight_operations import seating
from flight_operations.seating import AircraftTemplate, SeatClass


def test_row_letters_skip_confusable_letters():
    for row in (1, 8, 12, 19, 64):
        letters = seating.seat_letters_for_row(row)
        assert "I" not in letters
        assert "K" not in letters

    assert list(seating.seat_letters_for_row(1)) == ["A", "D", "G", "L"]
    assert len(seating.seat_letters_for_row(8)) == 8
    assert len(seating.seat_letters_for_row(19)) == 10


def test_cabin_classes_follow_row_boundaries():
    assert seating.seat_class_for_row(7) is SeatClass.FIRST
    assert seating.seat_class_for_row(8) is SeatClass.BUSINESS
    assert seating.seat_class_for_row(11) is SeatClass.BUSINESS
    assert seating.seat_class_for_row(12) is SeatClass.PREMIUM
    assert seating.seat_class_for_row(18) is SeatClass.PREMIUM
    assert seating.seat_class_for_row(19) is SeatClass.ECONOMY


def test_inventory_numbers_are_unique_and_round_trip():
    inventory = seating.build_seat_inventory(500.0, rng=random.Random(7))

    assert len(inventory) == 7 * 4 + 11 * 8 + 46 * 10
    for number, entry in inventory.items():
        assert entry.number == number
        assert seating.seat_number_to_position(number) == (entry.row, entry.col)
        assert seating.generate_seat_number(entry.row, entry.col) == number


def test_generate_seat_number_rejects_out_of_range_positions():
    assert seating.generate_seat_number(0, 4) == ""
    assert seating.generate_seat_number(64, 0) == ""
    assert seating.generate_seat_number(18, 9) == "19L"


def test_seat_number_to_position_handles_unknown_numbers():
    assert seating.seat_number_to_position("1B") is None
    assert seating.seat_number_to_position("19K") is None
    assert seating.seat_number_to_position("65A") is None
    assert seating.seat_number_to_position("") is None
    assert seating.seat_number_to_position("19a") == (18, 0)


def test_row_prices_stay_within_cabin_bands():
    inventory = seating.build_seat_inventory(500.0, rng=random.Random(3))

    for entry in inventory.values():
        if entry.seat_class is SeatClass.FIRST:
            assert 1500 <= entry.price <= 1999
        elif entry.seat_class is SeatClass.BUSINESS:
            assert 1000 <= entry.price <= 1249
        elif entry.seat_class is SeatClass.PREMIUM:
            assert 750 <= entry.price <= 949
        else:
            assert 500 <= entry.price <= 599

    row_19 = {entry.price for entry in inventory.values() if entry.row == 18}
    assert len(row_19) == 1


def test_base26_row_labels():
    assert seating.row_label_to_number("A") == 1
    assert seating.row_label_to_number("Z") == 26
    assert seating.row_label_to_number("AA") == 27
    assert seating.row_label_to_number("AB") == 28
    assert seating.row_label_to_number("1A") == 0
    for number in (1, 26, 27, 52, 53, 702, 703):
        assert seating.row_label_to_number(seating.number_to_row_label(number)) == number


def test_parse_lettered_seat():
    assert seating.parse_lettered_seat("AA5") == (26, 4)
    assert seating.parse_lettered_seat("b10") == (1, 9)
    assert seating.parse_lettered_seat("AA") is None
    assert seating.parse_lettered_seat("12") is None


def test_custom_template_controls_row_extent():
    template = AircraftTemplate("A320", rows=30, first_rows=0, business_rows=4, premium_rows=4)
    inventory = seating.build_seat_inventory(200.0, template, rng=random.Random(1))

    assert "30A" in inventory
    assert "31A" not in inventory
    assert inventory["1B"].seat_class is SeatClass.BUSINESS


def test_invalid_template_and_price_are_rejected():
    with pytest.raises(ValueError):
        AircraftTemplate("BAD", rows=0)
    with pytest.raises(ValueError):
        seating.build_seat_inventory(-1.0)
