"""Seat numbering and seat inventory generation."""
from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

# I and K are never used as seat letters.
FIRST_LETTERS: Tuple[str, ...] = tuple("ADGL")
MIDDLE_CABIN_LETTERS: Tuple[str, ...] = tuple("ABDEFGJL")
ECONOMY_LETTERS: Tuple[str, ...] = tuple("ABCDEFGHJL")


class SeatClass(enum.Enum):
    FIRST = "First"
    BUSINESS = "Business"
    PREMIUM = "Premium"
    ECONOMY = "Economy"


@dataclass(frozen=True)
class AircraftTemplate:
    """Cabin layout of an aircraft type.

    Row boundaries are 1-based and inclusive: rows ``1..first_rows`` are first
    class, up to ``business_rows`` business, up to ``premium_rows`` premium
    economy and everything after that economy.
    """

    code: str
    rows: int = 64
    first_rows: int = 7
    business_rows: int = 11
    premium_rows: int = 18

    def __post_init__(self) -> None:
        if self.rows <= 0:
            raise ValueError("Aircraft must have at least one row")
        if not 0 <= self.first_rows <= self.business_rows <= self.premium_rows:
            raise ValueError("Cabin boundaries must be non-decreasing")

    @property
    def cols(self) -> int:
        return len(ECONOMY_LETTERS)


BOEING_777_300ER = AircraftTemplate("B77W")
DEFAULT_AIRCRAFT = BOEING_777_300ER


def seat_class_for_row(row: int, template: AircraftTemplate = DEFAULT_AIRCRAFT) -> SeatClass:
    """Return the cabin class of the 1-based ``row``."""

    if row <= template.first_rows:
        return SeatClass.FIRST
    if row <= template.business_rows:
        return SeatClass.BUSINESS
    if row <= template.premium_rows:
        return SeatClass.PREMIUM
    return SeatClass.ECONOMY


def seat_letters_for_row(row: int, template: AircraftTemplate = DEFAULT_AIRCRAFT) -> Sequence[str]:
    seat_class = seat_class_for_row(row, template)
    if seat_class is SeatClass.FIRST:
        return FIRST_LETTERS
    if seat_class in (SeatClass.BUSINESS, SeatClass.PREMIUM):
        return MIDDLE_CABIN_LETTERS
    return ECONOMY_LETTERS


def generate_seat_number(row: int, col: int, template: AircraftTemplate = DEFAULT_AIRCRAFT) -> str:
    """Return the seat number for the 0-based ``row``/``col`` or ``""``."""

    if not 0 <= row < template.rows:
        return ""
    letters = seat_letters_for_row(row + 1, template)
    if not 0 <= col < len(letters):
        return ""
    return f"{row + 1}{letters[col]}"


def seat_number_to_position(
    seat_number: str, template: AircraftTemplate = DEFAULT_AIRCRAFT
) -> Optional[Tuple[int, int]]:
    """Parse ``"19A"`` style seat numbers into a 0-based ``(row, col)``."""

    text = (seat_number or "").strip().upper()
    digits = ""
    index = 0
    while index < len(text) and text[index].isdigit():
        digits += text[index]
        index += 1
    letter = text[index:]
    if not digits or len(letter) != 1:
        return None
    row = int(digits)
    if not 1 <= row <= template.rows:
        return None
    letters = seat_letters_for_row(row, template)
    if letter not in letters:
        return None
    return row - 1, letters.index(letter)


def row_label_to_number(label: str) -> int:
    """Convert a base-26 row label to its 1-based number (A=1, Z=26, AA=27).

    Returns 0 for an empty or non alphabetic label.
    """

    label = (label or "").upper()
    if not label or not all("A" <= ch <= "Z" for ch in label):
        return 0
    number = 0
    for ch in label:
        number = number * 26 + (ord(ch) - ord("A") + 1)
    return number


def number_to_row_label(number: int) -> str:
    if number <= 0:
        return ""
    label = ""
    while number > 0:
        number, remainder = divmod(number - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def parse_lettered_seat(seat_label: str) -> Optional[Tuple[int, int]]:
    """Parse a letter-row label such as ``"AA5"`` into a 0-based ``(row, col)``.

    The leading letters are the row in base-26, the trailing digits the
    1-based column.
    """

    text = (seat_label or "").strip().upper()
    index = 0
    while index < len(text) and text[index].isalpha():
        index += 1
    row_label, column = text[:index], text[index:]
    if not row_label or not column.isdigit():
        return None
    return row_label_to_number(row_label) - 1, int(column) - 1


def _jitter(rng: random.Random, span: float) -> int:
    bound = int(span)
    return rng.randrange(bound) if bound > 0 else 0


def row_price(seat_class: SeatClass, base_price: float, rng: random.Random) -> float:
    """Draw the price shared by every seat of a row in ``seat_class``."""

    if seat_class is SeatClass.FIRST:
        return base_price * 3.0 + _jitter(rng, base_price)
    if seat_class is SeatClass.BUSINESS:
        return base_price * 2.0 + _jitter(rng, base_price / 2.0)
    if seat_class is SeatClass.PREMIUM:
        return base_price * 1.5 + _jitter(rng, base_price / 2.5)
    return base_price + _jitter(rng, base_price / 5.0)


@dataclass(frozen=True)
class SeatLayout:
    number: str
    row: int
    col: int
    seat_class: SeatClass
    price: float


def build_seat_inventory(
    base_price: float,
    template: AircraftTemplate = DEFAULT_AIRCRAFT,
    *,
    rng: Optional[random.Random] = None,
) -> Dict[str, SeatLayout]:
    """Lay out and price every seat of ``template``.

    Prices are drawn once per row, so every seat in a row costs the same.
    """

    if base_price < 0:
        raise ValueError("Base price must not be negative")
    rng = rng or random.Random()
    inventory: Dict[str, SeatLayout] = {}
    for row in range(1, template.rows + 1):
        seat_class = seat_class_for_row(row, template)
        price = row_price(seat_class, base_price, rng)
        for col, letter in enumerate(seat_letters_for_row(row, template)):
            number = f"{row}{letter}"
            inventory[number] = SeatLayout(number, row - 1, col, seat_class, price)
    return inventory
