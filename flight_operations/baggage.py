"""Checked baggage ledger for one passenger on one flight."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, FrozenSet, List, Optional

OVERSIZE_LIMIT_KG = 23.0


class BaggageStatus(enum.Enum):
    CHECKED = "checked"
    IN_TRANSIT = "in_transit"
    ARRIVED = "arrived"
    CLAIMED = "claimed"
    LOST = "lost"
    DAMAGED = "damaged"


_TRANSITIONS: Dict[BaggageStatus, FrozenSet[BaggageStatus]] = {
    BaggageStatus.CHECKED: frozenset(
        {BaggageStatus.IN_TRANSIT, BaggageStatus.LOST, BaggageStatus.DAMAGED}
    ),
    BaggageStatus.IN_TRANSIT: frozenset(
        {BaggageStatus.ARRIVED, BaggageStatus.LOST, BaggageStatus.DAMAGED}
    ),
    BaggageStatus.ARRIVED: frozenset(
        {BaggageStatus.CLAIMED, BaggageStatus.LOST, BaggageStatus.DAMAGED}
    ),
    # A lost bag can turn up again.
    BaggageStatus.LOST: frozenset({BaggageStatus.IN_TRANSIT, BaggageStatus.ARRIVED}),
    BaggageStatus.DAMAGED: frozenset({BaggageStatus.CLAIMED}),
    BaggageStatus.CLAIMED: frozenset(),
}


@dataclass
class BaggageTag:
    tag_number: str
    weight: float
    description: str
    fragile: bool
    oversize: bool
    status: BaggageStatus
    location: str
    last_updated: datetime


class BaggageLedger:
    def __init__(self, *, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._bags: List[BaggageTag] = []
        self._next_tag = 1

    @property
    def bags(self) -> List[BaggageTag]:
        return list(self._bags)

    @property
    def total_weight(self) -> float:
        return sum(bag.weight for bag in self._bags)

    def _generate_tag_number(self) -> str:
        tag = f"BAG{self._next_tag:06d}"
        self._next_tag += 1
        return tag

    def check_bag(self, weight: float, description: str = "", fragile: bool = False) -> str:
        if weight <= 0:
            raise ValueError("Bag weight must be positive")
        tag_number = self._generate_tag_number()
        self._bags.append(
            BaggageTag(
                tag_number=tag_number,
                weight=weight,
                description=description,
                fragile=fragile,
                oversize=weight > OVERSIZE_LIMIT_KG,
                status=BaggageStatus.CHECKED,
                location="Check-in",
                last_updated=self._clock(),
            )
        )
        return tag_number

    def get_bag(self, tag_number: str) -> Optional[BaggageTag]:
        return next((bag for bag in self._bags if bag.tag_number == tag_number), None)

    def has_bag(self, tag_number: str) -> bool:
        return self.get_bag(tag_number) is not None

    def update_status(self, tag_number: str, status: BaggageStatus, location: str) -> bool:
        bag = self.get_bag(tag_number)
        if bag is None or status not in _TRANSITIONS[bag.status]:
            return False
        bag.status = status
        bag.location = location
        bag.last_updated = self._clock()
        return True

    def mark_as_lost(self, tag_number: str) -> bool:
        return self.update_status(tag_number, BaggageStatus.LOST, "Unknown")

    def mark_as_damaged(self, tag_number: str) -> bool:
        return self.update_status(tag_number, BaggageStatus.DAMAGED, "Baggage Claim")

    def claim(self, tag_number: str) -> bool:
        return self.update_status(tag_number, BaggageStatus.CLAIMED, "Claimed by passenger")

    def lost_bags(self) -> List[BaggageTag]:
        return [bag for bag in self._bags if bag.status is BaggageStatus.LOST]

    def damaged_bags(self) -> List[BaggageTag]:
        return [bag for bag in self._bags if bag.status is BaggageStatus.DAMAGED]
