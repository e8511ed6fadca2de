"""Utilities to populate an airline with sample data for tests and demos."""
from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Dict, Optional, Sequence

from .airline import Airline
from .models import Flight, Passenger

AIRPORTS: Sequence[str] = (
    "ATL",
    "PEK",
    "DXB",
    "LAX",
    "HND",
    "ORD",
    "LHR",
    "HKG",
    "PVG",
    "CDG",
)
BASE_FARES = (300.0, 500.0, 750.0)
FIRST_NAMES = ("Ava", "Noah", "Liam", "Mia", "Lucas", "Emma", "Ethan", "Isabella")
LAST_NAMES = ("Johnson", "Williams", "Smith", "Brown", "Garcia", "Lee")


def _random_datetime(rng: random.Random, start: datetime, days_from_now: int) -> datetime:
    day = start + timedelta(days=days_from_now)
    hour = rng.randint(5, 22)
    minute = rng.choice((0, 15, 30, 45))
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


def generate_sample_data(
    airline: Airline,
    *,
    flights: int = 10,
    passengers: int = 200,
    bookings: int = 150,
    seed: int = 42,
    start: Optional[datetime] = None,
) -> Dict[str, int]:
    """Populate ``airline`` with deterministic pseudo-random data.

    Passengers are spread over the generated flights; ``bookings`` of them
    are then seated on a random available seat.
    """

    rng = random.Random(seed)
    start = start or datetime.now()
    flight_numbers = []
    for index in range(flights):
        origin, destination = rng.sample(list(AIRPORTS), 2)
        flight = Flight(
            f"AR{1000 + index}",
            origin,
            destination,
            _random_datetime(rng, start, rng.randint(1, 10)),
            rng.choice(BASE_FARES),
            rng=rng,
        )
        if airline.add_flight(flight):
            flight_numbers.append(flight.flight_number)
    if not flight_numbers:
        return {"flights": 0, "passengers": 0, "bookings": 0}

    unseated = []
    for index in range(passengers):
        passenger = Passenger(
            first_name=rng.choice(FIRST_NAMES),
            last_name=rng.choice(LAST_NAMES),
            phone=f"+1-555-{index:04d}",
            email=f"test{index}@example.com",
        )
        flight_number = rng.choice(flight_numbers)
        if airline.add_passenger(passenger, flight_number):
            unseated.append((flight_number, passenger.passenger_id))

    successful = 0
    rng.shuffle(unseated)
    for flight_number, passenger_id in unseated[:bookings]:
        available = airline.get_available_seats(flight_number)
        if available and airline.book_seat(flight_number, passenger_id, rng.choice(available)):
            successful += 1
    return {"flights": len(flight_numbers), "passengers": len(unseated), "bookings": successful}
