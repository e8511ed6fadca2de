"""Airline-wide flight registry and booking orchestration."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from .baggage import BaggageLedger
from .flight_status import FlightStatus
from .models import Flight, Passenger
from .seating import parse_lettered_seat
from .tickets import Ticket, TicketClass

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from .storage import PersistenceGateway

logger = logging.getLogger(__name__)


class Airline:
    """Owns every flight and the ledgers keyed to its flights and passengers.

    Tickets, status trackers and baggage ledgers hold flight numbers and
    passenger ids rather than object references; they are resolved through
    the airline and come back as ``None`` once the entity is gone.
    """

    def __init__(
        self,
        name: str,
        *,
        store: Optional["PersistenceGateway"] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.name = name
        self.store = store
        self._clock = clock
        self._flights: Dict[str, Flight] = {}
        self._statuses: Dict[str, FlightStatus] = {}
        self._tickets: Dict[str, Ticket] = {}
        self._baggage: Dict[Tuple[str, str], BaggageLedger] = {}
        self._next_ticket = 1

    # -- flights ------------------------------------------------------------

    def get_flight(self, flight_number: str) -> Optional[Flight]:
        return self._flights.get(flight_number)

    def get_flights(self) -> List[Flight]:
        return list(self._flights.values())

    def add_flight(self, flight: Optional[Flight]) -> bool:
        if flight is None or not flight.flight_number:
            logger.warning("Rejected flight without a flight number")
            return False
        if flight.flight_number in self._flights:
            logger.warning("Rejected duplicate flight %s", flight.flight_number)
            return False
        self._flights[flight.flight_number] = flight
        self._statuses[flight.flight_number] = FlightStatus(flight.departure_time, clock=self._clock)
        logger.debug("Added flight %s", flight.flight_number)
        return True

    def remove_flight(self, flight_number: str) -> bool:
        if self._flights.pop(flight_number, None) is None:
            return False
        self._drop_ledgers(flight_number)
        logger.debug("Removed flight %s", flight_number)
        return True

    def update_flight(self, flight_number: str, new_flight: Optional[Flight]) -> bool:
        """Replace ``flight_number`` with ``new_flight``.

        Ledgers follow the flight when its number changes.
        """

        if new_flight is None or not flight_number or not new_flight.flight_number:
            return False
        if flight_number not in self._flights:
            return False
        new_number = new_flight.flight_number
        if new_number != flight_number and new_number in self._flights:
            logger.warning("Rejected update of %s: %s already exists", flight_number, new_number)
            return False
        del self._flights[flight_number]
        self._flights[new_number] = new_flight
        if new_number != flight_number:
            self._rekey_ledgers(flight_number, new_number)
        status = self._statuses.get(new_number)
        if status is not None:
            status.set_scheduled_departure(new_flight.departure_time)
        return True

    def set_flights(self, flights: List[Flight]) -> None:
        """Replace the whole fleet, dropping every ledger."""

        self._flights.clear()
        self._statuses.clear()
        self._tickets.clear()
        self._baggage.clear()
        for flight in flights:
            self.add_flight(flight)

    def _drop_ledgers(self, flight_number: str) -> None:
        self._statuses.pop(flight_number, None)
        for number in [n for n, t in self._tickets.items() if t.flight_number == flight_number]:
            del self._tickets[number]
        for key in [k for k in self._baggage if k[0] == flight_number]:
            del self._baggage[key]

    def _rekey_ledgers(self, old: str, new: str) -> None:
        status = self._statuses.pop(old, None)
        if status is not None:
            self._statuses[new] = status
        for ticket in self._tickets.values():
            if ticket.flight_number == old:
                ticket.flight_number = new
        for key in [k for k in self._baggage if k[0] == old]:
            self._baggage[(new, key[1])] = self._baggage.pop(key)

    def search_flights(self, query: str) -> List[Flight]:
        needle = query.lower()
        return [
            flight
            for flight in self._flights.values()
            if needle in flight.flight_number.lower()
            or needle in flight.origin.lower()
            or needle in flight.destination.lower()
        ]

    # -- passengers ---------------------------------------------------------

    def add_passenger(self, passenger: Optional[Passenger], flight_number: str) -> bool:
        flight = self.get_flight(flight_number)
        if flight is None or passenger is None:
            return False
        # One passenger record belongs to one roster; use detached_copy() to rebook.
        if any(f.get_passenger(passenger.passenger_id) is not None for f in self._flights.values()):
            logger.warning("Passenger %s is already on a flight roster", passenger.passenger_id)
            return False
        return flight.add_passenger(passenger)

    def remove_passenger(self, passenger_id: str, flight_number: str) -> bool:
        flight = self.get_flight(flight_number)
        if flight is None or not flight.discard_passenger(passenger_id):
            return False
        self._baggage.pop((flight_number, passenger_id), None)
        return True

    def get_passenger(self, passenger_id: str, flight_number: str) -> Optional[Passenger]:
        flight = self.get_flight(flight_number)
        return flight.get_passenger(passenger_id) if flight else None

    def get_all_passengers(self) -> List[Passenger]:
        return [p for flight in self._flights.values() for p in flight.passengers]

    def search_passengers(self, query: str) -> List[Passenger]:
        needle = query.lower()
        return [
            passenger
            for passenger in self.get_all_passengers()
            if needle in passenger.first_name.lower()
            or needle in passenger.last_name.lower()
            or needle in passenger.phone.lower()
        ]

    # -- bookings -----------------------------------------------------------

    def book_seat(self, flight_number: str, passenger_id: str, seat_number: str) -> bool:
        flight = self.get_flight(flight_number)
        passenger = flight.get_passenger(passenger_id) if flight else None
        if passenger is None:
            return False
        booked = flight.assign_seat(passenger, seat_number)
        if not booked:
            logger.warning("Could not book seat %s on %s for %s", seat_number, flight_number, passenger_id)
        return booked

    def cancel_booking(self, flight_number: str, passenger_id: str) -> bool:
        """Free the passenger's seat; the passenger stays on the flight."""

        flight = self.get_flight(flight_number)
        passenger = flight.get_passenger(passenger_id) if flight else None
        if passenger is None or not passenger.has_seat:
            return False
        return flight.unassign_seat(passenger.seat_number)

    def change_booking(self, flight_number: str, passenger_id: str, new_seat_number: str) -> bool:
        """Move a passenger to ``new_seat_number``, restoring the old seat on failure."""

        flight = self.get_flight(flight_number)
        passenger = flight.get_passenger(passenger_id) if flight else None
        if passenger is None:
            return False
        old_seat = passenger.seat_number
        if old_seat == new_seat_number:
            return bool(old_seat)
        if not flight.is_seat_available(new_seat_number):
            logger.warning("Seat change on %s to %s refused", flight_number, new_seat_number)
            return False
        if old_seat:
            flight.unassign_seat(old_seat)
        if flight.assign_seat(passenger, new_seat_number):
            return True
        if old_seat and not flight.assign_seat(passenger, old_seat):
            logger.error("Failed to restore seat %s on %s for %s", old_seat, flight_number, passenger_id)
        return False

    def get_available_seats(self, flight_number: str) -> List[str]:
        flight = self.get_flight(flight_number)
        return flight.get_available_seats() if flight else []

    def is_seat_valid(self, flight_number: str, seat_label: str) -> bool:
        """Check a seat label against the flight.

        Numeric-row labels (``"19A"``) must name a seat of the flight;
        letter-row labels (``"AA5"``) must fall within the row and column
        extents.
        """

        flight = self.get_flight(flight_number)
        seat_label = (seat_label or "").strip().upper()
        if flight is None or not seat_label:
            return False
        if seat_label[0].isdigit():
            return flight.is_seat_valid(seat_label)
        position = parse_lettered_seat(seat_label)
        if position is None:
            return False
        row, col = position
        return 0 <= row < flight.rows and 0 <= col < flight.cols

    # -- tickets, status and baggage -----------------------------------------

    def issue_ticket(
        self,
        flight_number: str,
        passenger_id: str,
        ticket_class: TicketClass = TicketClass.ECONOMY,
    ) -> Optional[Ticket]:
        if self.get_passenger(passenger_id, flight_number) is None:
            return None
        ticket = Ticket(
            ticket_number=f"TKT{self._next_ticket:08d}",
            flight_number=flight_number,
            passenger_id=passenger_id,
            ticket_class=ticket_class,
            booked_at=self._clock(),
        )
        self._next_ticket += 1
        self._tickets[ticket.ticket_number] = ticket
        return ticket

    def get_ticket(self, ticket_number: str) -> Optional[Ticket]:
        return self._tickets.get(ticket_number)

    def tickets_for(self, flight_number: str) -> List[Ticket]:
        return [t for t in self._tickets.values() if t.flight_number == flight_number]

    def resolve_ticket(self, ticket: Ticket) -> Optional[Tuple[Flight, Passenger]]:
        flight = self.get_flight(ticket.flight_number)
        passenger = flight.get_passenger(ticket.passenger_id) if flight else None
        if passenger is None:
            return None
        return flight, passenger

    def flight_status(self, flight_number: str) -> Optional[FlightStatus]:
        return self._statuses.get(flight_number)

    def baggage_for(self, flight_number: str, passenger_id: str) -> Optional[BaggageLedger]:
        if self.get_passenger(passenger_id, flight_number) is None:
            return None
        key = (flight_number, passenger_id)
        if key not in self._baggage:
            self._baggage[key] = BaggageLedger(clock=self._clock)
        return self._baggage[key]

    # -- persistence --------------------------------------------------------

    def save(self) -> bool:
        if self.store is None:
            return False
        return self.store.save_all(self.get_flights())

    def load(self) -> bool:
        if self.store is None:
            return False
        self.set_flights(self.store.load_all())
        return True

    def export_csv(self, path: Path) -> bool:
        if self.store is None:
            return False
        return self.store.export_csv(self.get_flights(), path)
