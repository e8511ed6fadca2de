"""Persistence backends for flights and their passengers."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Protocol

import pandas as pd
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from .database import DEFAULT_DB_URL, FlightRecord, PassengerRecord, init_db, session_scope
from .models import Flight, Passenger
from .seating import DEFAULT_AIRCRAFT, AircraftTemplate

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Flight Number",
    "Origin",
    "Destination",
    "Departure Time",
    "Passenger Name",
    "Seat Number",
]


class PersistenceGateway(Protocol):
    def save_all(self, flights: Iterable[Flight]) -> bool: ...

    def load_all(self) -> List[Flight]: ...

    def export_csv(self, flights: Iterable[Flight], path: Path) -> bool: ...


def passenger_to_dict(passenger: Passenger) -> Dict[str, str]:
    return {
        "passengerId": passenger.passenger_id,
        "firstName": passenger.first_name,
        "lastName": passenger.last_name,
        "phoneNumber": passenger.phone,
        "email": passenger.email,
        "seatNumber": passenger.seat_number,
    }


def passenger_from_dict(data: Dict[str, str]) -> Passenger:
    fields = dict(
        first_name=data.get("firstName", ""),
        last_name=data.get("lastName", ""),
        phone=data.get("phoneNumber", ""),
        email=data.get("email", ""),
        seat_number=data.get("seatNumber", ""),
    )
    if data.get("passengerId"):
        fields["passenger_id"] = data["passengerId"]
    return Passenger(**fields)


def flight_to_dict(flight: Flight, *, include_passengers: bool = True) -> dict:
    data = {
        "flightNumber": flight.flight_number,
        "origin": flight.origin,
        "destination": flight.destination,
        "departureTime": flight.departure_time.isoformat(),
        "basePrice": flight.base_price,
        "aircraft": flight.template.code,
        "rows": flight.rows,
        "cols": flight.cols,
    }
    if include_passengers:
        data["passengers"] = [passenger_to_dict(p) for p in flight.passengers]
    return data


def flight_from_dict(data: dict) -> Flight:
    rows = int(data.get("rows", DEFAULT_AIRCRAFT.rows))
    template = DEFAULT_AIRCRAFT
    if rows != DEFAULT_AIRCRAFT.rows:
        template = AircraftTemplate(data.get("aircraft", DEFAULT_AIRCRAFT.code), rows=rows)
    flight = Flight(
        data["flightNumber"],
        data.get("origin", ""),
        data.get("destination", ""),
        datetime.fromisoformat(data["departureTime"]),
        float(data.get("basePrice", 500.0)),
        template=template,
    )
    for entry in data.get("passengers", []):
        passenger = passenger_from_dict(entry)
        if not flight.add_passenger(passenger):
            logger.warning(
                "Dropped passenger %s on %s: seat %r unavailable",
                passenger.passenger_id,
                flight.flight_number,
                passenger.seat_number,
            )
    return flight


def export_flights_csv(flights: Iterable[Flight], path: Path) -> bool:
    """Write one CSV row per passenger of every flight."""

    rows = [
        {
            "Flight Number": flight.flight_number,
            "Origin": flight.origin,
            "Destination": flight.destination,
            "Departure Time": flight.departure_time.strftime("%Y-%m-%d %H:%M"),
            "Passenger Name": passenger.full_name,
            "Seat Number": passenger.seat_number,
        }
        for flight in flights
        for passenger in flight.passengers
    ]
    try:
        pd.DataFrame(rows, columns=CSV_COLUMNS).to_csv(path, index=False)
    except OSError as exc:
        logger.warning("CSV export to %s failed: %s", path, exc)
        return False
    logger.info("Exported %d passenger rows to %s", len(rows), path)
    return True


class JsonFileStore:
    """Stores every flight in a single JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def save_all(self, flights: Iterable[Flight]) -> bool:
        payload = {"flights": [flight_to_dict(flight) for flight in flights]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
        except OSError as exc:
            logger.warning("Saving flights to %s failed: %s", self.path, exc)
            return False
        logger.info("Saved %d flights to %s", len(payload["flights"]), self.path)
        return True

    def load_all(self) -> List[Flight]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Loading flights from %s failed: %s", self.path, exc)
            return []
        if not isinstance(payload, dict):
            logger.warning("Loading flights from %s failed: expected a JSON object", self.path)
            return []
        flights: List[Flight] = []
        for entry in payload.get("flights", []):
            try:
                flights.append(flight_from_dict(entry))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed flight record: %s", exc)
        return flights

    def export_csv(self, flights: Iterable[Flight], path: Path) -> bool:
        return export_flights_csv(flights, path)


class SqlStore:
    """Stores flights and passengers as JSON blobs in two key/value tables."""

    def __init__(self, db_url: str = DEFAULT_DB_URL) -> None:
        self.db_url = db_url
        self.session_factory = init_db(db_url)

    def save_all(self, flights: Iterable[Flight]) -> bool:
        flights = list(flights)
        try:
            with session_scope(self.session_factory) as session:
                session.execute(delete(PassengerRecord))
                session.execute(delete(FlightRecord))
                for flight in flights:
                    session.add(
                        FlightRecord(
                            id=flight.flight_number,
                            data=json.dumps(flight_to_dict(flight, include_passengers=False)),
                        )
                    )
                    for position, passenger in enumerate(flight.passengers):
                        record = passenger_to_dict(passenger)
                        record["flightNumber"] = flight.flight_number
                        record["position"] = position
                        session.add(
                            PassengerRecord(
                                id=f"{flight.flight_number}:{passenger.passenger_id}",
                                data=json.dumps(record),
                            )
                        )
        except SQLAlchemyError as exc:
            logger.warning("Saving flights to %s failed: %s", self.db_url, exc)
            return False
        logger.info("Saved %d flights to %s", len(flights), self.db_url)
        return True

    def load_all(self) -> List[Flight]:
        try:
            with self.session_factory() as session:
                flight_rows = [json.loads(data) for data in session.scalars(select(FlightRecord.data))]
                passenger_rows = [
                    json.loads(data)
                    for data in session.scalars(select(PassengerRecord.data))
                ]
                passenger_rows.sort(key=lambda row: row.get("position", 0))
        except (SQLAlchemyError, ValueError) as exc:
            logger.warning("Loading flights from %s failed: %s", self.db_url, exc)
            return []
        by_flight: Dict[str, List[dict]] = {}
        for row in passenger_rows:
            by_flight.setdefault(row.get("flightNumber", ""), []).append(row)
        flights: List[Flight] = []
        for row in flight_rows:
            row["passengers"] = by_flight.get(row["flightNumber"], [])
            try:
                flights.append(flight_from_dict(row))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed flight record: %s", exc)
        return flights

    def export_csv(self, flights: Iterable[Flight], path: Path) -> bool:
        return export_flights_csv(flights, path)
