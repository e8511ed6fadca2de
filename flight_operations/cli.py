"""Command line interface for inspecting and seeding a flight store."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List

from tabulate import tabulate

from .airline import Airline
from .database import DATA_DIR
from .dataset import generate_sample_data
from .models import Flight, Passenger
from .storage import JsonFileStore, PersistenceGateway, SqlStore

_LOG_LEVEL = os.environ.get("FLIGHT_OPS_LOG_LEVEL", "WARNING").upper()
_DEFAULT_JSON_PATH = DATA_DIR / "flights.json"


def _flight_rows(flights: Iterable[Flight]) -> List[list]:
    return [
        [
            flight.flight_number,
            f"{flight.origin}-{flight.destination}",
            f"{flight.departure_time:%Y-%m-%d %H:%M}",
            len(flight.passengers),
            len(flight.get_available_seats()),
            f"{flight.calculate_revenue():,.2f}",
        ]
        for flight in flights
    ]


def _render_flights(flights: Iterable[Flight]) -> str:
    headers = ["Flight", "Route", "Departure", "Passengers", "Available", "Revenue"]
    return tabulate(_flight_rows(flights), headers=headers, tablefmt="github")


def _render_passengers(passengers: Iterable[Passenger]) -> str:
    rows = [[p.passenger_id, p.full_name, p.phone, p.seat_number or "-"] for p in passengers]
    return tabulate(rows, headers=["Id", "Name", "Phone", "Seat"], tablefmt="github")


def _build_store(args: argparse.Namespace) -> PersistenceGateway:
    if args.db_url:
        return SqlStore(args.db_url)
    return JsonFileStore(Path(args.store))


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect flights, seat maps and bookings.")
    parser.add_argument(
        "--store",
        default=str(_DEFAULT_JSON_PATH),
        help="Path of the JSON flight store (default: %(default)s).",
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="SQLAlchemy URL of a key/value store to use instead of the JSON file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("flights", help="List every flight.")

    seats = subparsers.add_parser("seats", help="Print the seat map of a flight.")
    seats.add_argument("flight_number")

    search = subparsers.add_parser("search", help="Search flights and passengers.")
    search.add_argument("query")

    export = subparsers.add_parser("export", help="Export passengers to CSV.")
    export.add_argument("path", type=Path)

    demo = subparsers.add_parser("demo", help="Replace the store with generated sample data.")
    demo.add_argument("--flights", type=int, default=10)
    demo.add_argument("--passengers", type=int, default=200)
    demo.add_argument("--bookings", type=int, default=150)
    demo.add_argument("--seed", type=int, default=42)

    return parser.parse_args(list(argv))


def main(argv: Iterable[str] | None = None) -> int:
    logging.basicConfig(level=_LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(sys.argv[1:] if argv is None else argv)
    airline = Airline("Flight Operations", store=_build_store(args))

    if args.command == "demo":
        summary = generate_sample_data(
            airline,
            flights=args.flights,
            passengers=args.passengers,
            bookings=args.bookings,
            seed=args.seed,
        )
        if not airline.save():
            print("Error: could not write the flight store", file=sys.stderr)
            return 1
        print(tabulate([list(summary.values())], headers=list(summary.keys()), tablefmt="github"))
        return 0

    airline.load()

    if args.command == "flights":
        print(_render_flights(airline.get_flights()))
    elif args.command == "seats":
        flight = airline.get_flight(args.flight_number)
        if flight is None:
            print(f"Error: unknown flight '{args.flight_number}'", file=sys.stderr)
            return 1
        print(f"Seat map for {flight.flight_number} ({flight.origin}-{flight.destination})")
        print(flight.generate_seat_map())
    elif args.command == "search":
        print(_render_flights(airline.search_flights(args.query)))
        print()
        print(_render_passengers(airline.search_passengers(args.query)))
    elif args.command == "export":
        if not airline.export_csv(args.path):
            print(f"Error: could not write {args.path}", file=sys.stderr)
            return 1
        print(f"Exported {len(airline.get_all_passengers())} passengers to {args.path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
