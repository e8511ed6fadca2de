"""Seat inventory and booking engine for airline flight operations."""
from .airline import Airline
from .baggage import BaggageLedger, BaggageStatus, BaggageTag
from .dataset import generate_sample_data
from .flight_status import FlightStatus, OperationalStatus, StatusUpdate
from .models import Flight, Passenger, Seat, SeatedPassengerCopyError, SeatStatus
from .seating import (
    DEFAULT_AIRCRAFT,
    AircraftTemplate,
    SeatClass,
    build_seat_inventory,
    generate_seat_number,
    parse_lettered_seat,
    row_label_to_number,
    seat_number_to_position,
)
from .storage import JsonFileStore, PersistenceGateway, SqlStore
from .tickets import FARE_TABLE, Ticket, TicketClass, TicketStatus

__all__ = [
    "Airline",
    "AircraftTemplate",
    "BaggageLedger",
    "BaggageStatus",
    "BaggageTag",
    "DEFAULT_AIRCRAFT",
    "FARE_TABLE",
    "Flight",
    "FlightStatus",
    "JsonFileStore",
    "OperationalStatus",
    "Passenger",
    "PersistenceGateway",
    "Seat",
    "SeatClass",
    "SeatStatus",
    "SeatedPassengerCopyError",
    "SqlStore",
    "StatusUpdate",
    "Ticket",
    "TicketClass",
    "TicketStatus",
    "build_seat_inventory",
    "generate_sample_data",
    "generate_seat_number",
    "parse_lettered_seat",
    "row_label_to_number",
    "seat_number_to_position",
]
