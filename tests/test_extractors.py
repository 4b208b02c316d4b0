from __future__ import annotations

import re

import pytest

from fleet_dashboard.extractors import (
    FlightDetails,
    extract_flight_info,
    extract_trip_status,
    format_service_type,
    format_vehicle_id,
    parse_flight_details,
    parse_passengers,
)


def test_flight_info_all_fields() -> None:
    notes = "Flight: BA 249, Airline: British Airways, Terminal: 5"
    assert extract_flight_info(notes) == "BA 249, British Airways, 5"


def test_flight_info_order_is_fixed() -> None:
    notes = "Terminal: 3, Airline: Delta, Flight: DL 100"
    assert extract_flight_info(notes) == "DL 100, Delta, 3"


def test_flight_info_case_insensitive_and_optional_colon() -> None:
    notes = "pickup at arrivals\nflight ek202\nterminal 3"
    assert extract_flight_info(notes) == "ek202, 3"


def test_flight_info_stops_at_line_break() -> None:
    notes = "Airline:  Kenya Airways  \nTerminal: 1A"
    assert extract_flight_info(notes) == "Kenya Airways, 1A"


@pytest.mark.parametrize("notes", ["", None, "no labels at all", "Flight:", "Flight: X"])
def test_flight_info_degrades_to_empty(notes) -> None:
    assert extract_flight_info(notes) == ""


def test_parse_flight_details() -> None:
    notes = "Flight: KQ 100\nAirline: Kenya Airways\n"
    assert parse_flight_details(notes) == FlightDetails("KQ 100", "Kenya Airways", None)
    assert parse_flight_details(None) == FlightDetails()


def test_parse_passengers_bullets() -> None:
    notes = "Passengers:\n- Jane Doe\n- John Roe\n"
    assert parse_passengers(notes) == ["Jane Doe", "John Roe"]


def test_parse_passengers_plain_lines() -> None:
    notes = "Passengers:\nJane Doe\nJohn Roe"
    assert parse_passengers(notes) == ["Jane Doe", "John Roe"]


def test_parse_passengers_missing() -> None:
    assert parse_passengers("Flight: BA 1") == []
    assert parse_passengers("") == []


def test_extract_trip_status() -> None:
    assert extract_trip_status("STATUS:In_Progress\nrest") == "in_progress"
    assert extract_trip_status("notes STATUS:completed") == "scheduled"
    assert extract_trip_status(None) == "scheduled"


def test_format_service_type() -> None:
    assert format_service_type("airport_pickup") == "Airport Pickup"
    assert format_service_type("hourly") == "Hourly"


def test_format_vehicle_id_examples() -> None:
    # 0x123 = 291, 0xfff = 4095 -> 95
    assert format_vehicle_id("123e4567-e89b-12d3-a456-426614174000") == "V291"
    assert format_vehicle_id("fff00000") == "V095"
    assert format_vehicle_id("000abc") == "V000"


@pytest.mark.parametrize("value", ["", "zz", "g12", "1g3", "ab", "ABCDEF", "é"])
def test_format_vehicle_id_always_three_digits(value) -> None:
    code = format_vehicle_id(value)
    assert re.fullmatch(r"V\d{3}", code)
    assert format_vehicle_id(value) == code


def test_format_vehicle_id_reads_leading_hex_digits() -> None:
    assert format_vehicle_id("1g3") == "V001"
