from flight_operations import cli


def test_demo_then_list_flights(tmp_path, capsys):
    store = str(tmp_path / "flights.json")

    assert cli.main(["--store", store, "demo", "--flights", "3", "--passengers", "12", "--bookings", "6"]) == 0
    capsys.readouterr()

    assert cli.main(["--store", store, "flights"]) == 0
    output = capsys.readouterr().out
    assert "AR1000" in output
    assert "AR1002" in output
    assert "Revenue" in output


def test_seat_map_for_unknown_flight_fails(tmp_path, capsys):
    store = str(tmp_path / "flights.json")
    cli.main(["--store", store, "demo", "--flights", "1", "--passengers", "2", "--bookings", "2"])
    capsys.readouterr()

    assert cli.main(["--store", store, "seats", "AR1000"]) == 0
    assert "Seat map for AR1000" in capsys.readouterr().out

    assert cli.main(["--store", store, "seats", "ZZ999"]) == 1
    assert "unknown flight" in capsys.readouterr().err


def test_search_and_export_with_sql_store(tmp_path, capsys):
    db_url = f"sqlite+pysqlite:///{tmp_path / 'flights.db'}"
    cli.main(["--db-url", db_url, "demo", "--flights", "2", "--passengers", "6", "--bookings", "3"])
    capsys.readouterr()

    assert cli.main(["--db-url", db_url, "search", "AR100"]) == 0
    assert "AR1001" in capsys.readouterr().out

    target = tmp_path / "passengers.csv"
    assert cli.main(["--db-url", db_url, "export", str(target)]) == 0
    assert target.exists()
    assert "Exported 6 passengers" in capsys.readouterr().out
