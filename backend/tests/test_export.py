# Overview: Pytest coverage for the production CSV export.

import csv
import io

from mineor.services import export_service, production_service


def _parse(content):
    return list(csv.reader(io.StringIO(content)))


def test_header_and_rows_in_date_order(db_session, site_a):
    production_service.create_production(site_a.id, date="2024-01-02", quantity_grams=120, team="Équipe B", shift="night")
    production_service.create_production(site_a.id, date="2024-01-01", quantity_grams=250.5, team="Équipe A",
                                         shift="morning", notes="RAS")

    rows = _parse(export_service.export_production_csv(site_id=site_a.id, start="2024-01-01", end="2024-01-31"))

    assert rows[0] == ["Date", "Quantity(g)", "Team", "Shift", "Notes"]
    assert rows[1] == ["2024-01-01", "250.5", "Équipe A", "morning", "RAS"]
    assert rows[2] == ["2024-01-02", "120", "Équipe B", "night", ""]


def test_notes_with_delimiter_stay_in_one_column(db_session, site_a):
    production_service.create_production(site_a.id, date="2024-01-01", quantity_grams=100, team="Équipe A",
                                         shift="morning", notes='pluie, pompe "HS"')

    content = export_service.export_production_csv(site_id=site_a.id, start="2024-01-01", end="2024-01-01")

    assert '"pluie, pompe ""HS"""' in content
    rows = _parse(content)
    assert len(rows[1]) == 5
    assert rows[1][4] == 'pluie, pompe "HS"'


def test_empty_range_has_only_header(db_session, site_a):
    content = export_service.export_production_csv(site_id=site_a.id, start="2024-01-01", end="2024-01-31")
    assert content == "Date,Quantity(g),Team,Shift,Notes\n"


def test_filename():
    assert export_service.export_filename("2024-01-01", "2024-01-31") == "production_2024-01-01_2024-01-31.csv"
