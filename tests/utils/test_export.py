"""Tests for CSV export."""

import csv
from datetime import date

from imeliq.utils.export import (
    UTF8_BOM,
    content_disposition,
    csv_filename,
    records_to_csv,
)


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(text[len(UTF8_BOM):].split("\n"), delimiter=";"))


def test_csv_has_bom_header_and_one_line_per_record():
    records = [
        {"id": "1", "email": "a@b.ee", "quantity": 3},
        {"id": "2", "email": "c@d.ee", "quantity": 5},
        {"id": "3", "email": "e@f.ee", "quantity": 1},
    ]
    text = records_to_csv(records)
    
    assert text.startswith(UTF8_BOM)
    lines = text[len(UTF8_BOM):].split("\n")
    assert len(lines) == len(records) + 1
    assert lines[0] == "id;email;quantity"
    assert lines[1] == "1;a@b.ee;3"


def test_values_with_delimiter_are_quoted():
    records = [{"name": "Mari", "comments": "tasty; would buy again"}]
    text = records_to_csv(records)
    
    assert '"tasty; would buy again"' in text
    header, row = _rows(text)
    assert len(row) == len(header) == 2
    assert row[1] == "tasty; would buy again"


def test_quotes_inside_values_survive():
    records = [{"comments": 'she said "wow"; twice'}]
    header, row = _rows(records_to_csv(records))
    assert row == ['she said "wow"; twice']


def test_none_and_bool_rendering():
    records = [{"phone": None, "marketing_consent": True}, {"phone": "555", "marketing_consent": False}]
    lines = records_to_csv(records)[len(UTF8_BOM):].split("\n")
    assert lines[1] == ";true"
    assert lines[2] == "555;false"


def test_header_comes_from_first_record():
    records = [{"a": 1, "b": 2}, {"b": 3, "c": 4}]
    lines = records_to_csv(records)[len(UTF8_BOM):].split("\n")
    assert lines[0] == "a;b"
    assert lines[2] == ";3"


def test_empty_export():
    assert records_to_csv([]) == ""


def test_filename_and_disposition():
    name = csv_filename("orders", today=date(2026, 10, 19))
    assert name == "imeliq_orders_2026-10-19.csv"
    assert content_disposition(name) == "attachment; filename=imeliq_orders_2026-10-19.csv"
