from datetime import date

import pytest

from gmoney.dates import DateRecoverer, clean_html


@pytest.fixture
def recoverer():
    return DateRecoverer(today=lambda: date(2026, 3, 1))


def test_month_day_year_inside_html(recoverer):
    body = "<html><body><p>Receipt</p><table><tr><td>Dec 14, 2025</td></tr></table></body></html>"
    assert recoverer.recover(body, "Your receipt").date() == date(2025, 12, 14)


def test_month_day_year_split_across_tags(recoverer):
    body = "<td>Dec</td><td>14, 2025</td>"
    assert recoverer.recover(body).date() == date(2025, 12, 14)


def test_entities_are_decoded(recoverer):
    assert recoverer.recover("Paid on Dec&nbsp;14,&nbsp;2025").date() == date(2025, 12, 14)


def test_iso_date(recoverer):
    assert recoverer.recover("Charged on 2025-01-05").date() == date(2025, 1, 5)


def test_us_date(recoverer):
    assert recoverer.recover("Transaction date: 03/15/2024").date() == date(2024, 3, 15)


def test_day_month_year(recoverer):
    assert recoverer.recover("Booked 14 December 2025").date() == date(2025, 12, 14)


def test_full_month_name(recoverer):
    assert recoverer.recover("September 3, 2024 payment").date() == date(2024, 9, 3)


def test_last_match_wins(recoverer):
    body = "Statement issued 2025-01-01. Charged 2025-01-20."
    assert recoverer.recover(body).date() == date(2025, 1, 20)


def test_earlier_family_wins(recoverer):
    body = "Dec 14, 2025 ... posted 2025-01-02"
    assert recoverer.recover(body).date() == date(2025, 1, 2)


def test_invalid_date_falls_through_to_next_family(recoverer):
    body = "Ref 2025-13-45 paid Dec 14, 2025"
    assert recoverer.recover(body).date() == date(2025, 12, 14)


def test_subject_is_searched(recoverer):
    assert recoverer.recover("", "Receipt for Jan 5, 2025").date() == date(2025, 1, 5)


def test_month_day_uses_current_year(recoverer):
    assert recoverer.recover("Your trip on Mar 3").date() == date(2026, 3, 3)


def test_result_is_utc_midnight(recoverer):
    found = recoverer.recover("2025-01-05")
    assert (found.hour, found.minute) == (0, 0)
    assert found.utcoffset().total_seconds() == 0


def test_no_date(recoverer):
    assert recoverer.recover("Total $18.32 USD", "Your Friday trip") is None


def test_clean_html():
    assert clean_html("<p>Tom &amp; Jerry&#39;s</p>\n\n<b>tab</b>") == "Tom & Jerry's tab"
    assert clean_html("") == ""
    assert clean_html("plain   text") == "plain text"
