from datetime import date

from models import FailureKind
from parsing.bulk_parser import NO_ROUNDS_ERROR, PLACEHOLDER_TIME, parse_bulk_text, parse_line

TODAY = date(2025, 6, 15)


def test_single_line_fees_sign_stripped():
    result = parse_bulk_text("2025-03-01, TestCourse, -50, -20, 100, 80", today=TODAY)

    assert result.success
    assert result.data.count == 1
    r = result.data.rounds[0]
    assert r.date == date(2025, 3, 1)
    assert r.course == "TestCourse"
    assert r.green_fee == 50
    assert r.caddy_fee == 20
    assert r.wagers == 100
    assert r.score == 80
    assert r.time == PLACEHOLDER_TIME
    assert r.raw_input == "2025-03-01, TestCourse, -50, -20, 100, 80"


def test_negative_wagers_keep_sign():
    r = parse_line("2025-03-01, Lushan, 400, 50, -200, 90", TODAY)
    assert r.wagers == -200


def test_headers_and_totals_skipped():
    text = "\n".join([
        "# March rounds",
        "** summary **",
        "2025-03-01, Lushan, 400, 50, -200, 90",
        "",
        "Total: 3 rounds",
        "2025-03-08, Baoli, 350, 50, 120, 86",
    ])
    result = parse_bulk_text(text, today=TODAY)

    assert result.success
    assert [r.course for r in result.data.rounds] == ["Lushan", "Baoli"]
    assert result.data.count == 2


def test_only_headers_is_failure():
    result = parse_bulk_text("# header\nTotal: 0\n", today=TODAY)
    assert not result.success
    assert result.error == NO_ROUNDS_ERROR
    assert result.kind == FailureKind.VALIDATION


def test_empty_input_is_failure():
    assert not parse_bulk_text("", today=TODAY).success
    assert not parse_bulk_text("   \n\n", today=TODAY).success


def test_short_line_skipped():
    text = "2025-03-01, Lushan, 400, 50\n2025-03-02, Baoli, 350, 50, 0"
    result = parse_bulk_text(text, today=TODAY)
    assert result.data.count == 1
    assert result.data.rounds[0].course == "Baoli"


def test_missing_score_defaults_to_zero():
    r = parse_line("2025-03-02, Baoli, 350, 50, 0", TODAY)
    assert r.score == 0


def test_non_numeric_fields_default_to_zero():
    r = parse_line("2025-03-02, Baoli, free, n/a, lots, eighty", TODAY)
    assert r.green_fee == 0
    assert r.caddy_fee == 0
    assert r.wagers == 0
    assert r.score == 0


def test_unparseable_date_falls_back_to_today():
    r = parse_line("sometime, Baoli, 350, 50, 0, 88", TODAY)
    assert r.date == TODAY


def test_permissive_date_formats():
    assert parse_line("March 8 2025, Baoli, 350, 50, 0, 88", TODAY).date == date(2025, 3, 8)
    assert parse_line("2025/03/08, Baoli, 350, 50, 0, 88", TODAY).date == date(2025, 3, 8)


def test_non_finite_amounts_default_to_zero():
    r = parse_line("2025-03-01, Lushan, nan, inf, -inf, 80", TODAY)
    assert r.green_fee == 0
    assert r.caddy_fee == 0
    assert r.wagers == 0
    assert r.score == 80

    assert parse_line("2025-03-01, Lushan, 1e999, 50, 0, 80", TODAY).green_fee == 0


def test_partial_date_filled_from_today():
    assert parse_line("March 8, Baoli, 350, 50, 0, 88", date(2020, 6, 15)).date == date(2020, 3, 8)
