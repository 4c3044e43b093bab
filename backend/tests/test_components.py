from private_notes.web.components import format_date, note_count_label, truncate_content


def test_format_date_short_and_long():
    assert format_date("2024-01-05T15:04:00+00:00") == "Jan 5, 2024"
    assert format_date("2024-01-05T15:04:00Z", long=True) == "January 5, 2024 at 03:04 PM"


def test_format_date_accepts_postgres_fractions():
    assert format_date("2024-11-30T08:00:00.123456+00:00") == "Nov 30, 2024"


def test_truncate_content():
    assert truncate_content("short") == "short"
    text = "x" * 121
    assert truncate_content(text) == "x" * 120 + "..."
    assert truncate_content("x" * 120) == "x" * 120
    assert truncate_content("abcdef", max_length=3) == "abc..."


def test_note_count_label():
    assert note_count_label(0) == "0 notes"
    assert note_count_label(1) == "1 note"
    assert note_count_label(2) == "2 notes"
