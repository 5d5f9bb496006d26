import pytest

from .text import calculate_reading_time, format_date, strip_html


def test_strip_html_removes_tags_and_trims():
    assert strip_html("  <p>Hola <em>mundo</em></p>\n") == "Hola mundo"


def test_strip_html_keeps_entities():
    assert strip_html("<p>Tom &amp; Jerry</p>") == "Tom &amp; Jerry"


def test_strip_html_empty():
    assert strip_html("") == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-03-15T10:30:00", "15 de marzo de 2024"),
        ("2023-12-01T00:00:00Z", "1 de diciembre de 2023"),
        ("2024-01-09", "9 de enero de 2024"),
    ],
)
def test_format_date(raw, expected):
    assert format_date(raw) == expected


def test_format_date_returns_unparseable_input():
    assert format_date("not a date") == "not a date"
    assert format_date("") == ""


def test_reading_time_rounds_up():
    text = " ".join(["palabra"] * 450)
    assert calculate_reading_time(f"<p>{text}</p>") == 3


def test_reading_time_is_at_least_one_minute():
    assert calculate_reading_time("") == 1
    assert calculate_reading_time("<p>uno dos</p>") == 1


def test_reading_time_custom_speed():
    assert calculate_reading_time(" ".join(["w"] * 100), words_per_minute=50) == 2
