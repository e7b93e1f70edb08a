from datetime import datetime

import pytest

from app.models.weather import format_long_date
from app.render.document import ContainerNotFoundError, Document
from app.render.view import render, render_weather

PARIS = {
    "location": {
        "name": "Paris",
        "country": "France",
        "localtime": "2024-01-01 13:00",
    },
    "current": {
        "temp_f": 50,
        "condition": {"text": "Clear", "code": 1000, "icon": "day.png"},
        "wind_mph": 5,
        "humidity": 60,
        "pressure_mb": 1012,
    },
}


def test_render_weather_sets_title_and_content():
    document = Document()
    view = render_weather(document, PARIS)
    html = document.to_html()

    assert document.title == "Weather forecast in Paris, France"
    assert view.temperature == "50°F"
    assert '<span class="temperature">50°F</span>' in html
    assert '<h1 class="location">Paris</h1>' in html
    assert '<time class="date" datetime="2024-01-01">January 1</time>' in html
    assert '<time class="time" datetime="13:00">1:00 PM</time>' in html
    assert '<img src="/img/icons/wind.svg" alt="wind" />' in html
    assert "<span>60%</span>" in html
    assert "<span>1012 mb</span>" in html
    assert 'style="--from: var(--orange); --to: var(--yellow)"' in html


def test_rendering_twice_equals_rendering_once():
    once = Document()
    render_weather(once, PARIS)
    twice = Document()
    render_weather(twice, PARIS)
    render_weather(twice, PARIS)
    assert twice.to_html() == once.to_html()
    assert len(twice.query("#app").children) == 1


def test_render_replaces_previous_children():
    document = Document()
    document.query("#app").append("<p>loading</p>")
    render(document, "<p>done</p>")
    assert document.query("#app").inner_html == "<p>done</p>"


def test_morning_time_and_single_digit_hour():
    data = {**PARIS, "location": {**PARIS["location"], "localtime": "2024-07-04 9:05"}}
    view = render_weather(Document(), data)
    assert view.date == "July 4"
    assert view.time == "9:05 AM"
    assert view.time_attr == "9:05"


def test_midnight_is_twelve_am():
    data = {**PARIS, "location": {**PARIS["location"], "localtime": "2024-12-25 0:30"}}
    assert render_weather(Document(), data).time == "12:30 AM"


def test_text_from_payload_is_escaped():
    current = {**PARIS["current"], "condition": {"text": "<b>Sun</b>", "code": 1000, "icon": "day.png"}}
    document = Document()
    render_weather(document, {**PARIS, "current": current})
    assert "&lt;b&gt;Sun&lt;/b&gt;" in document.to_html()


def test_missing_container_raises():
    document = Document(container_ids=("sidebar",))
    with pytest.raises(ContainerNotFoundError):
        render(document, "<p>x</p>")


def test_month_names_are_english():
    names = [
        format_long_date(datetime(2024, month, 1)).split()[0]
        for month in range(1, 13)
    ]
    assert names[0] == "January"
    assert names[8] == "September"
    assert names[11] == "December"


def test_unparsable_localtime_falls_back_to_raw_text():
    data = {**PARIS, "location": {**PARIS["location"], "localtime": "soon later"}}
    document = Document()
    view = render_weather(document, data)
    assert view.date == "soon"
    assert view.time == "later"
    assert document.title == "Weather forecast in Paris, France"
