"""Render weather payloads into a Document."""

from markupsafe import Markup

from app.models.weather import WeatherView
from app.render.document import Document, templates


def render(document: Document, fragment: Markup):
    """Replace the children of the #app container with a fragment."""
    app = document.query("#app")
    app.clear()
    app.append(fragment)


def build_fragment(view: WeatherView) -> Markup:
    return Markup(templates.get_template("weather.html").render(view=view))


def render_weather(document: Document, data: dict) -> WeatherView:
    """Render one weather payload and update the document title.

    Args:
        document: Page to mutate.
        data: Weather API payload.

    Returns:
        The display values that were rendered.
    """
    view = WeatherView.from_api_response(data)
    render(document, build_fragment(view))
    document.query("#app").style = view.gradient
    document.title = view.title
    return view
