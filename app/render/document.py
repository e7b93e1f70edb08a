"""In-memory HTML document with id-addressable containers."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


class ContainerNotFoundError(Exception):
    """Raised when a selector matches no container of the document."""
    pass


class Element:
    """A container element whose children are HTML fragments."""

    def __init__(self, element_id: str):
        self.id = element_id
        self.style = ""
        self.children: list = []

    def clear(self):
        self.children = []

    def append(self, fragment: Markup):
        self.children.append(Markup(fragment))

    @property
    def inner_html(self) -> Markup:
        return Markup("").join(self.children)


class Document:
    """The weather page: a title plus the containers of the page shell."""

    def __init__(self, title: str = "Weather", container_ids=("app",)):
        self.title = title
        self.elements = {element_id: Element(element_id) for element_id in container_ids}

    def query(self, selector: str) -> Element:
        """Return the container matching an "#id" selector.

        Raises:
            ContainerNotFoundError: If no container has that id.
        """
        element = self.elements.get(selector.lstrip("#"))
        if element is None:
            raise ContainerNotFoundError(f"No element matches {selector}")
        return element

    def to_html(self) -> str:
        """Serialize the whole page."""
        return templates.get_template("index.html").render(
            title=self.title, app=self.query("#app")
        )
