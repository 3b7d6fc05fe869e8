"""Email layout rendering with Jinja2."""
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

BRIEF_TITLE = "Your Daily Brief"


def get_template_environment() -> Environment:
    """Create the Jinja2 environment for the packaged templates."""
    template_dir = Path(__file__).parent.parent / 'templates'
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(['html', 'xml'])
    )


def wrap_document(document: str, date: str, title: str = BRIEF_TITLE) -> str:
    """Place the generated document inside the email layout."""
    template = get_template_environment().get_template('brief_email.html')
    return template.render(document=document, date=date, title=title)
