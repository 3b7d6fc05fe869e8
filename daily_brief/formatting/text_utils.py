"""Text processing utilities."""
import re
from bs4 import BeautifulSoup


def clean_text(value) -> str:
    """Reduce a feed field (possibly HTML) to single-line plain text."""
    if not value:
        return ""
    if '<' in value:
        value = BeautifulSoup(value, 'html.parser').get_text(' ')
    return re.sub(r'\s+', ' ', value).strip()


def strip_html(html: str) -> str:
    """
    Convert HTML to plain text by removing HTML tags while preserving structure.

    Args:
        html: HTML content to convert

    Returns:
        Plain text version of the HTML content
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, 'html.parser')

    # Remove script and style elements
    for element in soup(["script", "style", "title"]):
        element.decompose()

    # Links keep their target so the plain-text part stays useful
    for link in soup.find_all('a'):
        href = link.get('href')
        text = link.get_text(' ', strip=True)
        if href and href != text:
            link.replace_with(f"{text} ({href})")

    for item in soup.find_all('li'):
        item.insert_before('\n* ')
    for heading in soup.find_all(['h1', 'h2', 'h3']):
        heading.insert_before('\n\n')
        heading.insert_after('\n')
    for block in soup.find_all(['p', 'br', 'div', 'ul', 'ol']):
        block.insert_after('\n')

    text = soup.get_text()

    # Fix multiple newlines and spaces
    text = re.sub(r'[ \t]+', ' ', text)
    text = re.sub(r' *\n *', '\n', text)
    text = re.sub(r'\n{3,}', '\n\n', text)

    return text.strip()
