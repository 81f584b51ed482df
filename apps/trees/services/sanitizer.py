"""
HTML sanitization for person biographies.
"""
import bleach

# Allowed HTML tags for rich text biographies
ALLOWED_TAGS = [
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'p', 'br', 'hr',
    'strong', 'b', 'em', 'i', 'u',
    'ul', 'ol', 'li',
    'blockquote',
    'a', 'img',
    'table', 'thead', 'tbody', 'tr', 'th', 'td',
    'div', 'span',
    'sub', 'sup',
]

ALLOWED_ATTRIBUTES = {
    '*': ['class', 'title'],
    'a': ['href', 'title', 'target'],
    'img': ['src', 'alt', 'title', 'width', 'height'],
}

ALLOWED_PROTOCOLS = ['http', 'https', 'data']


class HtmlSanitizer:
    """Strips tags and attributes outside the allow-lists. Idempotent."""

    def __init__(self, tags=None, attributes=None, protocols=None):
        self.tags = tags or ALLOWED_TAGS
        self.attributes = attributes or ALLOWED_ATTRIBUTES
        self.protocols = protocols or ALLOWED_PROTOCOLS

    def sanitize(self, html):
        if not html or not html.strip():
            return ''

        return bleach.clean(
            html,
            tags=self.tags,
            attributes=self.attributes,
            protocols=self.protocols,
            strip=True
        )
