"""HTML escaping for user-sourced text."""

# Ampersand must come first so the other entities are not re-escaped.
_REPLACEMENTS = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
)


def escape(value) -> str:
    """Escape a value for interpolation into HTML text or attributes.

    ``None`` becomes an empty string. Anything else, including ``0`` and
    ``False``, is converted with ``str()`` before escaping.
    """
    if value is None:
        return ''
    text = str(value)
    for char, entity in _REPLACEMENTS:
        text = text.replace(char, entity)
    return text
