"""
Placeholder templates.

Templates are plain HTML files containing ``{{NAME}}`` tokens. There are no
conditionals or loops; fragments are built in Python and substituted in.
"""

import os
import re
import logging
from typing import Any, Mapping

from .errors import MissingTemplate

logger = logging.getLogger('StarBlog.template')


def render_template(template: str, values: Mapping[str, Any]) -> str:
    """
    Replace every ``{{NAME}}`` whose NAME is a key of ``values``.

    Substitution happens in a single pass, so text inserted for one
    placeholder is never scanned for further placeholders. Tokens without a
    matching key are left as they are.

    Args:
        template: Template text
        values: Placeholder name to value; ``None`` renders as an empty string

    Returns:
        The rendered text
    """
    if not values:
        return template

    tokens = {'{{' + str(key) + '}}': value for key, value in values.items()}
    # Longest first so no token can shadow a longer one in the alternation.
    pattern = re.compile('|'.join(re.escape(token) for token in sorted(tokens, key=len, reverse=True)))

    def substitute(match):
        value = tokens[match.group(0)]
        return '' if value is None else str(value)

    return pattern.sub(substitute, template)


class TemplateLoader:
    """Read templates from a templates directory."""

    def __init__(self, templates_dir):
        self.templates_dir = templates_dir

    def path_for(self, relative_path):
        return os.path.abspath(os.path.join(self.templates_dir, relative_path))

    def read(self, relative_path):
        """Return the text of a template, raising MissingTemplate if absent."""
        full_path = self.path_for(relative_path)
        if not os.path.isfile(full_path):
            raise MissingTemplate(full_path)
        with open(full_path, 'r', encoding='utf-8') as f:
            text = f.read()
        logger.debug(f"Loaded template: {full_path}")
        return text
