"""
Line-oriented markup converter used for post bodies.

Each input line maps to exactly one output element: headings (``#``, ``##``,
``###``), ordered (``1. ``) and unordered (``- ``) list items, blank lines, or
paragraphs. There is no inline syntax.
"""

import re

from .escape import escape

ORDERED_ITEM_RE = re.compile(r'^\d+\.\s')


class MarkupRenderer:
    """Convert one body to HTML, tracking which list (if any) is open."""

    def __init__(self):
        self.parts = []
        self.in_ordered = False
        self.in_unordered = False

    def close_ordered(self):
        if self.in_ordered:
            self.parts.append('</ol>\n')
            self.in_ordered = False

    def close_unordered(self):
        if self.in_unordered:
            self.parts.append('</ul>\n')
            self.in_unordered = False

    def close_lists(self):
        self.close_ordered()
        self.close_unordered()

    def feed(self, line):
        """Render a single line."""
        if line.startswith('### '):
            self.close_lists()
            self.parts.append(f'<h3>{escape(line[4:])}</h3>\n')
        elif line.startswith('## '):
            self.close_lists()
            self.parts.append(f'<h2>{escape(line[3:])}</h2>\n')
        elif line.startswith('# '):
            self.close_lists()
            self.parts.append(f'<h1>{escape(line[2:])}</h1>\n')
        elif ORDERED_ITEM_RE.match(line):
            self.close_unordered()
            if not self.in_ordered:
                self.parts.append('<ol>\n')
                self.in_ordered = True
            self.parts.append(f'  <li>{escape(ORDERED_ITEM_RE.sub("", line, count=1))}</li>\n')
        elif line.startswith('- '):
            self.close_ordered()
            if not self.in_unordered:
                self.parts.append('<ul>\n')
                self.in_unordered = True
            self.parts.append(f'  <li>{escape(line[2:])}</li>\n')
        elif line.strip() == '':
            self.close_lists()
            self.parts.append('\n')
        else:
            self.close_lists()
            self.parts.append(f'<p>{escape(line)}</p>\n')

    def finish(self):
        """Close any open list and return the accumulated HTML."""
        self.close_lists()
        return ''.join(self.parts)


def render_markup(body) -> str:
    """Convert a post body to HTML."""
    if not body:
        return ''
    renderer = MarkupRenderer()
    for line in body.split('\n'):
        renderer.feed(line.rstrip('\r'))
    return renderer.finish()
