"""
Front matter parsing.

Content files start with a YAML block between ``---`` lines, followed by the
post body. The build only depends on the ``parse`` operation, so the parser is
created once by the caller and handed to the post loader.
"""

import re

try:
    import yaml
except ImportError:
    yaml = None

from .errors import MissingDependency

BYTE_ORDER_MARK = '\ufeff'

FRONT_MATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)


class YamlFrontMatterParser:
    """Split text into a metadata mapping and a body using PyYAML."""

    def __init__(self, yaml_module):
        self.yaml = yaml_module

    def parse(self, text):
        """
        Parse a content file.

        Args:
            text: Full file contents

        Returns:
            Tuple of (metadata dict, body string). Text without a front
            matter block yields an empty mapping and the text unchanged.

        Raises:
            ValueError: If the front matter is not valid YAML or not a mapping
        """
        if text.startswith(BYTE_ORDER_MARK):
            text = text[len(BYTE_ORDER_MARK):]

        match = FRONT_MATTER_RE.match(text)
        if not match:
            return {}, text

        try:
            metadata = self.yaml.safe_load(match.group(1))
        except self.yaml.YAMLError as e:
            raise ValueError(f"invalid YAML: {e}") from e

        if metadata is None:
            metadata = {}
        elif not isinstance(metadata, dict):
            raise ValueError(f"expected a mapping, got {type(metadata).__name__}")

        return metadata, text[match.end():]


def require_yaml():
    """Return the PyYAML module, or raise MissingDependency if it is not installed."""
    if yaml is None:
        raise MissingDependency(
            "PyYAML is required to read front matter and YAML settings. Install it with: pip install PyYAML"
        )
    return yaml


def load_frontmatter_parser():
    """Resolve the front matter parser once, before any content is read."""
    return YamlFrontMatterParser(require_yaml())
