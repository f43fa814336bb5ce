"""
Fatal build errors for StarBlog.

Every error here stops the whole build. The CLI reports the message and
exits with a nonzero status.
"""


class BuildError(Exception):
    """Base class for errors that abort a site build."""


class MissingDependency(BuildError, ImportError):
    """The front matter parser's library cannot be imported."""


class MissingConfiguration(BuildError, FileNotFoundError):
    """The blog configuration document does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Blog configuration not found: {path}")


class InvalidConfiguration(BuildError, ValueError):
    """The blog configuration document exists but cannot be used."""


class InvalidContent(BuildError, ValueError):
    """A content item is missing required front matter or cannot be parsed."""

    def __init__(self, blog, item, missing=None, reason=None):
        self.blog = blog
        self.item = item
        self.missing = list(missing or [])
        if self.missing:
            message = f"Missing required front matter in {blog}/posts/{item} (missing: {', '.join(self.missing)})"
        else:
            message = f"Invalid front matter in {blog}/posts/{item}: {reason}"
        super().__init__(message)


class MissingTemplate(BuildError, FileNotFoundError):
    """A template file referenced by the build does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Template not found: {path}")
