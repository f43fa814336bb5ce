"""
StarBlog - A multi-blog static site generator.

StarBlog reads posts with YAML front matter for several blogs, converts their
line-oriented markup to HTML, and substitutes the results into per-theme
placeholder templates. It writes one index page per blog, one page per post,
an aggregated home page and a 404 page.
"""

__version__ = "1.0.0"

from .core import SiteBuilder
from .posts import Blog, Post, PostLoader

__all__ = ['SiteBuilder', 'Blog', 'Post', 'PostLoader']
