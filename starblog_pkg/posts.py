"""
Blogs and posts.

Blogs come from ``content/blogs.json``; each blog's posts live in
``content/blogs/<slug>/posts/*.md``.
"""

import os
import json
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .errors import InvalidConfiguration, InvalidContent, MissingConfiguration

logger = logging.getLogger('StarBlog.posts')

REQUIRED_FIELDS = ('title', 'date', 'author')


class Post(NamedTuple):
    slug: str
    title: str
    date: str
    author: str
    excerpt: str
    tags: Tuple[str, ...]
    content: str


class Planet(NamedTuple):
    emoji: str
    name_ja: str
    name: str


class Blog(NamedTuple):
    slug: str
    title: str
    desc: str
    author: str
    theme: Optional[str]
    planet: Planet

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Blog':
        """Build a Blog from one entry of blogs.json."""
        planet = data.get('planet') or {}
        return cls(
            slug=str(data['slug']),
            title=data.get('title', ''),
            desc=data.get('desc', ''),
            author=data.get('author', ''),
            theme=data.get('theme') or None,
            planet=Planet(
                emoji=planet.get('emoji', ''),
                name_ja=planet.get('nameJa', ''),
                name=planet.get('name', ''),
            ),
        )


def load_blogs(path: str) -> List[Blog]:
    """
    Load the blog configuration.

    Args:
        path: Path to blogs.json

    Returns:
        Blogs in configuration order

    Raises:
        MissingConfiguration: If the file does not exist
        InvalidConfiguration: If the file is not a JSON list of blog objects
    """
    if not os.path.exists(path):
        raise MissingConfiguration(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfiguration(f"Invalid JSON in blog configuration {path}: {e}") from e

    if not isinstance(data, list):
        raise InvalidConfiguration(f"Blog configuration {path} must be a list of blogs")

    blogs = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict) or not entry.get('slug'):
            raise InvalidConfiguration(f"Blog #{index + 1} in {path} has no slug")
        blogs.append(Blog.from_dict(entry))
    return blogs


def sort_by_date(items, key=lambda item: item.date):
    """Sort newest first by ISO date string. The sort is stable, so ties keep their order."""
    return sorted(items, key=key, reverse=True)


class PostLoader:
    """Read, validate and sort the posts of one blog."""

    def __init__(self, content_dir, parser):
        self.content_dir = content_dir
        self.parser = parser

    def posts_dir(self, blog_slug):
        return os.path.join(self.content_dir, 'blogs', blog_slug, 'posts')

    def load(self, blog_slug: str) -> List[Post]:
        """
        Load every published post of a blog, newest first.

        Raises:
            InvalidContent: If any file lacks title, date or author, or its
                front matter cannot be parsed. One bad file stops the build.
        """
        posts_dir = self.posts_dir(blog_slug)
        if not os.path.isdir(posts_dir):
            logger.debug(f"No posts directory for {blog_slug}: {posts_dir}")
            return []

        posts = []
        for filename in sorted(os.listdir(posts_dir)):
            if not filename.endswith('.md'):
                continue
            post = self.load_file(blog_slug, os.path.join(posts_dir, filename))
            if post is not None:
                posts.append(post)

        return sort_by_date(posts)

    def load_file(self, blog_slug, file_path):
        """Load one content file. Returns None for drafts."""
        filename = os.path.basename(file_path)
        with open(file_path, 'r', encoding='utf-8') as f:
            raw = f.read()

        try:
            metadata, body = self.parser.parse(raw)
        except ValueError as e:
            raise InvalidContent(blog_slug, filename, reason=e) from e

        missing = [field for field in REQUIRED_FIELDS if not metadata.get(field)]
        if missing:
            raise InvalidContent(blog_slug, filename, missing=missing)

        if metadata.get('draft'):
            logger.debug(f"Skipping draft: {blog_slug}/posts/{filename}")
            return None

        tags = metadata.get('tags')
        return Post(
            slug=filename[:-len('.md')],
            title=str(metadata['title']),
            date=str(metadata['date'])[:10],
            author=str(metadata['author']),
            excerpt=metadata.get('excerpt') or '',
            tags=tuple('' if tag is None else str(tag) for tag in tags) if isinstance(tags, (list, tuple)) else (),
            content=body,
        )
