"""Test configuration and fixtures for StarBlog tests."""

import pytest
import tempfile
import shutil
import json
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from starblog_pkg.frontmatter import load_frontmatter_parser
from starblog_pkg.posts import Post
from starblog_pkg.settings import SitePaths

BLOGS = [
    {
        'slug': 'alpha',
        'title': 'Alpha <Log>',
        'desc': 'First & foremost',
        'author': 'Ann',
        'theme': 'word-retro',
        'planet': {'emoji': '🪐', 'nameJa': '土星', 'name': 'Saturn'},
    },
    {
        'slug': 'beta',
        'title': 'Beta Shell',
        'desc': 'Terminal notes',
        'author': 'Ben',
        'theme': 'terminal',
        'planet': {'emoji': '🔴', 'nameJa': '火星', 'name': 'Mars'},
    },
]

BLOG_LIST_TEMPLATE = """<h1>{{BLOG_EMOJI}} {{BLOG_TITLE}}</h1>
<p>{{BLOG_DESC}} by {{BLOG_AUTHOR}} ({{PLANET_JA}}/{{PLANET_EN}}) slug={{BLOG_SLUG}}</p>
<p>count={{POST_COUNT}} latest={{LATEST_DATE}}</p>
{{TAG_FILTER}}
{{POST_LIST}}
"""

POST_TEMPLATE = """<title>{{POST_TITLE}} | {{BLOG_EMOJI}} {{BLOG_TITLE}}</title>
<p>{{POST_DATE}} {{POST_AUTHOR}} {{POST_EXCERPT}} slug={{POST_SLUG}} blog={{BLOG_SLUG}}</p>
<div class="tags">{{POST_TAGS}}</div>
<script>var tags = [{{POST_TAGS_RAW}}];</script>
<article>{{POST_CONTENT}}</article>
<nav>{{PREV_POST}}|{{NEXT_POST}}</nav>
"""

HOME_TEMPLATE = """<h1>{{SITE_TITLE}}</h1>
<p>built={{BUILD_DATE}} blogs={{TOTAL_BLOGS}} posts={{TOTAL_POSTS}} latest={{LATEST_DATE}}</p>
<table>{{BLOG_TABLE_ROWS}}</table>
{{LATEST_POSTS}}
"""

NOT_FOUND_TEMPLATE = "<h1>404 {{SITE_TITLE}}</h1>\n"


def write_post(posts_dir, filename, front_matter, body='Body text.'):
    """Write a content file with YAML front matter."""
    posts_dir = Path(posts_dir)
    posts_dir.mkdir(parents=True, exist_ok=True)
    (posts_dir / filename).write_text(f"---\n{front_matter.strip()}\n---\n{body}", encoding='utf-8')


def make_post(slug='post', title='Title', date='2024-01-01', author='Ann', excerpt='', tags=(), content=''):
    return Post(slug=slug, title=title, date=date, author=author, excerpt=excerpt, tags=tuple(tags), content=content)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def parser():
    """The YAML front matter parser."""
    return load_frontmatter_parser()


@pytest.fixture
def mock_content_dir(temp_dir):
    """Create a content directory with two blogs and a handful of posts."""
    content_dir = Path(temp_dir) / 'content'
    content_dir.mkdir()
    (content_dir / 'blogs.json').write_text(json.dumps(BLOGS, ensure_ascii=False), encoding='utf-8')

    alpha_posts = content_dir / 'blogs' / 'alpha' / 'posts'
    write_post(alpha_posts, 'first.md', """
title: First Post
date: 2024-01-01
author: Ann
excerpt: The very first
tags: [news, space]
""", body="# Hello\n- one\n- two\n\nA <b>bold</b> claim")
    write_post(alpha_posts, 'second.md', """
title: Second Post
date: 2024-03-01
author: Ann
tags: [space]
""")
    write_post(alpha_posts, 'third.md', """
title: Third Post
date: 2024-02-01
author: Ann
""")
    write_post(alpha_posts, 'secret.md', """
title: Secret
date: 2024-04-01
author: Ann
draft: true
""")
    (alpha_posts / 'notes.txt').write_text('not a post', encoding='utf-8')

    beta_posts = content_dir / 'blogs' / 'beta' / 'posts'
    write_post(beta_posts, 'boot.md', """
title: Boot Log
date: 2024-02-15
author: Ben
tags: [linux]
""", body="1. power on\n2. wait")

    return str(content_dir)


@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create templates for the word-retro and terminal themes plus the shared pages."""
    templates_dir = Path(temp_dir) / 'templates'
    for theme in ('word-retro', 'terminal'):
        theme_dir = templates_dir / theme
        theme_dir.mkdir(parents=True)
        (theme_dir / 'blog-list.html').write_text(BLOG_LIST_TEMPLATE, encoding='utf-8')
        (theme_dir / 'post.html').write_text(POST_TEMPLATE, encoding='utf-8')
    (templates_dir / 'home.html').write_text(HOME_TEMPLATE, encoding='utf-8')
    (templates_dir / '404.html').write_text(NOT_FOUND_TEMPLATE, encoding='utf-8')
    return str(templates_dir)


@pytest.fixture
def mock_public_dir(temp_dir):
    """Create a public directory with CSS and JS assets."""
    public_dir = Path(temp_dir) / 'public'
    (public_dir / 'assets' / 'css').mkdir(parents=True)
    (public_dir / 'assets' / 'js').mkdir(parents=True)
    (public_dir / 'assets' / 'css' / 'site.css').write_text("body {\n  color: red;\n}\n", encoding='utf-8')
    (public_dir / 'assets' / 'js' / 'site.js').write_text("function  hello ( ) {\n  return 1 ;\n}\n", encoding='utf-8')
    (public_dir / 'favicon.ico').write_bytes(b'\x00\x01')
    return str(public_dir)


@pytest.fixture
def site_paths(temp_dir, mock_content_dir, mock_templates_dir, mock_public_dir):
    """SitePaths pointing at the mock project."""
    return SitePaths(
        content_dir=mock_content_dir,
        templates_dir=mock_templates_dir,
        public_dir=mock_public_dir,
        output_dir=os.path.join(temp_dir, 'docs'),
    )
