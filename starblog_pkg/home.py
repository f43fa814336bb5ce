"""Fragments for the aggregated home page."""

from .escape import escape
from .themes import get_theme, DEFAULT_THEME

NEW_BADGE_HTML = '<span class="word-new-badge">NEW</span>'


def build_blog_table_rows(blogs, post_counts, recent_slugs) -> str:
    """One table row per blog with its post count and a NEW badge when recently updated."""
    rows = []
    for blog in blogs:
        badge = NEW_BADGE_HTML if blog.slug in recent_slugs else ''
        rows.append(f"""<tr>
  <td><a href="blogs/{escape(blog.slug)}/index.html" class="word-hyperlink"><span class="word-emoji">{escape(blog.planet.emoji)}</span>{escape(blog.title)}{badge}</a></td>
  <td>{escape(blog.desc)}</td>
  <td>{escape(blog.author)}</td>
  <td class="word-bold">{post_counts.get(blog.slug, 0)}</td>
</tr>""")
    return '\n'.join(rows)


def build_latest_posts(entries) -> str:
    """Render the latest-posts feed from (blog, post) pairs."""
    badges = get_theme(DEFAULT_THEME)
    items = []
    for blog, post in entries:
        tags_html = badges.tag_badges(post.tags)
        tags_block = f'<div style="margin-top:8px">{tags_html}</div>' if tags_html else ''
        items.append(f"""<a href="blogs/{escape(blog.slug)}/posts/{escape(post.slug)}.html" class="word-blog-entry">
  <div class="word-blog-entry-title">
    <span class="word-emoji">{escape(blog.planet.emoji)}</span>{escape(post.title)}
  </div>
  <div class="word-blog-meta">投稿者: {escape(post.author)} | ブログ: {escape(blog.title)} | 日時: {escape(post.date)}</div>
  <p class="word-blog-excerpt">{escape(post.excerpt)}</p>
  {tags_block}
</a>""")
    return '\n'.join(items)
