"""
Theme fragment builders.

Every theme renders the same four fragments (post list, tag filter panel,
prev/next navigation card, tag badges) with the same data. Themes only differ
in class names, glyphs, headings and layout. ``get_theme`` never fails:
unknown names get the default theme.
"""

from typing import Iterable, Optional, Sequence

from .escape import escape

DEFAULT_THEME = 'word-retro'
ALL_TAGS = '__all__'

NO_POSTS_HTML = '<p style="color:#999;padding:20px 0">記事がまだありません</p>'
EMPTY_NAV_HTML = '<div></div>'


def unique_tags(posts) -> list:
    """All tags across posts, deduplicated in first-seen order."""
    seen = {}
    for post in posts:
        for tag in post.tags:
            seen.setdefault(tag, None)
    return list(seen)


class ThemeRenderer:
    """
    Card layout: title and date on one row, excerpt, then author and tags.

    Class names are derived from ``prefix`` (``<prefix>-post-card``,
    ``<prefix>-tag``, ``<prefix>-tag-active`` ...).
    """

    def __init__(self, name, prefix, all_label='すべて', filter_heading='✦ タグで絞り込み',
                 date_icon='📅', centered=False, after_filter=''):
        self.name = name
        self.prefix = prefix
        self.all_label = all_label
        self.filter_heading = filter_heading
        self.date_icon = date_icon
        self.centered = centered
        self.after_filter = after_filter

    @property
    def tag_class(self):
        return f'{self.prefix}-tag'

    @property
    def active_class(self):
        return f'{self.tag_class}-active'

    def dated(self, date):
        if self.date_icon:
            return f'{self.date_icon} {escape(date)}'
        return escape(date)

    def card_open(self, post, card_class):
        return (f'<a href="posts/{escape(post.slug)}.html" class="{card_class}" '
                f'data-post-tags="{escape(",".join(post.tags))}">')

    def tag_badges(self, tags: Sequence[str]) -> str:
        if not tags:
            return ''
        return ''.join(f'<span class="{self.tag_class}">#{escape(tag)}</span>' for tag in tags)

    def post_card(self, post):
        p = self.prefix
        return f"""{self.card_open(post, f'{p}-post-card')}
  <div style="display:flex;justify-content:space-between;align-items:start;margin-bottom:6px">
    <div class="{p}-card-title">{escape(post.title)}</div>
    <span class="{p}-card-date">{self.dated(post.date)}</span>
  </div>
  <p class="{p}-card-excerpt">{escape(post.excerpt)}</p>
  <div style="display:flex;justify-content:space-between;align-items:center;margin-top:8px">
    <span class="{p}-card-meta">✍️ {escape(post.author)}</span>
    <div>{self.tag_badges(post.tags)}</div>
  </div>
</a>"""

    def post_list(self, posts: Sequence) -> str:
        if not posts:
            return NO_POSTS_HTML
        return '\n'.join(self.post_card(post) for post in posts)

    def filter_buttons(self, tags):
        buttons = [f'<button data-tag-btn="{ALL_TAGS}" class="{self.tag_class} {self.active_class}">{escape(self.all_label)}</button>']
        buttons.extend(f'<button data-tag-btn="{escape(tag)}" class="{self.tag_class}">#{escape(tag)}</button>' for tag in tags)
        return ''.join(buttons)

    def filter_panel(self, buttons):
        p = self.prefix
        justify = ';justify-content:center' if self.centered else ''
        return f"""<div class="{p}-tag-filter">
  <div class="{p}-tag-filter-heading">{self.filter_heading}</div>
  <div style="display:flex;gap:6px;flex-wrap:wrap{justify}">{buttons}</div>
</div>{self.after_filter}"""

    def tag_filter(self, posts: Iterable) -> str:
        tags = unique_tags(posts)
        if not tags:
            return ''
        return self.filter_panel(self.filter_buttons(tags))

    def nav_card(self, post, label: str) -> str:
        if post is None:
            return EMPTY_NAV_HTML
        p = self.prefix
        return f"""<a href="{escape(post.slug)}.html" class="{p}-nav-card">
  <div class="{p}-nav-label">{escape(label)}</div>
  <div class="{p}-nav-title">{escape(post.title)}</div>
  <div class="{p}-nav-date">{escape(post.date)}</div>
</a>"""


class StackedTheme(ThemeRenderer):
    """Date above the title, with a footer row for author and tags."""

    def post_card(self, post):
        p = self.prefix
        return f"""{self.card_open(post, f'{p}-post-card')}
  <div class="{p}-card-date">{self.dated(post.date)}</div>
  <div class="{p}-card-title">{escape(post.title)}</div>
  <p class="{p}-card-excerpt">{escape(post.excerpt)}</p>
  <div class="{p}-card-footer">
    <span class="{p}-card-meta">✍️ {escape(post.author)}</span>
    <div class="{p}-card-tags">{self.tag_badges(post.tags)}</div>
  </div>
</a>"""

    def filter_panel(self, buttons):
        p = self.prefix
        return f"""<div class="{p}-tag-filter">
  <div class="{p}-tag-filter-heading">{self.filter_heading}</div>
  <div class="{p}-tag-filter-wrap">{buttons}</div>
</div>"""


class TerminalTheme(ThemeRenderer):
    """One line per post, shell prompt styling."""

    def post_card(self, post):
        p = self.prefix
        return f"""{self.card_open(post, f'{p}-post-entry')}
  <span class="{p}-post-date">{escape(post.date)}</span>
  <span class="{p}-post-author">{escape(post.author)}</span>
  <span class="{p}-post-title">{escape(post.title)}</span>
  <div class="{p}-post-excerpt">{escape(post.excerpt)}</div>
  <div class="{p}-post-tags">{self.tag_badges(post.tags)}</div>
</a>"""

    def filter_panel(self, buttons):
        p = self.prefix
        return f"""<div class="{p}-tag-filter {p}-block" style="padding:10px">
  <span class="{p}-prompt-mini">$</span> grep --tag:
  <div style="display:flex;gap:6px;flex-wrap:wrap;margin-top:8px">{buttons}</div>
</div>"""


class WordTheme(ThemeRenderer):
    """The default word-processor look shared with the home page."""

    def post_card(self, post):
        return f"""{self.card_open(post, 'word-blog-entry')}
  <div style="display:flex;justify-content:space-between;align-items:start;margin-bottom:6px">
    <div class="word-blog-entry-title">{escape(post.title)}</div>
    <span style="font-size:0.85rem;color:#666;white-space:nowrap;margin-left:12px">{self.dated(post.date)}</span>
  </div>
  <p class="word-blog-excerpt" style="margin-bottom:8px">{escape(post.excerpt)}</p>
  <div style="display:flex;justify-content:space-between;align-items:center;flex-wrap:wrap;gap:8px">
    <span style="font-size:0.85rem;color:#666">✍️ {escape(post.author)}</span>
    <div>{self.tag_badges(post.tags)}</div>
  </div>
</a>"""

    def filter_panel(self, buttons):
        return f"""<div class="word-section">
  <div class="word-section-heading">{self.filter_heading}</div>
  <div style="display:flex;gap:6px;flex-wrap:wrap">{buttons}</div>
</div>
<div class="word-section-break"></div>"""

    def nav_card(self, post, label: str) -> str:
        if post is None:
            return EMPTY_NAV_HTML
        return f"""<a href="{escape(post.slug)}.html" class="word-blog-card" style="padding:12px">
  <div style="font-size:0.8rem;color:#666;margin-bottom:6px">{escape(label)}</div>
  <div class="word-bold word-text-blue" style="font-size:0.9rem">{escape(post.title)}</div>
  <div style="font-size:0.8rem;color:#666;margin-top:4px">{escape(post.date)}</div>
</a>"""


THEMES = {
    theme.name: theme for theme in (
        WordTheme(DEFAULT_THEME, 'word', filter_heading='🏷️ タグで絞り込み'),
        ThemeRenderer('retro-cosmic', 'cosmic', filter_heading='🏷️ タグで絞り込み',
                      after_filter='\n<div class="retro-separator"></div>'),
        ThemeRenderer('gym-log', 'gym', all_label='ALL', filter_heading='◆ FILTER BY TAG'),
        ThemeRenderer('love-column', 'love', all_label='すべて ♥', filter_heading='♥ タグで絞り込み', centered=True),
        ThemeRenderer('izakaya', 'izakaya', filter_heading='〔 種類で絞り込む 〕'),
        ThemeRenderer('onsen-cosmos', 'onsen', all_label='すべて ✦', date_icon='🌙', centered=True),
        ThemeRenderer('comedy-zine', 'zine', all_label='ALL', filter_heading='◆ FILTER BY TAG', date_icon=''),
        ThemeRenderer('academy-log', 'academy', all_label='ALL', filter_heading='◆ FILTER BY TAG'),
        TerminalTheme('terminal', 'term', all_label='*'),
        StackedTheme('kawase-blog', 'kawase'),
        StackedTheme('sake-modern', 'sake'),
    )
}


def get_theme(name: Optional[str]) -> ThemeRenderer:
    """Return the renderer for a theme name, falling back to the default theme."""
    return THEMES.get(name or DEFAULT_THEME, THEMES[DEFAULT_THEME])
