import os
import shutil
import logging
from datetime import datetime, timedelta, timezone

import csscompressor
import rjsmin

from .escape import escape
from .home import build_blog_table_rows, build_latest_posts
from .markup import render_markup
from .posts import PostLoader, load_blogs, sort_by_date
from .template import TemplateLoader, render_template
from .themes import DEFAULT_THEME, get_theme

LATEST_POSTS_LIMIT = 10
RECENT_DAYS = 7
PREV_LABEL = '← 前の記事'
NEXT_LABEL = '次の記事 →'


def setup_logging(logs_dir=None):
    """Set up the StarBlog logger: messages to the console, everything to a log file."""
    logger = logging.getLogger('StarBlog')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

        if logs_dir:
            os.makedirs(logs_dir, exist_ok=True)
            log_filename = datetime.now().strftime('starblog_%Y-%m-%d_%H-%M-%S.log')
            file_handler = logging.FileHandler(os.path.join(logs_dir, log_filename), encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(file_handler)

    return logger


def parse_date(date_str):
    """Parse a YYYY-MM-DD string, returning None if it is not a valid date."""
    try:
        return datetime.strptime(date_str, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        return None


def is_recently_updated(latest_date, today):
    """True if latest_date is strictly after ``today`` minus seven days."""
    parsed = parse_date(latest_date)
    if parsed is None:
        return False
    return parsed > today - timedelta(days=RECENT_DAYS)


def format_build_date(day):
    return f'{day.year}年{day.month}月{day.day}日'


class SiteBuilder:
    """Build every blog, the home page and the 404 page into the output directory."""

    def __init__(self, paths, parser, site_title='', default_theme=DEFAULT_THEME, minify=False, today=None):
        self.paths = paths
        self.site_title = site_title
        self.default_theme = default_theme or DEFAULT_THEME
        self.minify = minify
        self.today = today or datetime.now(timezone.utc).date()
        self.loader = PostLoader(paths.content_dir, parser)
        self.templates = TemplateLoader(paths.templates_dir)
        self.logger = logging.getLogger('StarBlog.build')
        self.pages_written = 0

    def write_file(self, relative_path, content):
        output_path = os.path.join(self.paths.output_dir, relative_path)
        os.makedirs(os.path.dirname(output_path), exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
        self.pages_written += 1
        self.logger.debug(f"Wrote {relative_path}")
        return output_path

    def create_output_dir(self):
        """Delete and recreate the output directory so no stale files survive."""
        if os.path.exists(self.paths.output_dir):
            shutil.rmtree(self.paths.output_dir)
        os.makedirs(self.paths.output_dir)

    def copy_public_files(self):
        """Copy the static public/ tree into the output root."""
        if not os.path.isdir(self.paths.public_dir):
            self.logger.debug(f"No public directory at {self.paths.public_dir}, skipping asset copy")
            return
        shutil.copytree(self.paths.public_dir, self.paths.output_dir, dirs_exist_ok=True)
        self.logger.info(f"Copied static assets from {self.paths.public_dir}")

    def minify_assets(self):
        """Write minified .min.css and .min.js copies of the output assets."""
        assets_output_dir = os.path.join(self.paths.output_dir, 'assets')
        targets = (
            ('css', '.css', '.min.css', csscompressor.compress),
            ('js', '.js', '.min.js', rjsmin.jsmin),
        )

        for subdir, ext, min_ext, compress in targets:
            asset_dir = os.path.join(assets_output_dir, subdir)
            if not os.path.exists(asset_dir):
                continue
            for file in sorted(os.listdir(asset_dir)):
                if not file.endswith(ext) or file.endswith(min_ext):
                    continue
                with open(os.path.join(asset_dir, file), 'r', encoding='utf-8') as f:
                    source = f.read()
                minified_path = os.path.join(asset_dir, file[:-len(ext)] + min_ext)
                with open(minified_path, 'w', encoding='utf-8') as f:
                    f.write(compress(source))
                self.logger.debug(f"Minified {subdir.upper()}: {file}")

    def theme_name(self, blog):
        return blog.theme or self.default_theme

    def build_blog(self, blog):
        """Write a blog's index page and one page per post. Returns the loaded posts."""
        theme_name = self.theme_name(blog)
        theme = get_theme(theme_name)
        self.logger.info(f"[{theme_name}] {blog.title} ({blog.slug})")

        posts = self.loader.load(blog.slug)
        self.logger.info(f"  {len(posts)} posts")

        list_html = render_template(self.templates.read(f'{theme_name}/blog-list.html'), {
            'BLOG_TITLE': escape(blog.title),
            'BLOG_DESC': escape(blog.desc),
            'BLOG_AUTHOR': escape(blog.author),
            'BLOG_EMOJI': escape(blog.planet.emoji),
            'BLOG_SLUG': escape(blog.slug),
            'PLANET_JA': escape(blog.planet.name_ja),
            'PLANET_EN': escape(blog.planet.name),
            'POST_COUNT': len(posts),
            'LATEST_DATE': escape(posts[0].date) if posts else 'N/A',
            'POST_LIST': theme.post_list(posts),
            'TAG_FILTER': theme.tag_filter(posts),
        })
        self.write_file(os.path.join('blogs', blog.slug, 'index.html'), list_html)

        for index, post in enumerate(posts):
            # Posts are newest first: the previous post is older, the next is newer.
            prev_post = posts[index + 1] if index + 1 < len(posts) else None
            next_post = posts[index - 1] if index > 0 else None
            self.build_post(blog, theme_name, theme, post, prev_post, next_post)

        return posts

    def build_post(self, blog, theme_name, theme, post, prev_post, next_post):
        post_html = render_template(self.templates.read(f'{theme_name}/post.html'), {
            'POST_TITLE': escape(post.title),
            'POST_DATE': escape(post.date),
            'POST_AUTHOR': escape(post.author),
            'POST_EXCERPT': escape(post.excerpt),
            'POST_SLUG': escape(post.slug),
            'POST_CONTENT': render_markup(post.content),
            'POST_TAGS': theme.tag_badges(post.tags),
            'POST_TAGS_RAW': ', '.join(f'"{escape(tag)}"' for tag in post.tags),
            'BLOG_TITLE': escape(blog.title),
            'BLOG_EMOJI': escape(blog.planet.emoji),
            'BLOG_SLUG': escape(blog.slug),
            'PREV_POST': theme.nav_card(prev_post, PREV_LABEL),
            'NEXT_POST': theme.nav_card(next_post, NEXT_LABEL),
        })
        self.write_file(os.path.join('blogs', blog.slug, 'posts', f'{post.slug}.html'), post_html)

    def build_home_page(self, blogs, posts_by_blog):
        """Write index.html with the blog table and the latest posts across every blog."""
        self.logger.info("Building home page")
        entries = [(blog, post) for blog in blogs for post in posts_by_blog.get(blog.slug, [])]
        entries = sort_by_date(entries, key=lambda entry: entry[1].date)
        latest = entries[:LATEST_POSTS_LIMIT]

        post_counts = {slug: len(posts) for slug, posts in posts_by_blog.items()}
        recent_slugs = {
            slug for slug, posts in posts_by_blog.items()
            if posts and is_recently_updated(posts[0].date, self.today)
        }

        home_html = render_template(self.templates.read('home.html'), {
            'SITE_TITLE': escape(self.site_title),
            'BUILD_DATE': format_build_date(self.today),
            'BLOG_TABLE_ROWS': build_blog_table_rows(blogs, post_counts, recent_slugs),
            'TOTAL_BLOGS': len(blogs),
            'TOTAL_POSTS': len(entries),
            'LATEST_DATE': escape(latest[0][1].date) if latest else 'N/A',
            'LATEST_POSTS': build_latest_posts(latest),
        })
        self.write_file('index.html', home_html)

    def build_404_page(self):
        self.logger.info("Building 404 page")
        self.write_file('404.html', self.templates.read('404.html'))

    def build(self):
        """Main build process. Any error aborts the build."""
        self.logger.info("Starting site build...")
        self.create_output_dir()
        self.copy_public_files()

        blogs = load_blogs(self.paths.blogs_config)
        self.logger.info(f"Loaded {len(blogs)} blogs from {self.paths.blogs_config}")

        posts_by_blog = {}
        for blog in blogs:
            posts_by_blog[blog.slug] = self.build_blog(blog)

        self.build_home_page(blogs, posts_by_blog)
        self.build_404_page()
        self.write_file('.nojekyll', '')

        if self.minify:
            self.minify_assets()

        total_posts = sum(len(posts) for posts in posts_by_blog.values())
        self.logger.info(f"Total blogs generated: {len(blogs)}")
        self.logger.info(f"Total posts generated: {total_posts}")
        self.logger.info(f"Total files written: {self.pages_written}")
        return posts_by_blog
