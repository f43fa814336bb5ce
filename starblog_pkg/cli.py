#!/usr/bin/env python3
"""
Command-line interface for StarBlog - multi-blog static site generator.
"""

import os
import sys
import json
import shutil
import argparse
import time
from typing import List, Optional

from . import __version__
from .core import SiteBuilder, setup_logging
from .frontmatter import load_frontmatter_parser
from .settings import SitePaths, StarBlogSettings

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

SAMPLE_BLOGS = [
    {
        'slug': 'hello-world',
        'title': 'Hello World',
        'desc': 'The first blog in the universe',
        'author': 'Site Author',
        'theme': 'word-retro',
        'planet': {'emoji': '🌍', 'nameJa': '地球', 'name': 'Earth'},
    }
]

SAMPLE_POST = """---
title: "Welcome to StarBlog"
date: 2025-01-01
author: Site Author
excerpt: "Your first post."
tags:
  - news
---
# Welcome

StarBlog turns plain text posts into a multi-blog site.

## Getting started
1. Add blogs to content/blogs.json
2. Write posts in content/blogs/<slug>/posts/
3. Run starblog

- Headings start with #
- Lists start with - or 1.
"""


def copy_missing(src_root: str, dest_root: str) -> None:
    """Copy every file under src_root that does not already exist under dest_root."""
    for dirpath, _dirnames, filenames in os.walk(src_root):
        relative_dir = os.path.relpath(dirpath, src_root)
        for filename in filenames:
            dest_dir = os.path.normpath(os.path.join(dest_root, relative_dir))
            dest_path = os.path.join(dest_dir, filename)
            display_path = os.path.relpath(dest_path)
            if os.path.exists(dest_path):
                print(f"File already exists: {display_path}")
                continue
            os.makedirs(dest_dir, exist_ok=True)
            shutil.copy2(os.path.join(dirpath, filename), dest_path)
            print(f"Created: {display_path}")


def write_if_missing(path: str, content: str) -> None:
    if os.path.exists(path):
        print(f"File already exists: {os.path.relpath(path)}")
        return
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    print(f"Created: {os.path.relpath(path)}")


def create_starter_structure(root: str) -> None:
    """Create starter templates, public assets and sample content under root."""
    copy_missing(os.path.join(PACKAGE_DIR, 'templates'), os.path.join(root, 'templates'))
    copy_missing(os.path.join(PACKAGE_DIR, 'assets'), os.path.join(root, 'public', 'assets'))

    write_if_missing(
        os.path.join(root, 'content', 'blogs.json'),
        json.dumps(SAMPLE_BLOGS, indent=2, ensure_ascii=False) + '\n',
    )
    write_if_missing(
        os.path.join(root, 'content', 'blogs', 'hello-world', 'posts', 'welcome.md'),
        SAMPLE_POST,
    )

    print("\nStarter structure created successfully!")
    print("\nNext steps:")
    print("1. Edit the configuration file (starblog.yml)")
    print("2. Add blogs to content/blogs.json and posts under content/blogs/<slug>/posts/")
    print("3. Add templates/<theme>/ for every theme your blogs use")
    print("4. Run 'starblog' to build your site")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='StarBlog - Multi-blog Static Site Generator')
    parser.add_argument('--content', type=str,
                        help='Content directory containing blogs.json and blogs/<slug>/posts')
    parser.add_argument('--templates', type=str,
                        help='Templates directory')
    parser.add_argument('--public', type=str,
                        help='Static files directory copied into the output root')
    parser.add_argument('--output', type=str,
                        help='Output directory for the generated site')
    parser.add_argument('--site-title', type=str,
                        help='Site title shown on the home page')
    parser.add_argument('--default-theme', type=str,
                        help='Theme for blogs that do not set one')
    parser.add_argument('--minify', action='store_true', default=None,
                        help='Write minified copies of CSS and JS assets')
    parser.add_argument('--logs', type=str,
                        help='Directory for build log files')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter project')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    root = os.getcwd()

    # Handle init command
    if args.init:
        settings_loader = StarBlogSettings(root)
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")
        print("\nCreating starter project structure...")
        create_starter_structure(root)
        return

    overall_start_time = time.time()

    try:
        # Load settings from configuration file; command line arguments take precedence
        settings_loader = StarBlogSettings(root)
        settings_loader.load_settings()
        args_dict = {k: v for k, v in vars(args).items() if v is not None}
        final_settings = settings_loader.merge_with_args(args_dict)

        logs_dir = final_settings['logs']
        logger = setup_logging(os.path.join(root, logs_dir) if logs_dir else None)

        parser = load_frontmatter_parser()
        paths = SitePaths.from_settings(final_settings, root)
        generator = SiteBuilder(
            paths,
            parser,
            site_title=final_settings['site_title'],
            default_theme=final_settings['default_theme'],
            minify=bool(final_settings['minify']),
        )
        generator.build()
    except Exception as e:
        # Console-only logger when settings or the log directory failed
        logger = setup_logging()
        logger.error(f"Build failed: {e}")
        logger.debug("Build failure details", exc_info=True)
        sys.exit(1)

    total_time = time.time() - overall_start_time
    logger.info(f"Site build completed in {total_time:.6f} seconds.")


if __name__ == '__main__':
    main()
