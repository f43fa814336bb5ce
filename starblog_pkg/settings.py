#!/usr/bin/env python3
"""
Settings loader for StarBlog.
Supports configuration from starblog.yml, starblog.yaml, or starblog.json files.
"""

import os
import json
from typing import Dict, Any, NamedTuple, Optional

from .frontmatter import require_yaml


class SitePaths(NamedTuple):
    """Every filesystem location the build reads from or writes to."""

    content_dir: str
    templates_dir: str
    public_dir: str
    output_dir: str

    @property
    def blogs_config(self) -> str:
        return os.path.join(self.content_dir, 'blogs.json')

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], root: str) -> 'SitePaths':
        """
        Resolve configured directories against a project root.

        Args:
            settings: Merged settings dictionary
            root: Directory relative paths are resolved against

        Returns:
            SitePaths with absolute paths
        """
        def resolve(value):
            return os.path.abspath(os.path.join(root, os.path.expanduser(value)))

        return cls(
            content_dir=resolve(settings['content']),
            templates_dir=resolve(settings['templates']),
            public_dir=resolve(settings['public']),
            output_dir=resolve(settings['output']),
        )


class StarBlogSettings:
    """Load and manage StarBlog configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'content': 'content',
        'templates': 'templates',
        'public': 'public',
        'output': 'docs',
        'site_title': 'スプリング☆ユニバース',
        'default_theme': 'word-retro',
        'minify': False,
        'logs': 'logs',
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['starblog.yml', 'starblog.yaml', 'starblog.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            try:
                loaded_settings = self._load_config_file(config_file)
                if loaded_settings:
                    # Merge with defaults, giving preference to loaded settings
                    self.settings.update(loaded_settings)
                    print(f"Loaded configuration from: {os.path.relpath(config_file)}")
            except (ValueError, OSError) as e:
                print(f"Warning: Failed to load config file {config_file}: {e}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()

        if file_ext in ['.yml', '.yaml']:
            yaml = require_yaml()
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        elif file_ext == '.json':
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f) or {}
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
        else:
            raise ValueError(f"Unsupported config file format: {file_ext}")

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")
        return loaded

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'starblog.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    # Custom YAML output with comments
                    f.write("# StarBlog Configuration File\n\n")
                    f.write("# Site information\n")
                    f.write(f"site_title: {self.DEFAULT_SETTINGS['site_title']}\n")
                    f.write("default_theme: word-retro\n\n")
                    f.write("# Build settings\n")
                    f.write("content: content\n")
                    f.write("templates: templates\n")
                    f.write("public: public\n")
                    f.write("output: docs\n\n")
                    f.write("# Assets\n")
                    f.write("minify: false\n\n")
                    f.write("# Build logs (null disables the log file)\n")
                    f.write("logs: logs\n")
                elif file_format == 'json':
                    json.dump(self.DEFAULT_SETTINGS, f, indent=2, ensure_ascii=False)
                else:
                    raise ValueError(f"Unsupported config file format: {file_format}")
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None and key in self.DEFAULT_SETTINGS:
                merged[key] = value

        return merged
