"""Tests for the starblog command-line interface."""

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from starblog_pkg import cli
from starblog_pkg.errors import MissingDependency

from conftest import write_post

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def project(temp_dir, mock_content_dir, mock_templates_dir, mock_public_dir, monkeypatch):
    """Run the CLI from inside the mock project."""
    monkeypatch.chdir(temp_dir)
    return temp_dir


class TestMain:
    """Test cases for cli.main()."""

    def test_build_succeeds(self, project):
        cli.main(['--logs', 'build-logs'])
        assert os.path.isfile(os.path.join(project, 'docs', 'index.html'))
        assert os.path.isfile(os.path.join(project, 'docs', 'blogs', 'alpha', 'posts', 'first.html'))

    def test_output_option_overrides_default(self, project):
        cli.main(['--output', 'site'])
        assert os.path.isfile(os.path.join(project, 'site', 'index.html'))
        assert not os.path.exists(os.path.join(project, 'docs'))

    def test_settings_file_used(self, project):
        Path(project, 'starblog.yml').write_text("output: public_html\nsite_title: From Settings\n", encoding='utf-8')
        cli.main([])
        html = Path(project, 'public_html', 'index.html').read_text(encoding='utf-8')
        assert '<h1>From Settings</h1>' in html

    def test_invalid_content_exits_nonzero(self, project):
        posts_dir = Path(project, 'content', 'blogs', 'alpha', 'posts')
        write_post(posts_dir, 'broken.md', "title: T\ndate: 2024-01-01")
        with pytest.raises(SystemExit) as excinfo:
            cli.main([])
        assert excinfo.value.code == 1

    def test_missing_configuration_exits_nonzero(self, project):
        os.remove(os.path.join(project, 'content', 'blogs.json'))
        with pytest.raises(SystemExit) as excinfo:
            cli.main([])
        assert excinfo.value.code == 1

    def test_missing_template_exits_nonzero(self, project):
        shutil.rmtree(os.path.join(project, 'templates', 'terminal'))
        with pytest.raises(SystemExit) as excinfo:
            cli.main([])
        assert excinfo.value.code == 1

    def test_missing_dependency_exits_nonzero(self, project):
        with patch('starblog_pkg.cli.load_frontmatter_parser', side_effect=MissingDependency('PyYAML is required')):
            with pytest.raises(SystemExit) as excinfo:
                cli.main([])
        assert excinfo.value.code == 1
        assert not os.path.exists(os.path.join(project, 'docs'))

    def test_missing_pyyaml_reported_without_traceback(self, project):
        script = (
            "import sys\n"
            "sys.modules['yaml'] = None\n"
            "from starblog_pkg import cli\n"
            "cli.main(['--logs', ''])\n"
        )
        env = dict(os.environ, PYTHONPATH=REPO_ROOT)
        result = subprocess.run(
            [sys.executable, '-c', script], cwd=project, env=env,
            capture_output=True, text=True, timeout=60,
        )
        assert result.returncode == 1
        assert 'Build failed: PyYAML is required' in result.stderr
        assert 'Traceback' not in result.stderr
        assert not os.path.exists(os.path.join(project, 'docs'))

    def test_unusable_log_directory_exits_nonzero(self, project, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger('StarBlog'), 'handlers', [])
        Path(project, 'blocked').write_text('a file, not a directory', encoding='utf-8')
        with pytest.raises(SystemExit) as excinfo:
            cli.main(['--logs', 'blocked/logs'])
        assert excinfo.value.code == 1
        assert 'Build failed' in caplog.text

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(['--version'])
        assert excinfo.value.code == 0
        assert '1.0.0' in capsys.readouterr().out


class TestInit:
    """Test cases for --init."""

    def test_init_creates_buildable_project(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        cli.main(['--init', 'yml'])

        for relative in (
            'starblog.yml',
            'content/blogs.json',
            'content/blogs/hello-world/posts/welcome.md',
            'templates/home.html',
            'templates/404.html',
            'templates/word-retro/blog-list.html',
            'templates/word-retro/post.html',
            'public/assets/js/tag-filter.js',
            'public/assets/css/word-retro.css',
        ):
            assert os.path.isfile(os.path.join(temp_dir, relative)), relative

        cli.main([])
        post = Path(temp_dir, 'docs', 'blogs', 'hello-world', 'posts', 'welcome.html').read_text(encoding='utf-8')
        assert '<h1>Welcome</h1>' in post
        assert '<ol>' in post and '<ul>' in post
        assert os.path.isfile(os.path.join(temp_dir, 'docs', 'assets', 'js', 'tag-filter.js'))

    def test_init_does_not_overwrite(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        Path(temp_dir, 'templates').mkdir()
        Path(temp_dir, 'templates', 'home.html').write_text('mine', encoding='utf-8')
        cli.main(['--init', 'json'])
        assert Path(temp_dir, 'templates', 'home.html').read_text(encoding='utf-8') == 'mine'
        assert os.path.isfile(os.path.join(temp_dir, 'starblog.json'))
