"""
Pytest configuration and shared fixtures for repotoc tests.
"""

from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path):
    """Build a directory tree from a mapping of relative path to file contents.

    A value of None creates a directory instead of a file.
    """
    def _make(entries: dict) -> Path:
        for relative, content in entries.items():
            path = tmp_path / relative
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding='utf-8')
        return tmp_path
    return _make


@pytest.fixture
def sample_repo(make_tree):
    """A small repository with described and undescribed entries."""
    return make_tree({
        'README.md': '# Sample repository\n',
        'src/README.md': '# Source code\n\nMore text.\n',
        'src/main.py': '#!/usr/bin/env python3\n# Entry point\nimport sys\n',
        'src/util.js': '// Helpers\n// for the frontend\nexport {}\n',
        'docs/guide.txt': 'No comment here\n',
        'package.json': '{}\n',
        '.editorconfig': '# Editor settings\nroot = true\n',
    })
