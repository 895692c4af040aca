"""
Tests for layout building, rendering and the build/check helpers.
"""

import pytest

from repotoc.errors import OrphanedPathError
from repotoc.models import Config, Layout, Record, Stats
from repotoc.output_generators import (
    convert_records_to_layout,
    generate_toc,
    is_toc_current,
    order_children,
    render_stats,
    render_toc,
    write_toc,
)

FOOTER = '\n\n*Generated by repotoc* - *'


def _record(path, description='', is_dir=False):
    return Record(path=path, description=description, is_dir=is_dir)


class TestConvertRecordsToLayout:
    """Tests for convert_records_to_layout."""

    def test_parents_inserted_before_children(self):
        """Insertion order of the mapping does not matter; paths are sorted."""
        records = {
            'a/b.txt': _record('a/b.txt', 'B'),
            'a': _record('a', 'A', is_dir=True),
        }
        root = convert_records_to_layout(records)

        assert list(root.children) == ['a']
        child = root.children['a'].children['b.txt']
        assert child.complete_path == 'a/b.txt'
        assert child.description == 'B'

    def test_root_record_is_skipped(self):
        root = convert_records_to_layout({'': _record('', 'ignored', is_dir=True)})
        assert root.children == {}
        assert root.description == 'root'

    def test_orphaned_path(self):
        with pytest.raises(OrphanedPathError) as excinfo:
            convert_records_to_layout({'a/b.txt': _record('a/b.txt')})
        assert excinfo.value.path == 'a/b.txt'
        assert 'a/b.txt' in str(excinfo.value)


class TestOrderChildren:
    """Tests for sibling ordering."""

    def _layout(self, complete_path, names):
        return Layout(
            complete_path=complete_path,
            filename=complete_path.rpartition('/')[2],
            is_dir=True,
            description='',
            children={name: None for name in names},
        )

    def test_alphabetical_then_dotfiles(self):
        layout = self._layout('', ['b', '.env', 'a', '.circleci'])
        assert order_children(layout, []) == ['a', 'b', '.circleci', '.env']

    def test_priority_in_given_order(self):
        layout = self._layout('', ['b', '.env', 'a', 'z', 'm'])
        assert order_children(layout, ['z', 'a']) == ['z', 'a', 'b', 'm', '.env']

    def test_priority_for_nested_paths(self):
        layout = self._layout('src', ['util.py', 'main.py', 'cli.py'])
        show_first = ['main.py', 'src/main.py', 'src/missing.py']
        assert order_children(layout, show_first) == ['main.py', 'cli.py', 'util.py']

    def test_priority_may_name_dotfiles(self):
        layout = self._layout('', ['a', '.toc.yaml'])
        assert order_children(layout, ['.toc.yaml']) == ['.toc.yaml', 'a']


class TestRender:
    """Tests for rendering the layout."""

    def test_render_tree(self):
        records = {
            'a': _record('a', 'Dir A', is_dir=True),
            'a/b.txt': _record('a/b.txt', 'B file'),
            'c.py': _record('c.py'),
        }
        stats, text = render_toc(convert_records_to_layout(records), Config())

        assert text == (
            '- [a](a): Dir A\n'
            '  - [b.txt](a/b.txt): B file\n'
            '- [c.py](c.py): \n'
            + FOOTER + '0 dirs and 1 files still need descriptions*\n\n'
        )
        assert stats.missing == ['c.py']

    def test_long_description_wraps(self):
        description = 'x' * 70
        records = {'f.py': _record('f.py', description)}
        _, text = render_toc(convert_records_to_layout(records), Config())

        assert text.startswith(f'- [f.py](f.py):\n  {description}\n')

    def test_nested_wrap_is_indented(self):
        description = 'y' * 60
        records = {
            'dir': _record('dir', 'D', is_dir=True),
            'dir/file.py': _record('dir/file.py', description),
        }
        _, text = render_toc(convert_records_to_layout(records), Config())

        assert f'  - [file.py](dir/file.py):\n    {description}\n' in text

    def test_missing_directories_counted(self):
        records = {'d': _record('d', is_dir=True), 'd/f': _record('d/f', 'F')}
        stats, text = render_toc(convert_records_to_layout(records), Config())

        assert stats.missing_dir_count == 1
        assert stats.missing_file_count == 0
        assert text.endswith('1 dirs and 0 files still need descriptions*\n\n')

    def test_complete_footer(self):
        assert render_stats(Stats()) == (
            FOOTER + 'the table of contents is fully specified!* 🎉 \n\n'
        )


class TestGenerateToc:
    """End-to-end generation from a directory."""

    def test_docstring_description(self, make_tree):
        root = make_tree({'readme.py': '"""One-line description"""\n\nimport os\n'})
        stats, text = generate_toc(root)

        assert '- [readme.py](readme.py): One-line description\n' in text
        assert stats.is_complete

    def test_sample_repo(self, sample_repo):
        stats, text = generate_toc(sample_repo)

        assert text == (
            '- [docs](docs): \n'
            '  - [guide.txt](docs/guide.txt): \n'
            '- [package.json](package.json): npm configuration\n'
            '- [src](src): Source code\n'
            '  - [main.py](src/main.py): Entry point\n'
            '  - [util.js](src/util.js): Helpers for the frontend\n'
            '- [.editorconfig](.editorconfig): Editor settings\n'
            + FOOTER + '1 dirs and 1 files still need descriptions*\n\n'
        )
        assert sorted(stats.missing) == ['docs', 'docs/guide.txt']

    def test_config_applied(self, sample_repo):
        (sample_repo / '.toc.yaml').write_text(
            'descriptions:\n'
            '  docs: User documentation\n'
            'noDirectoryContents: [docs]\n'
            'showFirst: [src]\n'
            'ignore: [package.json]\n'
        )
        _, text = generate_toc(sample_repo)

        assert text.startswith(
            '- [src](src): Source code\n'
            '  - [main.py](src/main.py): Entry point\n'
            '  - [util.js](src/util.js): Helpers for the frontend\n'
            '- [docs](docs): User documentation\n'
            '- [.editorconfig](.editorconfig): Editor settings\n'
            '- [.toc.yaml](.toc.yaml): repotoc configuration\n'
        )
        assert 'package.json' not in text
        assert 'guide.txt' not in text

    def test_output_is_deterministic(self, sample_repo):
        assert generate_toc(sample_repo)[1] == generate_toc(sample_repo)[1]


class TestWriteAndCheck:
    """Tests for write_toc and is_toc_current."""

    def test_written_toc_is_current(self, sample_repo):
        _, text = generate_toc(sample_repo)
        toc_path = write_toc(sample_repo, text)

        assert toc_path == sample_repo / 'TOC.md'
        # TOC.md itself is never listed, so regenerating gives the same text
        assert is_toc_current(sample_repo, generate_toc(sample_repo)[1])

    def test_change_makes_toc_stale(self, sample_repo):
        write_toc(sample_repo, generate_toc(sample_repo)[1])
        (sample_repo / 'new.py').write_text('# New module\n')

        assert not is_toc_current(sample_repo, generate_toc(sample_repo)[1])

    def test_missing_toc_is_stale(self, sample_repo):
        assert not is_toc_current(sample_repo, generate_toc(sample_repo)[1])
