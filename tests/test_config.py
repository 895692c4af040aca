"""
Tests for loading .toc.yaml.
"""

import pytest

from repotoc.config import load_config, parse_config
from repotoc.errors import ConfigError
from repotoc.models import Config


class TestLoadConfig:
    """Tests for load_config and parse_config."""

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path) == Config()

    def test_full_config(self, make_tree):
        root = make_tree({'.toc.yaml': '''
ignore:
  - "*.lock"
noDirectoryContents:
  - vendor
descriptions:
  docs: Project documentation
defaultDescriptions:
  .proto: Protocol buffers
showFirst:
  - src
  - README.md
'''})
        config = load_config(root)

        assert config.ignore == ['*.lock']
        assert config.no_directory_contents == ['vendor']
        assert config.descriptions == {'docs': 'Project documentation'}
        assert config.default_descriptions == {'.proto': 'Protocol buffers'}
        assert config.show_first == ['src', 'README.md']

    def test_empty_file(self, make_tree):
        root = make_tree({'.toc.yaml': ''})
        assert load_config(root) == Config()

    def test_partial_config(self, tmp_path):
        config = parse_config('showFirst: [main.py]\n', tmp_path / '.toc.yaml')
        assert config == Config(show_first=['main.py'])

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match='Could not parse'):
            parse_config('ignore: [\n', tmp_path / '.toc.yaml')

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match='mapping at the top level'):
            parse_config('- a\n- b\n', tmp_path / '.toc.yaml')

    def test_list_of_strings_required(self, tmp_path):
        with pytest.raises(ConfigError, match="'ignore'"):
            parse_config('ignore: foo\n', tmp_path / '.toc.yaml')

    def test_mapping_required(self, tmp_path):
        with pytest.raises(ConfigError, match="'descriptions'"):
            parse_config('descriptions: [a, b]\n', tmp_path / '.toc.yaml')

    def test_mapping_values_must_be_strings(self, tmp_path):
        with pytest.raises(ConfigError, match="'defaultDescriptions'"):
            parse_config('defaultDescriptions:\n  .x: 3\n', tmp_path / '.toc.yaml')
