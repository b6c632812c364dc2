"""Tests for configuration loading, validation and CLI merging."""

from argparse import Namespace

import pytest

from config_loader import ConfigLoader, get_nested
from models import ConversionOptions


class TestLoad:
    """Test reading configuration files."""

    def test_env_vars_substituted(self, tmp_path, monkeypatch):
        """Test ${VAR} references resolve, unknown ones stay literal."""
        monkeypatch.setenv('DOCS_OUT', '/srv/docs')
        config_file = tmp_path / 'config.yaml'
        config_file.write_text(
            "export:\n  output_directory: ${DOCS_OUT}/content\n"
            "metadata:\n  fields_default:\n    owner: ${UNSET_VARIABLE_XYZ}\n",
            encoding='utf-8'
        )

        config = ConfigLoader.load(str(config_file))

        assert config['export']['output_directory'] == '/srv/docs/content'
        assert config['metadata']['fields_default']['owner'] == '${UNSET_VARIABLE_XYZ}'

    def test_empty_file(self, tmp_path):
        """Test an empty file loads as an empty config."""
        config_file = tmp_path / 'empty.yaml'
        config_file.write_text("", encoding='utf-8')
        assert ConfigLoader.load(str(config_file)) == {}

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / 'nope.yaml'))

    def test_non_mapping_rejected(self, tmp_path):
        """Test a top-level list is rejected."""
        config_file = tmp_path / 'list.yaml'
        config_file.write_text("- a\n- b\n", encoding='utf-8')
        with pytest.raises(ValueError):
            ConfigLoader.load(str(config_file))


class TestValidate:
    """Test configuration validation rules."""

    def test_valid_config(self, tmp_path):
        """Test a complete valid configuration passes."""
        ConfigLoader.validate({
            'conversion': {
                'demote_headings': True,
                'indented_blockquotes': False,
                'crosslinks_paths': {'abc': '/a'},
                'code_fonts': ['Consolas', 'Courier New'],
            },
            'metadata': {'fields_default': {'layout': 'doc'}, 'fields_mapper': {'name': 'title'}},
            'export': {'output_directory': str(tmp_path)},
            'logging': {'level': 'debug'},
        })

    def test_empty_config_is_valid(self):
        """Test defaults alone are valid."""
        ConfigLoader.validate({})

    @pytest.mark.parametrize("config,message", [
        ({'conversion': {'demote_headings': 'yes'}}, "conversion.demote_headings"),
        ({'conversion': {'crosslinks_paths': ['abc']}}, "conversion.crosslinks_paths"),
        ({'conversion': {'crosslinks_paths': {'abc': ''}}}, "conversion.crosslinks_paths['abc']"),
        ({'conversion': {'code_fonts': 'Consolas'}}, "conversion.code_fonts"),
        ({'metadata': {'fields_mapper': ['name']}}, "metadata.fields_mapper"),
        ({'metadata': {'fields_mapper': {'name': 3}}}, "metadata.fields_mapper values"),
        ({'logging': {'level': 'LOUD'}}, "logging.level"),
    ])
    def test_invalid_values(self, config, message):
        """Test each invalid value names the offending key."""
        with pytest.raises(ValueError) as exc_info:
            ConfigLoader.validate(config)
        assert message in str(exc_info.value)

    def test_output_directory_must_not_be_a_file(self, tmp_path):
        """Test an existing file is not accepted as output directory."""
        existing = tmp_path / 'file.txt'
        existing.write_text("x", encoding='utf-8')
        with pytest.raises(ValueError):
            ConfigLoader.validate({'export': {'output_directory': str(existing)}})


class TestMergeWithArgs:
    """Test CLI arguments merged over the config file."""

    def test_cli_flags_take_precedence(self):
        """Test set flags override the file without mutating it."""
        config = {'conversion': {'demote_headings': False}, 'export': {'output_directory': 'a'}}
        args = Namespace(demote_headings=True, indented_blockquotes=False, output_dir='b', log_file=None)

        merged = ConfigLoader.merge_with_args(config, args)

        assert merged['conversion']['demote_headings'] is True
        assert merged['export']['output_directory'] == 'b'
        assert 'indented_blockquotes' not in merged['conversion']
        assert config['conversion']['demote_headings'] is False

    def test_unset_flags_keep_config(self):
        """Test unset flags leave file values alone."""
        config = {'conversion': {'indented_blockquotes': True}}
        args = Namespace(demote_headings=False, indented_blockquotes=False, output_dir=None, log_file='run.log')

        merged = ConfigLoader.merge_with_args(config, args)

        assert merged['conversion']['indented_blockquotes'] is True
        assert merged['logging']['file'] == 'run.log'


def test_to_conversion_options():
    """Test the conversion section becomes engine options."""
    options = ConfigLoader.to_conversion_options({
        'conversion': {'demote_headings': True, 'crosslinks_paths': {'abc': '/a'}}
    })
    assert options == ConversionOptions(demote_headings=True, crosslinks_paths={'abc': '/a'})


def test_options_accept_camel_case_keys():
    """Test camelCase option keys are accepted."""
    options = ConversionOptions.from_dict({'indentedBlockquotes': True, 'codeFonts': ['Roboto Mono'], 'other': 1})
    assert options.indented_blockquotes is True
    assert options.code_fonts == ['Roboto Mono']


def test_get_nested():
    """Test dotted lookups with a default."""
    config = {'a': {'b': {'c': 1}}}
    assert get_nested(config, 'a.b.c') == 1
    assert get_nested(config, 'a.x.c', 'default') == 'default'
