#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Tests for configuration loading, templates and validation.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
import yaml
from strandcover.config import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    load_config,
    save_config_template,
    validate_config,
)


class TestLoadConfig:
    """Test loading and merging configuration files."""

    def test_defaults(self):
        config = load_config()

        assert config['path_cover']['num_paths'] == 16
        assert config['path_cover']['window_length'] == 4
        assert validate_config(config) == []

    def test_defaults_not_mutated(self):
        config = load_config()
        config['path_cover']['num_paths'] = 1

        assert DEFAULT_CONFIG['path_cover']['num_paths'] == 16

    def test_deep_merge(self, temp_output_dir):
        config_file = temp_output_dir / "config.yaml"
        config_file.write_text("path_cover:\n  window_length: 6\n")

        config = load_config(config_file)

        assert config['path_cover']['window_length'] == 6
        assert config['path_cover']['num_paths'] == 16
        assert config['index']['sample_interval'] == 1024

    def test_empty_file(self, temp_output_dir):
        config_file = temp_output_dir / "empty.yaml"
        config_file.write_text("")

        assert load_config(config_file) == DEFAULT_CONFIG

    def test_invalid_yaml(self, temp_output_dir):
        config_file = temp_output_dir / "bad.yaml"
        config_file.write_text("path_cover: [unclosed\n")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_not_a_mapping(self, temp_output_dir):
        config_file = temp_output_dir / "list.yaml"
        config_file.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    @pytest.mark.parametrize("content", [
        "path_cover:\n",
        "index: 5\n",
        "output:\n  logging:\n",
    ])
    def test_section_not_a_mapping(self, temp_output_dir, content):
        config_file = temp_output_dir / "section.yaml"
        config_file.write_text(content)

        with pytest.raises(ConfigValidationError, match="must be a mapping"):
            load_config(config_file)


class TestTemplates:
    """Test configuration templates."""

    @pytest.mark.parametrize("template,n,k", [
        ('default', 16, 4),
        ('sparse', 4, 2),
        ('dense', 64, 8),
    ])
    def test_template_values(self, temp_output_dir, template, n, k):
        output = temp_output_dir / f"{template}.yaml"
        save_config_template(output, template=template)

        with open(output) as f:
            config = yaml.safe_load(f)
        assert config['path_cover']['num_paths'] == n
        assert config['path_cover']['window_length'] == k
        assert validate_config(config) == []

    def test_unknown_template(self, temp_output_dir):
        with pytest.raises(ConfigValidationError):
            save_config_template(temp_output_dir / "x.yaml", template='bogus')

    def test_templates_do_not_change_defaults(self, temp_output_dir):
        save_config_template(temp_output_dir / "dense.yaml", template='dense')
        assert DEFAULT_CONFIG['path_cover']['num_paths'] == 16


class TestValidateConfig:
    """Test configuration validation errors."""

    def test_window_too_short(self):
        config = load_config()
        config['path_cover']['window_length'] = 1

        errors = validate_config(config)
        assert len(errors) == 1
        assert 'window_length' in errors[0]

    def test_negative_paths(self):
        config = load_config()
        config['path_cover']['num_paths'] = -1
        assert any('num_paths' in error for error in validate_config(config))

    def test_zero_paths_allowed(self):
        config = load_config()
        config['path_cover']['num_paths'] = 0
        assert validate_config(config) == []

    def test_index_parameters(self):
        config = load_config()
        config['index']['batch_size'] = 0
        config['index']['sample_interval'] = 'often'

        errors = validate_config(config)
        assert len(errors) == 2

    def test_log_level(self):
        config = load_config()
        config['output']['logging']['level'] = 'CHATTY'
        assert any('logging.level' in error for error in validate_config(config))

    def test_section_not_a_mapping(self):
        config = load_config()
        config['path_cover'] = None
        config['output']['logging'] = 'loud'

        errors = validate_config(config)
        assert "Invalid path_cover: None (must be a mapping)" in errors
        assert "Invalid output.logging: 'loud' (must be a mapping)" in errors

# StrandCover v0.1.0
# Any usage is subject to this software's license.
