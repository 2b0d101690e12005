#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Tests for CLI command interface.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import os

import pytest
from click.testing import CliRunner
from strandcover.cli import main
from strandcover.index import HaplotypeIndex

CHAIN_GFA = "S\t1\tA\nS\t2\tC\nS\t3\tG\nL\t1\t+\t2\t+\t0M\nL\t2\t+\t3\t+\t0M\n"
TWO_CHAINS_GFA = CHAIN_GFA + "S\t4\tT\nS\t5\tA\nL\t4\t+\t5\t-\t0M\n"


def _write(path, content):
    with open(path, 'w') as f:
        f.write(content)


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test that --help runs without error."""
        runner = CliRunner()
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert 'StrandCover' in result.output

    def test_cli_version(self):
        """Test that --version displays version."""
        runner = CliRunner()
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert '0.1' in result.output

    def test_invalid_command(self):
        """Test that invalid commands are handled gracefully."""
        runner = CliRunner()
        result = runner.invoke(main, ['nonexistent_command'])

        assert result.exit_code != 0


class TestConfigCommands:
    """Test config init/validate/show."""

    def test_config_init_and_validate(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ['config', 'init', '--output', 'test_config.yaml', '-t', 'dense'])
            assert result.exit_code == 0
            assert os.path.exists('test_config.yaml')

            result = runner.invoke(main, ['config', 'validate', 'test_config.yaml'])
            assert result.exit_code == 0
            assert 'Window length: 8' in result.output

    def test_config_validate_invalid(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('bad.yaml', "path_cover:\n  window_length: 1\n")
            result = runner.invoke(main, ['config', 'validate', 'bad.yaml'])

            assert result.exit_code == 1

    def test_config_validate_empty_section(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('empty_section.yaml', "path_cover:\n")
            result = runner.invoke(main, ['config', 'validate', 'empty_section.yaml'])

            assert result.exit_code == 1
            assert not isinstance(result.exception, AttributeError)
            assert 'path_cover' in result.output

    def test_config_show(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            runner.invoke(main, ['config', 'init', '--output', 'c.yaml'])
            result = runner.invoke(main, ['config', 'show', 'c.yaml'])
            assert result.exit_code == 0
            assert 'Paths per component: 16' in result.output

            result = runner.invoke(main, ['config', 'show', 'c.yaml', '--format', 'yaml'])
            assert result.exit_code == 0
            assert 'window_length: 4' in result.output


class TestCoverCommand:
    """Test building an index from GFA."""

    def test_cover_and_inspect(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', TWO_CHAINS_GFA)
            result = runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz', '-n', '2', '-k', '2'])

            assert result.exit_code == 0, result.output
            assert 'Index written' in result.output
            assert '2 samples, 2 haplotypes, 2 contigs, 4 paths' in result.output

            index = HaplotypeIndex.load('graph.npz')
            assert index.path_count == 4

            result = runner.invoke(main, ['inspect', 'graph.npz', '--paths'])
            assert result.exit_code == 0
            assert 'sample0#contig0\t1+,2+,3+' in result.output
            assert 'sample1#contig1\t4+,5-' in result.output

    def test_cover_writes_gfa_paths(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', CHAIN_GFA)
            result = runner.invoke(main, [
                'cover', 'graph.gfa', '-o', 'graph.npz', '-n', '1', '--gfa-paths', 'paths.gfa'
            ])

            assert result.exit_code == 0, result.output
            with open('paths.gfa') as f:
                assert "P\tsample0#contig0\t1+,2+,3+\t*" in f.read()

    def test_cover_with_config(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', CHAIN_GFA)
            _write('c.yaml', "path_cover:\n  num_paths: 3\n  window_length: 2\n")
            result = runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz', '-c', 'c.yaml'])

            assert result.exit_code == 0, result.output
            assert HaplotypeIndex.load('graph.npz').metadata.sample_count == 3

    def test_cover_window_too_short(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', CHAIN_GFA)
            result = runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz', '-k', '1'])

            assert result.exit_code == 1
            assert not os.path.exists('graph.npz')

    def test_cover_zero_paths(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', CHAIN_GFA)
            result = runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz', '-n', '0'])

            assert result.exit_code == 0, result.output
            assert 'Empty index' in result.output
            assert HaplotypeIndex.load('graph.npz').is_empty()

    def test_cover_malformed_gfa(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', "S\t1\tA\nL\t1\t+\t9\t+\t0M\n")
            result = runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz'])

            assert result.exit_code == 1

    def test_cover_zero_padded_segment_names(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', "S\t01\tA\nS\t1\tC\nL\t01\t+\t1\t+\t0M\n")
            result = runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz', '-n', '1', '-k', '2'])

            assert result.exit_code == 0, result.output
            assert result.exception is None
            assert HaplotypeIndex.load('graph.npz').metadata.contig_count == 1

    def test_cover_empty_config_section(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', CHAIN_GFA)
            _write('c.yaml', "path_cover:\n")
            result = runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz', '-c', 'c.yaml', '-n', '2'])

            assert result.exit_code == 1
            assert not isinstance(result.exception, AttributeError)
            assert 'path_cover' in result.output
            assert not os.path.exists('graph.npz')

    def test_cover_missing_graph(self):
        runner = CliRunner()
        result = runner.invoke(main, ['cover', 'nonexistent.gfa', '-o', 'out.npz'])

        assert result.exit_code != 0


class TestFindCommand:
    """Test pattern search."""

    def test_find(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', CHAIN_GFA)
            runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz', '-n', '2', '-k', '2'])

            result = runner.invoke(main, ['find', 'graph.npz', '1+,2+'])
            assert result.exit_code == 0
            assert '1+,2+\t2' in result.output

            result = runner.invoke(main, ['find', 'graph.npz', '2-,1-', '--locate'])
            assert result.exit_code == 0
            assert '2-,1-\t2' in result.output
            assert 'sequence 1\toffset 1' in result.output

    def test_find_bad_pattern(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('graph.gfa', CHAIN_GFA)
            runner.invoke(main, ['cover', 'graph.gfa', '-o', 'graph.npz'])

            result = runner.invoke(main, ['find', 'graph.npz', '1x'])
            assert result.exit_code != 0

# StrandCover v0.1.0
# Any usage is subject to this software's license.
