"""Tests for command line parsing."""

from __future__ import annotations

import pytest

from argument_parser import parse_arguments
from config import Command


@pytest.fixture(autouse=True)
def default_api_url(monkeypatch):
    monkeypatch.delenv('GITHUB_API_URL', raising=False)


def test_list_defaults() -> None:
    cfg = parse_arguments(['list'])
    assert cfg.command is Command.LIST
    assert cfg.src_org == 'cisagov'
    assert cfg.api_url == 'https://api.github.com'


def test_list_with_source_org() -> None:
    assert parse_arguments(['list', '--src-org', 'myorg']).src_org == 'myorg'


def test_clone_defaults() -> None:
    cfg = parse_arguments(['clone', 'skeleton-generic', 'my-repo'])
    assert cfg.command is Command.CLONE
    assert cfg.parent_repo == 'skeleton-generic'
    assert cfg.new_repo == 'my-repo'
    assert cfg.src_org == 'cisagov'
    assert cfg.dest_org == 'cisagov'
    assert cfg.default_branch == 'develop'
    assert cfg.change_dir == '.'


def test_clone_with_overrides(tmp_path) -> None:
    cfg = parse_arguments([
        'clone',
        '--change-dir', f'{tmp_path}/',
        '--dest-org', 'octocat',
        '--src-org', 'other-org',
        'skeleton-python-library',
        'my-lib',
    ])
    assert cfg.change_dir == str(tmp_path)
    assert cfg.dest_org == 'octocat'
    assert cfg.src_org == 'other-org'
    assert cfg.parent_repo == 'skeleton-python-library'
    assert cfg.new_repo == 'my-lib'


def test_config_is_immutable() -> None:
    cfg = parse_arguments(['list'])
    with pytest.raises(AttributeError):
        cfg.src_org = 'elsewhere'


def test_api_url_from_environment(monkeypatch) -> None:
    monkeypatch.setenv('GITHUB_API_URL', 'https://github.acme.com/api/v3/')
    assert parse_arguments(['list']).api_url == 'https://github.acme.com/api/v3'


def test_help_exits_zero() -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(['--help'])
    assert excinfo.value.code == 0


@pytest.mark.parametrize(
    'argv',
    [
        [],
        ['bogus'],
        ['clone', 'skeleton-generic'],
        ['list', '--unknown'],
        ['clone', '--dest', 'octocat', 'skeleton-generic', 'my-repo'],
        ['clone', 'skeleton-generic', '../escape'],
        ['clone', '--dest-org', '-bad-', 'skeleton-generic', 'my-repo'],
    ],
)
def test_malformed_invocation_exits_255(argv, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(argv)
    assert excinfo.value.code == 255
    assert capsys.readouterr().err


def test_missing_change_dir_exits_255(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments([
            'clone', '--change-dir', str(tmp_path / 'missing'), 'skeleton-generic', 'my-repo',
        ])
    assert excinfo.value.code == 255
    assert 'does not exist' in capsys.readouterr().err
