"""Tests for LocalRepository git operations."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import yaml

from local_repo import LocalRepository
from utils import rename_pairs


def test_clone_names_remote_after_skeleton(tmp_path: Path) -> None:
    url = 'https://github.com/cisagov/skeleton-generic.git'
    with patch('local_repo.run_command') as mock_run:
        repo = LocalRepository.clone(
            url,
            remote_name='skeleton-generic',
            branch='develop',
            parent_dir=str(tmp_path),
            name='my-repo',
        )

    mock_run.assert_called_once_with(
        ['git', 'clone', '--origin', 'skeleton-generic', '--branch', 'develop', url, 'my-repo'],
        cwd=str(tmp_path),
    )
    assert repo.path == os.path.join(str(tmp_path), 'my-repo')


def test_remote_setup_commands_run_inside_repo(tmp_path: Path) -> None:
    repo = LocalRepository(str(tmp_path))
    with patch('local_repo.run_command') as mock_run:
        repo.add_remote('origin', 'https://github.com/cisagov/my-repo.git')
        repo.set_config('remote.origin.gh-resolved', 'base')
        repo.disable_push('skeleton-generic')

    commands = [call.args[0] for call in mock_run.call_args_list]
    assert commands == [
        ['git', 'remote', 'add', 'origin', 'https://github.com/cisagov/my-repo.git'],
        ['git', 'config', '--local', 'remote.origin.gh-resolved', 'base'],
        ['git', 'remote', 'set-url', '--push', 'skeleton-generic', 'no_push'],
    ]
    for call in mock_run.call_args_list:
        assert call.kwargs['cwd'] == str(tmp_path)


def test_tracked_files_parses_null_separated_output(tmp_path: Path) -> None:
    repo = LocalRepository(str(tmp_path))
    with patch.object(LocalRepository, 'git', return_value='README.md\0src/a b.py\0'):
        assert repo.tracked_files() == ['README.md', 'src/a b.py']


def test_rename_references_rewrites_tracked_files(tmp_path: Path) -> None:
    (tmp_path / 'README.md').write_bytes(
        b'# cisagov/skeleton-generic\nskeleton-generic is a skeleton\n'
    )
    (tmp_path / '.github').mkdir()
    lineage = b'remote-url: https://github.com/cisagov/skeleton-generic.git\n'
    (tmp_path / '.github' / 'lineage.yml').write_bytes(lineage)
    (tmp_path / 'untouched.txt').write_bytes(b'nothing to see')
    os.symlink('README.md', tmp_path / 'link.md')

    repo = LocalRepository(str(tmp_path))
    tracked = ['README.md', '.github/lineage.yml', 'untouched.txt', 'link.md', 'submodule']
    with patch.object(LocalRepository, 'tracked_files', return_value=tracked):
        changed = repo.rename_references(
            rename_pairs('cisagov', 'skeleton-generic', 'cisagov', 'my-repo')
        )

    assert changed == 1
    assert (tmp_path / 'README.md').read_bytes() == b'# cisagov/my-repo\nmy-repo is a skeleton\n'
    assert (tmp_path / '.github' / 'lineage.yml').read_bytes() == lineage
    assert (tmp_path / 'untouched.txt').read_bytes() == b'nothing to see'
    assert os.path.islink(tmp_path / 'link.md')


def test_write_lineage_records_skeleton_origin(tmp_path: Path) -> None:
    repo = LocalRepository(str(tmp_path))

    rel_path = repo.write_lineage('cisagov', 'skeleton-generic')

    assert rel_path == '.github/lineage.yml'
    text = (tmp_path / '.github' / 'lineage.yml').read_text(encoding='utf-8')
    assert text.startswith('---\n')
    assert yaml.safe_load(text) == {
        'lineage': {'skeleton': {'remote-url': 'https://cisagov/skeleton-generic.git'}},
        'version': '1',
    }


def test_commits_and_branch(tmp_path: Path) -> None:
    repo = LocalRepository(str(tmp_path))
    with patch('local_repo.run_command') as mock_run:
        repo.commit_all('Rename repository references after clone')
        repo.commit_file('.github/lineage.yml', 'Add lineage configuration')
        repo.create_branch('first-commits')

    commands = [call.args[0] for call in mock_run.call_args_list]
    assert commands == [
        ['git', 'add', '--all'],
        ['git', 'commit', '--allow-empty', '--message', 'Rename repository references after clone'],
        ['git', 'add', '.github/lineage.yml'],
        ['git', 'commit', '--message', 'Add lineage configuration'],
        ['git', 'checkout', '-b', 'first-commits'],
    ]


def test_push_and_pull_request(tmp_path: Path) -> None:
    repo = LocalRepository(str(tmp_path))
    with patch('local_repo.run_command') as mock_run:
        repo.push('origin', ['develop', 'first-commits'])
        repo.open_pull_request('First commits', 'octocat', 'develop', 'first-commits')

    push_call, pr_call = mock_run.call_args_list
    assert push_call.args[0] == ['git', 'push', '--set-upstream', 'origin', 'develop', 'first-commits']
    assert pr_call.args[0] == [
        'gh', 'pr', 'create',
        '--title', 'First commits',
        '--assignee', 'octocat',
        '--base', 'develop',
        '--head', 'first-commits',
        '--web',
    ]
    assert pr_call.kwargs == {'cwd': str(tmp_path), 'interactive': True}
