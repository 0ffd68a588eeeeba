"""
Tests for the ospl command line.
"""

import logging

import pytest
from click.testing import CliRunner

from ospl.cli import main
from ospl.config import get_config_value, load_config
from ospl.library import Library


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI installs handlers on the root logger; put things back."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, library_path, *args, input=None):
    return runner.invoke(main, ['-q', '--library', str(library_path), *args], input=input)


class TestInit:
    """Test library creation from the command line."""

    def test_init(self, runner, tmp_path):
        result = runner.invoke(main, ['-q', 'init', str(tmp_path / 'cli.ospl')])

        assert result.exit_code == 0
        assert 'Created library' in result.output
        assert (tmp_path / 'cli.ospl' / 'database.db').is_file()

    def test_init_existing(self, runner, tmp_path):
        result = runner.invoke(main, ['-q', 'init', str(tmp_path)])

        assert result.exit_code == 1
        assert 'AlreadyExistsError' in result.output


class TestCommands:
    """Test commands against an existing library."""

    def test_collection_create_and_list(self, runner, library):
        result = invoke(runner, library.path, 'collection', 'create', '2019', '-m', 'good year')
        assert result.exit_code == 0
        assert '(ID: 1)' in result.output

        result = invoke(runner, library.path, 'collection', 'list')
        assert result.exit_code == 0
        assert '2019' in result.output
        assert 'good year' in result.output

    def test_library_from_environment(self, runner, library, monkeypatch):
        monkeypatch.setenv('OSPL_LIBRARY', str(library.path))

        result = runner.invoke(main, ['-q', 'collection', 'create', 'Trips'])

        assert result.exit_code == 0
        assert [c.name for c in Library.load(library.path).list_collections()] == ['Trips']

    def test_album_workflow(self, runner, library, image_file):
        invoke(runner, library.path, 'collection', 'create', '2019')
        invoke(runner, library.path, 'album', 'create', '1', 'Pizza Party')

        result = invoke(runner, library.path, 'photo', 'import', str(image_file), '--album', '1')
        assert result.exit_code == 0
        assert 'beach.jpg' in result.output

        result = invoke(runner, library.path, 'album', 'photos', '1')
        assert result.exit_code == 0
        assert 'beach.jpg' in result.output

        result = invoke(runner, library.path, 'photo', 'show', '1')
        assert 'In album: 2019/Pizza Party' in result.output

    def test_import_folder(self, runner, library, album, image_file):
        (image_file.parent / 'notes.txt').write_text('hi')

        result = invoke(runner, library.path, 'photo', 'import-folder', str(image_file.parent),
                        str(album.id), '--no-progress')

        assert result.exit_code == 0
        assert 'Imported 1 of 2 files' in result.output
        assert len(library.list_photos_in_album(album.id)) == 1

    def test_move_and_delete(self, runner, library, album):
        invoke(runner, library.path, 'collection', 'create', '2020')

        result = invoke(runner, library.path, 'album', 'move', str(album.id), '2')
        assert result.exit_code == 0
        assert "now in '2020'" in result.output

        result = invoke(runner, library.path, 'album', 'delete', str(album.id), '--yes')
        assert result.exit_code == 0
        assert library.list_albums_in_collection(2) == []

    def test_delete_requires_confirmation(self, runner, library, collection):
        result = invoke(runner, library.path, 'collection', 'delete', str(collection.id), input='n\n')

        assert result.exit_code != 0
        assert library.get_collection(collection.id) == collection

    def test_missing_element(self, runner, library):
        result = invoke(runner, library.path, 'album', 'show', '12')

        assert result.exit_code == 1
        assert 'NotFoundError' in result.output

    def test_missing_library(self, runner, tmp_path):
        result = invoke(runner, tmp_path / 'absent.ospl', 'collection', 'list')

        assert result.exit_code == 1
        assert 'No library' in result.output


class TestConfigCommands:
    """Test showing and changing configuration."""

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('thumbnails:\n  height: 325\n')
        return path

    def test_set_writes_file(self, runner, config_file):
        result = runner.invoke(main, ['-q', '-c', str(config_file), 'config', 'set', 'thumbnails.height', '200'])

        assert result.exit_code == 0
        assert '✅ thumbnails.height = 200' in result.output
        assert get_config_value(load_config(config_file), 'thumbnails.height') == 200

    def test_show_value(self, runner, config_file):
        runner.invoke(main, ['-q', '-c', str(config_file), 'config', 'set', 'library.path', '/photos/main.ospl'])
        result = runner.invoke(main, ['-q', '-c', str(config_file), 'config', 'show', 'library.path'])

        assert result.exit_code == 0
        assert '/photos/main.ospl' in result.output

    def test_show_missing_key(self, runner, config_file):
        result = runner.invoke(main, ['-q', '-c', str(config_file), 'config', 'show', 'nothing.here'])

        assert result.exit_code == 1
        assert 'No value set for nothing.here' in result.output

    def test_set_defaults_to_user_config(self, runner, tmp_path, monkeypatch):
        user_config = tmp_path / 'home' / '.ospl' / 'config.yaml'
        monkeypatch.setattr('ospl.config.USER_CONFIG_PATH', user_config)
        monkeypatch.setattr('ospl.cli.config_commands.USER_CONFIG_PATH', user_config)

        result = runner.invoke(main, ['-q', 'config', 'set', 'logging.level', 'DEBUG'])

        assert result.exit_code == 0
        assert get_config_value(load_config(user_config), 'logging.level') == 'DEBUG'
