import pytest

from persistence_lib.config import Configuration
from persistence_lib.container import ContainerResolver, HOME_ENV, default_base_dir
from persistence_lib.errors import FailedToInitiate
from persistence_lib.storage.file_backend import FileStore
from persistence_lib.storage.settings_backend import YamlSettingsStore


def test_default_container(tmp_path):
    r = ContainerResolver(tmp_path)
    settings, files = r.resolve(Configuration())
    assert isinstance(settings, YamlSettingsStore)
    assert isinstance(files, FileStore)
    assert files.root_dir == tmp_path / "default" / "files"
    assert settings.file_path == tmp_path / "default" / "settings.yml"


def test_group_container(tmp_path):
    r = ContainerResolver(tmp_path)
    _, files = r.resolve(Configuration(group_identifier="group.com.example"))
    assert files.root_dir == tmp_path / "groups" / "group.com.example" / "files"


@pytest.mark.parametrize("group", ["", ".", "..", "a/b", "a\\b"])
def test_invalid_group_fails(tmp_path, group):
    with pytest.raises(FailedToInitiate) as exc:
        ContainerResolver(tmp_path).resolve(Configuration(group_identifier=group))
    assert exc.value.group_identifier == group


def test_unwritable_base_fails(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(FailedToInitiate):
        ContainerResolver(blocker).resolve(Configuration(group_identifier="g"))


def test_default_base_dir_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv(HOME_ENV, str(tmp_path))
    assert default_base_dir() == tmp_path
    assert ContainerResolver().base_dir == tmp_path
