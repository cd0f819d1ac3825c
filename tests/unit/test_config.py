from pathlib import Path

import pytest

from persistence_lib.config import Configuration, load_config_file, validate_version
from persistence_lib.errors import InvalidVersion


def test_default_configuration():
    cfg = Configuration()
    assert cfg.version == 1
    assert cfg.group_identifier is None


def test_configuration_is_immutable():
    cfg = Configuration(version=2)
    with pytest.raises(AttributeError):
        cfg.version = 3


@pytest.mark.parametrize('bad', [0, -1, True, '1', 1.0, None])
def test_validate_version_rejects(bad):
    with pytest.raises(InvalidVersion):
        validate_version(bad)


def test_validate_version_accepts_positive():
    assert validate_version(7) == 7


def test_load_config_file(tmp_path):
    p = tmp_path / 'persistence.yml'
    p.write_text(
        'version: 4\n'
        'group_identifier: group.shared\n'
        'base_dir: ' + str(tmp_path / 'data') + '\n'
        'log_level: debug\n'
        'serializer: yaml\n',
        encoding='utf-8',
    )
    fc = load_config_file(p)
    assert fc.configuration == Configuration(version=4, group_identifier='group.shared')
    assert fc.base_dir == tmp_path / 'data'
    assert fc.log_level == 'debug'
    assert fc.serializer == 'yaml'


def test_load_config_file_defaults(tmp_path):
    p = tmp_path / 'empty.yml'
    p.write_text('', encoding='utf-8')
    fc = load_config_file(p)
    assert fc.configuration == Configuration()
    assert fc.base_dir is None
    assert fc.serializer == 'json'


def test_load_config_file_rejects_non_mapping(tmp_path):
    p = tmp_path / 'list.yml'
    p.write_text('- 1\n- 2\n', encoding='utf-8')
    with pytest.raises(ValueError):
        load_config_file(p)
    p.write_text('version: [1\n', encoding='utf-8')
    with pytest.raises(ValueError):
        load_config_file(p)
