from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from persistence_lib.storage.serializer import (
    JSONSerializer,
    PickleSerializer,
    YAMLSerializer,
    get_serializer,
)


@dataclass
class Point:
    x: int
    y: int


class Profile(BaseModel):
    name: str
    tags: list[str] = []


def test_json_serializer_plain_values():
    s = JSONSerializer()
    data = s.dump({'names': ['Joao', 'Giovanni'], 'n': 1})
    assert isinstance(data, bytes)
    assert s.load(data) == {'names': ['Joao', 'Giovanni'], 'n': 1}


def test_json_serializer_structured_values():
    s = JSONSerializer()
    assert s.load(s.dump(Point(1, 2))) == {'x': 1, 'y': 2}
    assert s.load(s.dump(Profile(name='a', tags=['t']))) == {'name': 'a', 'tags': ['t']}
    assert s.load(s.dump({'b', 'a'})) in (['a', 'b'], ['b', 'a'])


def test_json_serializer_rejects_unserializable():
    with pytest.raises(TypeError):
        JSONSerializer().dump(object())


def test_yaml_serializer():
    s = YAMLSerializer()
    assert s.load(s.dump({'a': [1, 2]})) == {'a': [1, 2]}
    assert s.load(s.dump(Point(3, 4))) == {'x': 3, 'y': 4}


def test_pickle_serializer_keeps_types():
    s = PickleSerializer()
    assert s.load(s.dump(Point(1, 2))) == Point(1, 2)


def test_get_serializer_by_name():
    assert isinstance(get_serializer('json'), JSONSerializer)
    assert isinstance(get_serializer('YAML'), YAMLSerializer)
    assert isinstance(get_serializer('pickle'), PickleSerializer)
    with pytest.raises(ValueError):
        get_serializer('xml')


def test_json_serializer_rejects_functions_classes_and_modules():
    def f():
        pass

    s = JSONSerializer()
    for value in (f, Point, pytest, len):
        with pytest.raises(TypeError):
            s.dump(value)


def test_json_serializer_plain_instances_use_attributes():
    class Box:
        def __init__(self):
            self.size = 3

    s = JSONSerializer()
    assert s.load(s.dump(Box())) == {'size': 3}
