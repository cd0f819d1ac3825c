from types import ModuleType
from typing import Any, Protocol
import dataclasses
import pickle
import json
import yaml
from pydantic import BaseModel


class Serializer(Protocol):
    """Serialize/deserialize Python values for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    """

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


def _to_plain(o: Any) -> Any:
    if isinstance(o, BaseModel):
        return o.model_dump(mode="json")
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    if isinstance(o, (set, frozenset, tuple)):
        return list(o)
    # plain instances only; functions, classes and modules would encode lossily
    if hasattr(o, "__dict__") and not (callable(o) or isinstance(o, (type, ModuleType))):
        return o.__dict__
    raise TypeError(f"Object of type {type(o).__name__} is not serializable")


class JSONSerializer:
    """Default serializer using JSON (text).

    Dataclasses and pydantic models are written as objects; reading them
    back as their original type is done by the caller's type validation.
    """

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, default=_to_plain, ensure_ascii=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YAMLSerializer:
    """Serializer using YAML (text). Caller must ensure values are YAML-serializable."""

    def dump(self, value: Any) -> bytes:
        if isinstance(value, BaseModel) or dataclasses.is_dataclass(value):
            value = _to_plain(value)
        return yaml.safe_dump(value, allow_unicode=True).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))


class PickleSerializer:
    """Serializer using pickle (binary).

    Handy when stored values are arbitrary Python objects. Only load data
    written by a trusted process.
    """

    def dump(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    def load(self, data: bytes) -> Any:
        return pickle.loads(data)


_SERIALIZERS = {
    "json": JSONSerializer,
    "yaml": YAMLSerializer,
    "pickle": PickleSerializer,
}


def get_serializer(name: str) -> Serializer:
    """Return a serializer instance by name ('json', 'yaml' or 'pickle')."""
    try:
        return _SERIALIZERS[name.lower()]()
    except KeyError:
        raise ValueError(f"unknown serializer {name!r}") from None
