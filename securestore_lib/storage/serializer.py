from typing import Any, Protocol
import json
import yaml


class Serializer(Protocol):
    """Serialize/deserialize Python values to the text stored by the item layer.

    Implementations should be symmetric: `dumps` -> str, `loads` <- str.
    Failures in `loads` should raise `ValueError` (or a subclass).
    """

    def dumps(self, value: Any) -> str: ...

    def loads(self, data: str) -> Any: ...


class JSONSerializer:
    """Default serializer using JSON. Caller must ensure values are JSON-serializable."""

    def dumps(self, value: Any) -> str:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    def loads(self, data: str) -> Any:
        return json.loads(data)


class YAMLSerializer:
    """Serializer using YAML (text). Caller must ensure values are YAML-serializable."""

    def dumps(self, value: Any) -> str:
        return yaml.safe_dump(value, allow_unicode=True, sort_keys=False)

    def loads(self, data: str) -> Any:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML payload: {e}") from e
