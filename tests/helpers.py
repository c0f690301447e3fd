from typing import Any, Dict, List, Optional, Set, Tuple

from securestore_lib.errors import BackendFailure


class RecordingBackend:
    """In-memory key-value backend that records every call.

    `fail_set` / `fail_delete` hold keys whose operation raises
    `BackendFailure`.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.store: Dict[str, str] = dict(initial or {})
        self.calls: List[Tuple[str, str]] = []
        self.fail_set: Set[str] = set()
        self.fail_delete: Set[str] = set()
        self.fail_get: Set[str] = set()

    async def get(self, key):
        self.calls.append(('get', key))
        if key in self.fail_get:
            raise BackendFailure(f'get failed for {key}', key=key)
        return self.store.get(key)

    async def set(self, key, value):
        self.calls.append(('set', key))
        if key in self.fail_set:
            raise BackendFailure(f'quota exceeded for {key}', key=key)
        self.store[key] = value

    async def delete(self, key):
        self.calls.append(('delete', key))
        if key in self.fail_delete:
            raise BackendFailure(f'delete failed for {key}', key=key)
        self.store.pop(key, None)

    def keys_called(self, op: str) -> List[str]:
        return [k for (o, k) in self.calls if o == op]


class RecordingLogger:
    """Logger capability that keeps formatted messages per level."""

    def __init__(self):
        self.records: Dict[str, List[str]] = {'debug': [], 'info': [], 'warning': [], 'error': []}

    def _log(self, level: str, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records[level].append(msg % args if args else msg)

    def debug(self, msg, *args, **kwargs):
        self._log('debug', msg, *args)

    def info(self, msg, *args, **kwargs):
        self._log('info', msg, *args)

    def warning(self, msg, *args, **kwargs):
        self._log('warning', msg, *args)

    def error(self, msg, *args, **kwargs):
        self._log('error', msg, *args)
