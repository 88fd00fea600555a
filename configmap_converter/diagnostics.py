"""
Diagnostics Module

Collects non-fatal anomalies found while extracting values, so callers can
inspect them instead of scraping log output.
"""
from typing import List, NamedTuple, Optional, Sequence

from .logging import logger

# Diagnostic reasons
ARRAY_UNSUPPORTED = 'array-unsupported'
MAPPING_NOT_NORMALIZED = 'mapping-not-normalized'
UNRECOGNIZED_TYPE = 'unrecognized-type'
INVALID_REFERENCE = 'invalid-reference'
CONFIG_UNMARSHAL_FAILED = 'config-unmarshal-failed'
CONFIG_MARSHAL_FAILED = 'config-marshal-failed'


class Diagnostic(NamedTuple):
    """A single warning recorded during extraction"""
    reason: str
    path: tuple
    message: str
    type_name: Optional[str] = None

    @property
    def dotted_path(self) -> str:
        return '.'.join(self.path)


class Diagnostics:
    """Per-invocation sink for extraction warnings

    Every recorded entry is also logged at WARNING level.
    """

    def __init__(self):
        self._entries: List[Diagnostic] = []

    def warn(self, reason: str, path: Sequence[str], message: str, type_name: str = None) -> Diagnostic:
        entry = Diagnostic(reason, tuple(path), message, type_name)
        self._entries.append(entry)
        if entry.path:
            logger.warning("configmap: %s (at %s)", message, entry.dotted_path)
        else:
            logger.warning("configmap: %s", message)
        return entry

    def by_reason(self, reason: str) -> List[Diagnostic]:
        return [d for d in self._entries if d.reason == reason]

    @property
    def entries(self) -> List[Diagnostic]:
        return list(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)
