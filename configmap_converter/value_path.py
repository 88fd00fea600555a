"""
Value Path Module

Dotted paths identifying a location in the values store. The same path names
the values.yaml entry and builds the template placeholder for it.
"""
import re

_IDENTIFIER_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


class Placeholder(str):
    """Helm values reference emitted in place of an extracted value"""
    pass


class ValuePath(tuple):
    """Immutable, ordered sequence of key segments

    Examples:
        >>> path = ValuePath(['managerConfig']).child('health')
        >>> path.dotted
        'managerConfig.health'
        >>> path.placeholder
        '{{ .Values.managerConfig.health }}'
    """

    def __new__(cls, segments=()):
        segments = tuple(segments)
        for segment in segments:
            if not isinstance(segment, str):
                raise TypeError(f"Path segments must be strings, got {type(segment).__name__}")
        return super().__new__(cls, segments)

    def child(self, key: str) -> 'ValuePath':
        """Return a new path extended by one segment; self is left untouched"""
        return ValuePath(self + (key,))

    @property
    def dotted(self) -> str:
        return '.'.join(self)

    @property
    def placeholder(self) -> Placeholder:
        """Helm reference expression for this path"""
        return Placeholder('{{ .Values.' + self.dotted + ' }}')

    def invalid_segments(self) -> list:
        """Segments Go templates cannot address with .field syntax (e.g. 8080, my-key)"""
        return [segment for segment in self if not _IDENTIFIER_RE.fullmatch(segment)]

    def __repr__(self):
        return f"ValuePath({self.dotted!r})"
