"""
Resource Module

Identifies Kubernetes objects by group/version/kind and converts matching
ConfigMaps into typed client models.
"""
from typing import Any, Dict, NamedTuple

from kubernetes import client

from .constants import CONFIGMAP_GROUP, CONFIGMAP_KIND, CONFIGMAP_VERSION, NAMESPACE_SUFFIX
from .errors import ConversionError


class GroupVersionKind(NamedTuple):
    group: str
    version: str
    kind: str

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> 'GroupVersionKind':
        """Split an apiVersion such as 'apps/v1' into group and version

        The core group has no prefix: 'v1' gives group ''.
        """
        if '/' in api_version:
            group, version = api_version.split('/', 1)
        else:
            group, version = '', api_version
        return cls(group, version, kind)

    @property
    def api_version(self) -> str:
        return f'{self.group}/{self.version}' if self.group else self.version


CONFIGMAP_GVK = GroupVersionKind(CONFIGMAP_GROUP, CONFIGMAP_VERSION, CONFIGMAP_KIND)


def gvk_of(obj: Dict[str, Any]) -> GroupVersionKind:
    """Return the GroupVersionKind of a loosely-typed object"""
    api_version = obj.get('apiVersion')
    kind = obj.get('kind')
    return GroupVersionKind.from_api_version(
        api_version if isinstance(api_version, str) else '',
        kind if isinstance(kind, str) else '',
    )


def to_configmap(obj: Dict[str, Any]) -> client.V1ConfigMap:
    """Convert a ConfigMap object (as loaded from YAML) to V1ConfigMap

    Args:
        obj: ConfigMap manifest

    Returns:
        Typed ConfigMap model

    Raises:
        ConversionError: a field has the wrong shape for a ConfigMap
    """
    if not isinstance(obj, dict):
        raise ConversionError(f"expected a mapping, got {type(obj).__name__}")

    metadata = obj.get('metadata') or {}
    if not isinstance(metadata, dict):
        raise ConversionError(f"metadata must be a mapping, got {type(metadata).__name__}")
    resource = metadata.get('name') if isinstance(metadata.get('name'), str) else None

    for field in ('name', 'namespace'):
        if metadata.get(field) is not None and not isinstance(metadata[field], str):
            raise ConversionError(f"metadata.{field} must be a string", resource)
    for field in ('labels', 'annotations'):
        _check_string_map(metadata.get(field), f"metadata.{field}", resource)

    _check_string_map(obj.get('data'), 'data', resource)
    _check_string_map(obj.get('binaryData'), 'binaryData', resource)

    immutable = obj.get('immutable')
    if immutable is not None and not isinstance(immutable, bool):
        raise ConversionError("immutable must be a boolean", resource)

    return client.V1ConfigMap(
        api_version=obj.get('apiVersion'),
        kind=obj.get('kind'),
        metadata=client.V1ObjectMeta(
            name=metadata.get('name'),
            namespace=metadata.get('namespace'),
            labels=metadata.get('labels'),
            annotations=metadata.get('annotations'),
        ),
        data=dict(obj['data']) if obj.get('data') is not None else None,
        binary_data=obj.get('binaryData'),
        immutable=immutable,
    )


def derive_name(name: str, namespace: str) -> str:
    """Derive the template basename from the resource name

    The namespace without its trailing 'system' is stripped from the front of
    the name, e.g. my-operator-manager-config in my-operator-system gives
    manager-config.
    """
    name = name or ''
    namespace = namespace or ''
    prefix = namespace[:-len(NAMESPACE_SUFFIX)] if namespace.endswith(NAMESPACE_SUFFIX) else namespace
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def _check_string_map(value: Any, field: str, resource: str) -> None:
    if value is None:
        return
    if not isinstance(value, dict):
        raise ConversionError(f"{field} must be a mapping, got {type(value).__name__}", resource)
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise ConversionError(
                f"{field} must map strings to strings, got {key!r}: {type(item).__name__}",
                resource,
            )
