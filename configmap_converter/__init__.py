"""
ConfigMap to Helm template converter
"""
from .classifier import ValueKind, Leaf, classify, classify_string, kind_of
from .diagnostics import Diagnostic, Diagnostics
from .errors import ConversionError
from .extractor import extract, replace, normalize_mapping
from .processor import ConfigMapProcessor
from .resource import CONFIGMAP_GVK, GroupVersionKind, derive_name, to_configmap
from .template import ConfigMapTemplate, render_configmap
from .value_path import ValuePath
from .values import Values

__all__ = [
    'ValueKind',
    'Leaf',
    'classify',
    'classify_string',
    'kind_of',
    'Diagnostic',
    'Diagnostics',
    'ConversionError',
    'extract',
    'replace',
    'normalize_mapping',
    'ConfigMapProcessor',
    'CONFIGMAP_GVK',
    'GroupVersionKind',
    'derive_name',
    'to_configmap',
    'ConfigMapTemplate',
    'render_configmap',
    'ValuePath',
    'Values',
]
