"""
ConfigMap Processor

Turns a ConfigMap manifest into a Helm template. Values of the embedded
controller-runtime manager configuration are extracted into values.yaml and
replaced with references; every other data key is copied as-is.
"""
from typing import Any, Dict, Optional, Tuple

import yaml

from .constants import MANAGER_CONFIG_KEY, MANAGER_CONFIG_VALUES_ROOT
from .diagnostics import CONFIG_MARSHAL_FAILED, CONFIG_UNMARSHAL_FAILED, Diagnostics
from .errors import ConversionError
from .extractor import extract, has_string_keys, normalize_mapping
from .logging import logger
from .resource import CONFIGMAP_GVK, derive_name, gvk_of, to_configmap
from .template import ConfigMapTemplate, render_configmap
from .value_path import ValuePath
from .values import Values
from .yaml_utils import dump_yaml, unquote_placeholders


class ConfigMapProcessor:
    """Processor for v1 ConfigMap resources"""

    gvk = CONFIGMAP_GVK

    def __init__(self, config_key: str = MANAGER_CONFIG_KEY,
                 values_root: str = MANAGER_CONFIG_VALUES_ROOT):
        """Initialize ConfigMapProcessor

        Args:
            config_key: Data key holding the embedded YAML config to extract
            values_root: Top-level values key for the extracted config
        """
        self.config_key = config_key
        self.values_root = values_root

    def process(self, obj: Dict[str, Any]) -> Tuple[bool, Optional[ConfigMapTemplate]]:
        """Process a single Kubernetes object

        Args:
            obj: Object as loaded from a manifest

        Returns:
            (False, None) if obj is not a v1 ConfigMap, otherwise (True, template)

        Raises:
            ConversionError: obj is a ConfigMap but cannot be converted
        """
        if not isinstance(obj, dict) or gvk_of(obj) != self.gvk:
            return False, None

        try:
            configmap = to_configmap(obj)
        except ConversionError as e:
            raise ConversionError(f"unable to cast to configmap: {e.reason}", e.resource) from e

        metadata = configmap.metadata
        name = derive_name(metadata.name, metadata.namespace)
        logger.debug("Processing ConfigMap %s as template %s", metadata.name, name)

        diagnostics = Diagnostics()
        values = Values()
        data = configmap.data
        if data:
            data, values = self.parse_data(data, diagnostics)

        content = render_configmap(name, data)
        return True, ConfigMapTemplate(name, content, values, diagnostics)

    def parse_data(self, data: Dict[str, str],
                   diagnostics: Diagnostics) -> Tuple[Dict[str, str], Values]:
        """Extract values from the embedded config entry of ConfigMap data

        If the entry cannot be loaded or dumped as YAML it is kept as the
        original text and no values are returned.

        Args:
            data: ConfigMap data
            diagnostics: Sink for non-fatal anomalies

        Returns:
            Tuple of (new data, extracted values)
        """
        values = Values()
        config_text = data.get(self.config_key)
        if not config_text:
            return data, values

        try:
            config = yaml.safe_load(config_text)
        except yaml.YAMLError as e:
            diagnostics.warn(CONFIG_UNMARSHAL_FAILED, (),
                             f"unable to unmarshal {self.config_key}: {e}")
            return data, values

        if not isinstance(config, dict):
            diagnostics.warn(CONFIG_UNMARSHAL_FAILED, (),
                             f"unable to unmarshal {self.config_key}: "
                             f"expected a mapping, got {type(config).__name__}")
            return data, values
        if not has_string_keys(config):
            normalized = normalize_mapping(config)
            if normalized is None:
                diagnostics.warn(CONFIG_UNMARSHAL_FAILED, (),
                                 f"unable to unmarshal {self.config_key}: "
                                 f"mapping keys cannot be converted to strings")
                return data, values
            config = normalized

        config = extract(config, values, ValuePath([self.values_root]), diagnostics)

        try:
            config_text = unquote_placeholders(dump_yaml(config))
        except yaml.YAMLError as e:
            diagnostics.warn(CONFIG_MARSHAL_FAILED, (),
                             f"unable to marshal {self.config_key}: {e}")
            return data, Values()

        result = dict(data)
        result[self.config_key] = config_text
        return result, values
