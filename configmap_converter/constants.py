"""Constants for configmap-converter

Centralized location for hardcoded values to improve maintainability.
"""
import os

CONFIGMAP_CONVERTER_LOGLEVEL = os.environ.get("CONFIGMAP_CONVERTER_LOGLEVEL", "INFO").upper()

# Kubernetes ConfigMap identity
CONFIGMAP_GROUP = ''
CONFIGMAP_VERSION = 'v1'
CONFIGMAP_KIND = 'ConfigMap'

# Data key holding the embedded controller-runtime manager configuration
MANAGER_CONFIG_KEY = 'controller_manager_config.yaml'

# Root segment under which extracted manager config values are stored
MANAGER_CONFIG_VALUES_ROOT = 'managerConfig'

# Structural markers that are never turned into values
SKIPPED_KEYS = frozenset({'kind', 'apiVersion'})

# Conventional suffix of operator namespaces (e.g. my-operator-system)
NAMESPACE_SUFFIX = 'system'

# Tokens substituted into generated templates
NAME_TOKEN = '<NAME>'
CHART_NAME_TOKEN = '<CHART_NAME>'

# Indentation step of the data body under the template header
TEMPLATE_INDENT = 2
