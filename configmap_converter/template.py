"""
ConfigMap template assembly and the per-resource result handed to the chart
generator.
"""
from typing import Any, Dict, IO, Optional

from .constants import CHART_NAME_TOKEN, NAME_TOKEN, TEMPLATE_INDENT
from .diagnostics import Diagnostics
from .resource import CONFIGMAP_GVK, GroupVersionKind
from .values import Values
from .yaml_utils import dump_yaml, indent

CONFIGMAP_TEMPLATE = '''apiVersion: v1
kind: ConfigMap
metadata:
  name: {{ include "<CHART_NAME>.fullname" . }}-<NAME>
  labels:
  {{- include "<CHART_NAME>.labels" . | nindent 4 }}
data:
'''


def render_configmap(name: str, data: Optional[Dict[str, str]]) -> str:
    """Render the ConfigMap template body

    The <NAME> token is resolved here, <CHART_NAME> is left for write time.

    Args:
        name: Template basename
        data: ConfigMap data, already carrying value placeholders

    Returns:
        Template text
    """
    text = CONFIGMAP_TEMPLATE.replace(NAME_TOKEN, name)
    if not data:
        return text
    body = indent(dump_yaml(data), TEMPLATE_INDENT)
    return text + body.rstrip('\n ')


class ConfigMapTemplate:
    """Generated ConfigMap template plus the values it references"""

    def __init__(self, name: str, content: str, values: Values, diagnostics: Diagnostics = None):
        self.name = name
        self.content = content
        self.chart_name = None
        self._values = values
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    @property
    def filename(self) -> str:
        return self.name + '.yaml'

    @property
    def gvk(self) -> GroupVersionKind:
        return CONFIGMAP_GVK

    @property
    def values(self) -> Values:
        return self._values

    def set_chart_name(self, name: str) -> None:
        self.chart_name = name

    def render(self) -> str:
        """Return the template text with the chart name substituted

        Raises:
            ValueError: chart name has not been set
        """
        if not self.chart_name:
            raise ValueError(f"Chart name not set for template {self.filename}")
        return self.content.replace(CHART_NAME_TOKEN, self.chart_name)

    def write(self, writer: IO[str]) -> None:
        writer.write(self.render())

    def post_process(self, data: Any) -> None:
        """Hook called with chart-wide data once all resources are processed"""
        pass
