"""
Chart Generator Module

Runs processors over Kubernetes objects and writes the resulting Helm chart:
Chart.yaml, templates/_helpers.tpl, one template per processed resource and
values.yaml.
"""

from pathlib import Path
from typing import Any, Dict, List, Sequence

from .logging import logger
from .processor import ConfigMapProcessor
from .values import Values
from .yaml_utils import dump_yaml


def generate_header(chart_name: str) -> str:
    """Generate header comment for values.yaml."""
    return f"""# Default values for {chart_name}
# This is a YAML-formatted file.
# Declare variables to be passed into your templates.

# NOTE: This file was auto-generated from Kubernetes manifests.

"""


def print_keys(d: Dict[str, Any], indent: int = 0):
    """Print dictionary keys recursively for dry run output."""
    for key, value in d.items():
        if isinstance(value, dict):
            print(' ' * indent + f'- {key}:')
            print_keys(value, indent + 2)
        else:
            print(' ' * indent + f'- {key}: ...')


class ChartGenerator:
    """Generates Helm chart files from Kubernetes objects"""

    def __init__(self, chart_name: str, objects: List[Dict[str, Any]], output_dir: Path,
                 processors: Sequence = None):
        self.chart_name = chart_name
        self.objects = objects
        self.output_dir = Path(output_dir)
        self.templates_dir = self.output_dir / 'templates'
        self.processors = list(processors) if processors is not None else [ConfigMapProcessor()]
        self.templates = []
        self.skipped = []
        self.values = Values()

    def process(self) -> List[Any]:
        """Run every processor over every object and aggregate values

        The first processor that claims an object wins. Once all objects are
        processed each template gets the chart name and the merged values.

        Raises:
            ConversionError: a claimed object could not be converted
        """
        self.templates = []
        self.skipped = []
        self.values = Values()

        for obj in self.objects:
            for processor in self.processors:
                processed, template = processor.process(obj)
                if processed:
                    if template is not None:
                        self.templates.append(template)
                        self.values.merge(template.values)
                    break
            else:
                self.skipped.append(obj)
                logger.info("Skipping unsupported resource %s/%s",
                            obj.get('kind'), (obj.get('metadata') or {}).get('name'))

        for template in self.templates:
            template.set_chart_name(self.chart_name)
            template.post_process(self.values)

        return self.templates

    def generate(self):
        """Generate all Helm chart files"""
        self.process()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.templates_dir.mkdir(parents=True, exist_ok=True)

        self._write_file(self.output_dir / 'Chart.yaml', self.chart_yaml())
        self._write_file(self.templates_dir / '_helpers.tpl', self.helpers())

        for template in self.templates:
            with open(self.templates_dir / template.filename, 'w') as f:
                template.write(f)

        with open(self.output_dir / 'values.yaml', 'w') as f:
            f.write(generate_header(self.chart_name))
            if self.values:
                f.write(dump_yaml(dict(self.values)))

    def show_plan(self):
        """Show what would be generated (dry run)"""
        self.process()
        print("  Would generate Chart.yaml")
        print("  Would generate templates/_helpers.tpl")
        for template in self.templates:
            print(f"  Would generate templates/{template.filename}")
            for diagnostic in template.diagnostics:
                print(f"    ! {diagnostic.message} ({diagnostic.dotted_path or template.filename})")
        if self.skipped:
            print(f"  Would skip {len(self.skipped)} unsupported resources")
        print("\n  Sample values structure:")
        print_keys(self.values, indent=4)

    def chart_yaml(self) -> str:
        return f'''apiVersion: v2
name: {self.chart_name}
description: A Helm chart for Kubernetes
type: application
version: 0.1.0
appVersion: "0.1.0"
'''

    def helpers(self) -> str:
        chart_name = self.chart_name
        return f'''{{{{/*
Expand the name of the chart.
*/}}}}
{{{{- define "{chart_name}.name" -}}}}
{{{{- default .Chart.Name .Values.nameOverride | trunc 63 | trimSuffix "-" }}}}
{{{{- end }}}}

{{{{/*
Create a default fully qualified app name.
*/}}}}
{{{{- define "{chart_name}.fullname" -}}}}
{{{{- if .Values.fullnameOverride }}}}
{{{{- .Values.fullnameOverride | trunc 63 | trimSuffix "-" }}}}
{{{{- else }}}}
{{{{- $name := default .Chart.Name .Values.nameOverride }}}}
{{{{- if contains $name .Release.Name }}}}
{{{{- .Release.Name | trunc 63 | trimSuffix "-" }}}}
{{{{- else }}}}
{{{{- printf "%s-%s" .Release.Name $name | trunc 63 | trimSuffix "-" }}}}
{{{{- end }}}}
{{{{- end }}}}
{{{{- end }}}}

{{{{/*
Create chart name and version as used by the chart label.
*/}}}}
{{{{- define "{chart_name}.chart" -}}}}
{{{{- printf "%s-%s" .Chart.Name .Chart.Version | replace "+" "_" | trunc 63 | trimSuffix "-" }}}}
{{{{- end }}}}

{{{{/*
Common labels
*/}}}}
{{{{- define "{chart_name}.labels" -}}}}
helm.sh/chart: {{{{ include "{chart_name}.chart" . }}}}
{{{{ include "{chart_name}.selectorLabels" . }}}}
{{{{- if .Chart.AppVersion }}}}
app.kubernetes.io/version: {{{{ .Chart.AppVersion | quote }}}}
{{{{- end }}}}
app.kubernetes.io/managed-by: {{{{ .Release.Service }}}}
{{{{- end }}}}

{{{{/*
Selector labels
*/}}}}
{{{{- define "{chart_name}.selectorLabels" -}}}}
app.kubernetes.io/name: {{{{ include "{chart_name}.name" . }}}}
app.kubernetes.io/instance: {{{{ .Release.Name }}}}
{{{{- end }}}}
'''

    def _write_file(self, path: Path, content: str) -> None:
        with open(path, 'w') as f:
            f.write(content)
