"""
Tests for ChartGenerator module
"""
import pytest
import yaml

from configmap_converter.chart_generator import ChartGenerator
from configmap_converter.errors import ConversionError

MANAGER_CONFIG_MAP = {
    'apiVersion': 'v1',
    'kind': 'ConfigMap',
    'metadata': {'name': 'my-operator-manager-config', 'namespace': 'my-operator-system'},
    'data': {
        'controller_manager_config.yaml': 'health:\n  healthProbeBindAddress: :8081\nwebhook:\n  port: 9443\n'
    },
}

SETTINGS_CONFIG_MAP = {
    'apiVersion': 'v1',
    'kind': 'ConfigMap',
    'metadata': {'name': 'my-operator-settings', 'namespace': 'my-operator-system'},
    'data': {'mode': 'fast'},
}

DEPLOYMENT = {
    'apiVersion': 'apps/v1',
    'kind': 'Deployment',
    'metadata': {'name': 'my-operator-controller-manager'},
}


class RecordingProcessor:
    """Processor claiming Deployments and recording post-processing data"""

    def __init__(self):
        self.seen = []

    def process(self, obj):
        if obj.get('kind') != 'Deployment':
            return False, None
        self.seen.append(obj)
        return True, None


class TestChartGenerator:
    """Test ChartGenerator functionality"""

    def test_process_collects_templates_and_values(self, tmp_path):
        generator = ChartGenerator('my-operator', [MANAGER_CONFIG_MAP, SETTINGS_CONFIG_MAP, DEPLOYMENT], tmp_path)
        templates = generator.process()

        assert [t.filename for t in templates] == ['manager-config.yaml', 'settings.yaml']
        assert all(t.chart_name == 'my-operator' for t in templates)
        assert generator.values == {
            'managerConfig': {'health': {'healthProbeBindAddress': ':8081'}, 'webhook': {'port': 9443}}
        }
        assert generator.skipped == [DEPLOYMENT]

    def test_first_claiming_processor_wins(self, tmp_path):
        recorder = RecordingProcessor()
        generator = ChartGenerator('c', [DEPLOYMENT], tmp_path, processors=[recorder])
        generator.process()

        assert recorder.seen == [DEPLOYMENT]
        assert generator.templates == []
        assert generator.skipped == []

    def test_generate_writes_chart(self, tmp_path):
        output_dir = tmp_path / 'chart'
        generator = ChartGenerator('my-operator', [MANAGER_CONFIG_MAP], output_dir)
        generator.generate()

        chart = yaml.safe_load((output_dir / 'Chart.yaml').read_text())
        assert chart['name'] == 'my-operator'
        assert chart['apiVersion'] == 'v2'

        helpers = (output_dir / 'templates' / '_helpers.tpl').read_text()
        assert 'define "my-operator.fullname"' in helpers
        assert 'define "my-operator.labels"' in helpers

        template = (output_dir / 'templates' / 'manager-config.yaml').read_text()
        assert '{{ include "my-operator.fullname" . }}-manager-config' in template
        assert 'port: {{ .Values.managerConfig.webhook.port }}' in template
        assert '<CHART_NAME>' not in template

        values_text = (output_dir / 'values.yaml').read_text()
        assert values_text.startswith('# Default values for my-operator')
        assert yaml.safe_load(values_text) == {
            'managerConfig': {'health': {'healthProbeBindAddress': ':8081'}, 'webhook': {'port': 9443}}
        }

    def test_generate_without_values(self, tmp_path):
        generator = ChartGenerator('c', [SETTINGS_CONFIG_MAP], tmp_path)
        generator.generate()

        assert yaml.safe_load((tmp_path / 'values.yaml').read_text()) is None
        assert (tmp_path / 'templates' / 'settings.yaml').exists()

    def test_conversion_error_propagates(self, tmp_path):
        broken = dict(SETTINGS_CONFIG_MAP, data={'replicas': 3})
        with pytest.raises(ConversionError):
            ChartGenerator('c', [broken], tmp_path).process()

    def test_show_plan(self, tmp_path, capsys):
        array_config_map = dict(MANAGER_CONFIG_MAP, data={'controller_manager_config.yaml': 'hosts: [a]\n'})
        generator = ChartGenerator('c', [array_config_map, DEPLOYMENT], tmp_path / 'chart')
        generator.show_plan()

        out = capsys.readouterr().out
        assert 'Would generate templates/manager-config.yaml' in out
        assert 'arrays not supported' in out
        assert 'Would skip 1 unsupported resources' in out
        assert not (tmp_path / 'chart').exists()
