"""
Tests for ConfigMapProcessor
"""
import io

import pytest
import yaml

from configmap_converter.diagnostics import (
    ARRAY_UNSUPPORTED,
    CONFIG_UNMARSHAL_FAILED,
    Diagnostics,
)
from configmap_converter.errors import ConversionError
from configmap_converter.processor import ConfigMapProcessor


def make_configmap(data, name='my-operator-manager-config', namespace='my-operator-system'):
    return {
        'apiVersion': 'v1',
        'kind': 'ConfigMap',
        'metadata': {'name': name, 'namespace': namespace},
        'data': data,
    }


MANAGER_CONFIG = '''apiVersion: controller-runtime.sigs.k8s.io/v1alpha1
kind: ControllerManagerConfig
health:
  healthProbeBindAddress: :8081
metrics:
  bindAddress: 127.0.0.1:8080
webhook:
  port: 9443
leaderElection:
  leaderElect: true
  resourceName: 3a2e09e9.example.com
'''


class TestConfigMapProcessor:
    """Test ConfigMapProcessor.process"""

    def test_end_to_end(self):
        obj = make_configmap({'controller_manager_config.yaml': 'health: {healthProbeBindAddress: ":8081"}'})
        processed, template = ConfigMapProcessor().process(obj)

        assert processed is True
        assert template.filename == 'manager-config.yaml'
        assert template.values == {
            'managerConfig': {'health': {'healthProbeBindAddress': ':8081'}}
        }
        assert template.content == (
            'apiVersion: v1\n'
            'kind: ConfigMap\n'
            'metadata:\n'
            '  name: {{ include "<CHART_NAME>.fullname" . }}-manager-config\n'
            '  labels:\n'
            '  {{- include "<CHART_NAME>.labels" . | nindent 4 }}\n'
            'data:\n'
            '  controller_manager_config.yaml: |\n'
            '    health:\n'
            '      healthProbeBindAddress: {{ .Values.managerConfig.health.healthProbeBindAddress }}'
        )

    def test_full_manager_config(self):
        obj = make_configmap({'controller_manager_config.yaml': MANAGER_CONFIG})
        _, template = ConfigMapProcessor().process(obj)

        assert template.values == {
            'managerConfig': {
                'health': {'healthProbeBindAddress': ':8081'},
                'metrics': {'bindAddress': '127.0.0.1:8080'},
                'webhook': {'port': 9443},
                'leaderElection': {'leaderElect': True, 'resourceName': '3a2e09e9.example.com'},
            }
        }
        assert 'apiVersion: controller-runtime.sigs.k8s.io/v1alpha1' in template.content
        assert 'kind: ControllerManagerConfig' in template.content
        assert 'port: {{ .Values.managerConfig.webhook.port }}' in template.content
        assert 'leaderElect: {{ .Values.managerConfig.leaderElection.leaderElect }}' in template.content

    def test_other_data_keys_pass_through(self):
        obj = make_configmap({
            'controller_manager_config.yaml': 'webhook: {port: 9443}',
            'extra.properties': 'a=b',
        })
        _, template = ConfigMapProcessor().process(obj)

        assert '  extra.properties: a=b' in template.content
        assert template.values == {'managerConfig': {'webhook': {'port': 9443}}}

    def test_configmap_without_manager_config(self):
        obj = make_configmap({'key': 'value'}, name='settings', namespace='default')
        _, template = ConfigMapProcessor().process(obj)

        assert template.filename == 'settings.yaml'
        assert template.values == {}
        assert template.content.endswith('data:\n  key: value')

    def test_configmap_without_data(self):
        obj = make_configmap(None)
        _, template = ConfigMapProcessor().process(obj)

        assert template.values == {}
        assert template.content.endswith('data:\n')

    def test_not_applicable(self):
        deployment = {'apiVersion': 'apps/v1', 'kind': 'Deployment', 'metadata': {'name': 'x'}}
        assert ConfigMapProcessor().process(deployment) == (False, None)

    def test_wrong_version_not_applicable(self):
        obj = make_configmap({'a': 'b'})
        obj['apiVersion'] = 'v2'
        assert ConfigMapProcessor().process(obj) == (False, None)

    def test_malformed_configmap_raises(self):
        obj = make_configmap({'port': 8080})
        with pytest.raises(ConversionError) as exc_info:
            ConfigMapProcessor().process(obj)
        assert 'unable to cast to configmap' in str(exc_info.value)

    def test_invalid_manager_config_kept_as_is(self):
        broken = 'health: [unclosed'
        obj = make_configmap({'controller_manager_config.yaml': broken})
        _, template = ConfigMapProcessor().process(obj)

        assert template.values == {}
        assert '  controller_manager_config.yaml: \'health: [unclosed\'' in template.content
        assert [d.reason for d in template.diagnostics] == [CONFIG_UNMARSHAL_FAILED]

    def test_non_mapping_manager_config_kept_as_is(self):
        obj = make_configmap({'controller_manager_config.yaml': '- a\n- b\n'})
        _, template = ConfigMapProcessor().process(obj)

        assert template.values == {}
        assert template.diagnostics.by_reason(CONFIG_UNMARSHAL_FAILED)

    def test_arrays_reported_and_kept(self):
        config = 'hosts:\n- a\n- b\nport: 80\n'
        obj = make_configmap({'controller_manager_config.yaml': config})
        _, template = ConfigMapProcessor().process(obj)

        assert template.values == {'managerConfig': {'port': 80}}
        assert [d.reason for d in template.diagnostics] == [ARRAY_UNSUPPORTED]
        assert '    hosts:\n    - a\n    - b\n' in template.content

    def test_quoted_reference_in_array_kept_verbatim(self):
        config = "hosts:\n- '{{ .Values.x }}'\nport: 80\n"
        obj = make_configmap({'controller_manager_config.yaml': config})
        _, template = ConfigMapProcessor().process(obj)

        assert "    hosts:\n    - '{{ .Values.x }}'\n" in template.content
        assert 'port: {{ .Values.managerConfig.port }}' in template.content
        assert [d.reason for d in template.diagnostics] == [ARRAY_UNSUPPORTED]

    def test_structural_keys_keep_quotes(self):
        config = "kind: '{{ .Values.kind }}'\nport: 80\n"
        obj = make_configmap({'controller_manager_config.yaml': config})
        _, template = ConfigMapProcessor().process(obj)

        assert "kind: '{{ .Values.kind }}'" in template.content

    def test_block_scalar_number_stays_text(self):
        """A number followed by a newline is not an integer"""
        obj = make_configmap({'controller_manager_config.yaml': 'limit: |\n  5\n'})
        _, template = ConfigMapProcessor().process(obj)

        assert template.values == {'managerConfig': {'limit': '5\n'}}

    def test_custom_key_and_root(self):
        obj = make_configmap({'app.yaml': 'timeout: "30"'})
        processor = ConfigMapProcessor(config_key='app.yaml', values_root='appConfig')
        _, template = processor.process(obj)

        assert template.values == {'appConfig': {'timeout': 30}}
        assert 'timeout: {{ .Values.appConfig.timeout }}' in template.content

    def test_write_renders_chart_name(self):
        obj = make_configmap({'controller_manager_config.yaml': 'webhook: {port: 9443}'})
        _, template = ConfigMapProcessor().process(obj)
        template.set_chart_name('my-operator')
        out = io.StringIO()
        template.write(out)

        assert out.getvalue().startswith('apiVersion: v1\nkind: ConfigMap\n')
        assert '{{ include "my-operator.fullname" . }}-manager-config' in out.getvalue()

    def test_rendered_data_loads_back(self):
        """The data section stays valid YAML once placeholders are rendered"""
        obj = make_configmap({'controller_manager_config.yaml': MANAGER_CONFIG})
        _, template = ConfigMapProcessor().process(obj)

        body = template.content.split('data:\n', 1)[1]
        data = yaml.safe_load(body)
        config_text = data['controller_manager_config.yaml']
        rendered = config_text.replace(
            '{{ .Values.managerConfig.webhook.port }}', '9443'
        )
        assert 'port: 9443' in rendered


class TestParseData:
    """Test ConfigMapProcessor.parse_data"""

    def test_input_data_not_mutated(self):
        data = {'controller_manager_config.yaml': 'webhook: {port: 9443}'}
        original = dict(data)
        new_data, values = ConfigMapProcessor().parse_data(data, Diagnostics())

        assert data == original
        assert new_data['controller_manager_config.yaml'] == \
            'webhook:\n  port: {{ .Values.managerConfig.webhook.port }}\n'
        assert values == {'managerConfig': {'webhook': {'port': 9443}}}

    def test_empty_manager_config(self):
        data = {'controller_manager_config.yaml': ''}
        new_data, values = ConfigMapProcessor().parse_data(data, Diagnostics())
        assert new_data == data
        assert values == {}
