"""
YAML helpers for template generation
"""
import re
from typing import Any

import yaml

from .value_path import Placeholder

# Keep long placeholder lines intact
YAML_WIDTH = 4096

PLACEHOLDER_TAG = '!placeholder'

# Only scalars tagged by placeholder_representer, i.e. values produced by the extractor
_TAGGED_PLACEHOLDER_RE = re.compile(r"(?<=: )!placeholder '((?:[^'\n]|'')*)'$", re.MULTILINE)


class CustomDumper(yaml.SafeDumper):
    """YAML dumper for generated templates

    Multiline strings become literal block scalars, strings that look like
    numbers or booleans are double quoted, and anchors/aliases are never emitted.
    """

    def ignore_aliases(self, data):
        return True


def str_representer(dumper, data):
    """Represent strings, using literal block scalar for multiline strings"""
    if '\n' in data:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='|')
    # Use double quotes for strings that look like numbers or booleans
    if data in ('True', 'False', 'true', 'false', 'yes', 'no', 'on', 'off'):
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='"')
    try:
        float(data)
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='"')
    except ValueError:
        pass
    return dumper.represent_scalar('tag:yaml.org,2002:str', data)


def placeholder_representer(dumper, data):
    """Tag placeholders so unquote_placeholders can tell them from user strings"""
    return dumper.represent_scalar(PLACEHOLDER_TAG, str(data), style="'")


CustomDumper.add_representer(str, str_representer)
CustomDumper.add_representer(Placeholder, placeholder_representer)


def dump_yaml(obj: Any) -> str:
    """Serialize obj to block-style YAML, keeping key order

    Raises:
        yaml.YAMLError: obj cannot be represented
    """
    return yaml.dump(obj, Dumper=CustomDumper,
                     default_flow_style=False,
                     sort_keys=False,
                     width=YAML_WIDTH,
                     allow_unicode=True)


def unquote_placeholders(text: str) -> str:
    """Emit extractor placeholders as plain scalars

    Unquoted references let Helm render numbers and booleans with their type.
    Quoted strings that merely look like placeholders are left alone.

    Examples:
        >>> unquote_placeholders("port: !placeholder '{{ .Values.managerConfig.port }}'")
        'port: {{ .Values.managerConfig.port }}'
    """
    return _TAGGED_PLACEHOLDER_RE.sub(lambda m: m.group(1).replace("''", "'"), text)


def indent(text: str, spaces: int) -> str:
    """Indent every non-empty line of text by the given number of spaces"""
    prefix = ' ' * spaces
    return '\n'.join(prefix + line if line else '' for line in text.split('\n'))
