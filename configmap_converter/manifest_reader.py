"""
Manifest Reader Module

Reads Kubernetes objects from multi-document YAML files.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .logging import logger

MANIFEST_SUFFIXES = ('.yaml', '.yml')


class ManifestReader:
    """Reads Kubernetes objects from manifest files and directories"""

    def __init__(self, paths: Iterable[Path]):
        self.paths = [Path(p) for p in paths]

    def manifest_files(self) -> List[Path]:
        """Resolve input paths to manifest files

        Directories contribute their *.yaml/*.yml files in sorted order.

        Raises:
            FileNotFoundError: an input path does not exist
        """
        files = []
        for path in self.paths:
            if not path.exists():
                raise FileNotFoundError(f"Manifest path not found: {path}")
            if path.is_dir():
                files.extend(sorted(p for p in path.iterdir()
                                    if p.is_file() and p.suffix in MANIFEST_SUFFIXES))
            else:
                files.append(path)
        return files

    def read_objects(self) -> List[Dict[str, Any]]:
        """Read all objects from the input manifests

        Empty documents are skipped and 'kind: List' objects are flattened
        into their items.
        """
        objects = []
        for manifest_file in self.manifest_files():
            with open(manifest_file, 'r') as f:
                documents = list(yaml.safe_load_all(f))
            for doc in documents:
                objects.extend(self._flatten(doc, manifest_file))
        return objects

    def _flatten(self, doc: Any, source: Path) -> List[Dict[str, Any]]:
        if doc is None:
            return []
        if not isinstance(doc, dict):
            logger.warning("Skipping non-mapping document in %s", source)
            return []
        if doc.get('kind') == 'List' and isinstance(doc.get('items'), list):
            items = []
            for item in doc['items']:
                items.extend(self._flatten(item, source))
            return items
        return [doc]
