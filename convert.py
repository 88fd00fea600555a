#!/usr/bin/env python3
"""
ConfigMap to Helm Chart Converter

This script converts Kubernetes ConfigMap manifests into a Helm chart, moving
the settings of an embedded controller-runtime manager config into values.yaml.

Usage:
    python convert.py --input config/manager --chart-name my-operator --output charts/my-operator
    python convert.py --input manifests.yaml --chart-name my-operator --output charts/my-operator --dry-run

Arguments:
    --input: Manifest file(s) or directories to convert
    --chart-name: Name of the generated Helm chart
    --output: Output directory for the generated Helm chart (will not overwrite if exists)
    --force: Force overwrite if output directory exists
"""

import argparse
import sys
import traceback
from pathlib import Path

from configmap_converter.chart_generator import ChartGenerator
from configmap_converter.errors import ConversionError
from configmap_converter.logging import configure_logging
from configmap_converter.manifest_reader import ManifestReader


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert Kubernetes ConfigMap manifests to a Helm chart"
    )
    parser.add_argument(
        "--input",
        required=True,
        nargs="+",
        help="Manifest files or directories containing *.yaml manifests",
    )
    parser.add_argument(
        "--chart-name",
        required=True,
        help="Name of the generated Helm chart (e.g., my-operator)",
    )
    parser.add_argument(
        "--output",
        required=True,
        help="Output directory for the generated Helm chart (e.g., charts/my-operator)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Force overwrite if output directory exists",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode - show what would be generated without creating files",
    )
    parser.add_argument(
        "--log-config",
        help="Logging configuration file (.json, .yaml or ini format)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_config)

    inputs = [Path(p).resolve() for p in args.input]
    output_dir = Path(args.output).resolve()

    for path in inputs:
        if not path.exists():
            print(f"Error: Input path not found: {path}")
            sys.exit(1)

    if output_dir.exists() and not args.force and not args.dry_run:
        print(f"Error: Output directory already exists: {output_dir}")
        print("Use --force to overwrite or choose a different output directory")
        sys.exit(1)

    print("ConfigMap to Helm Chart Converter")
    print("=" * 60)
    print(f"Input: {', '.join(str(p) for p in inputs)}")
    print(f"Chart name: {args.chart_name}")
    print(f"Output directory: {output_dir}")
    print(f"Dry run: {args.dry_run}")
    print("=" * 60)
    print()

    try:
        print("[1/2] Reading Kubernetes manifests...")
        objects = ManifestReader(inputs).read_objects()
        print(f"  ✓ Read {len(objects)} objects")
        print()

        print("[2/2] Generating Helm chart...")
        chart_gen = ChartGenerator(args.chart_name, objects, output_dir)
        if args.dry_run:
            print("  (Dry run mode - not creating files)")
            chart_gen.show_plan()
        else:
            chart_gen.generate()
            print(f"  ✓ Generated {len(chart_gen.templates)} templates in {output_dir}/templates/")
            print("  ✓ Generated values.yaml")
        print()

        print("=" * 60)
        print("✓ Conversion completed successfully!")
        print(f"  Chart location: {output_dir}")
        if not args.dry_run:
            print("\nNext steps:")
            print(f"  1. Review generated templates: {output_dir}/templates/")
            print(f"  2. Review values.yaml: {output_dir}/values.yaml")
            print(f"  3. Test the chart: helm template {args.chart_name} {output_dir}")

    except ConversionError as e:
        print(f"\n✗ Error during conversion: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n✗ Error during conversion: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
