"""Command line entry point for inspecting adapter output."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from kube_sections import __version__
from kube_sections.clients.static import StaticResourceAccessor
from kube_sections.config import LogLevel, SectionsConfig
from kube_sections.models.sections import ResourceSections
from kube_sections.registry import AdapterRegistry
from kube_sections.utils.errors import KubeSectionsError

logger = logging.getLogger(__name__)


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="kube-sections",
        description="Render Kubernetes resources into display sections",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to kubeconfig file (used with --live)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubeconfig context to use (used with --live)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("kinds", help="List supported resource kinds")

    describe = commands.add_parser("describe", help="Print the sections for resources in a file")
    describe.add_argument("file", type=Path, help="YAML file with one or more resources")
    describe.add_argument(
        "-n",
        "--namespace",
        default=None,
        help="Namespace for relationship lookups (default: each resource's own)",
    )
    describe.add_argument(
        "--resolve-related",
        action="store_true",
        help="Run deferred loaders and include their results",
    )
    describe.add_argument(
        "--live",
        action="store_true",
        help="Resolve related resources against the cluster instead of the file",
    )

    return parser.parse_args(argv)


def load_documents(path: Path) -> list[dict[str, Any]]:
    """Load every resource from a YAML file, expanding ``List`` documents."""
    with path.open(encoding="utf-8") as f:
        documents = [doc for doc in yaml.safe_load_all(f) if isinstance(doc, dict)]

    resources: list[dict[str, Any]] = []
    for doc in documents:
        if (doc.get("kind") or "").endswith("List") and isinstance(doc.get("items"), list):
            resources.extend(item for item in doc["items"] if isinstance(item, dict))
        else:
            resources.append(doc)
    return resources


async def render(
    sections: ResourceSections, resolve_related: bool
) -> list[dict[str, Any]]:
    """Serialize sections, optionally awaiting deferred loaders."""
    rendered = []
    for section in sections.sections:
        data = section.model_dump(mode="json")
        if section.deferred and resolve_related:
            items = await section.data.load()  # type: ignore[union-attr]
            data["data"]["items"] = [item.model_dump(mode="json") for item in items]
        rendered.append(data)
    return rendered


async def describe(
    registry: AdapterRegistry,
    resources: list[dict[str, Any]],
    namespace: str | None,
    resolve_related: bool,
) -> list[dict[str, Any]]:
    output = []
    for resource in resources:
        metadata = resource.get("metadata") or {}
        entry: dict[str, Any] = {
            "kind": resource.get("kind"),
            "name": metadata.get("name"),
            "namespace": metadata.get("namespace"),
        }
        sections = registry.adapt_resource(resource, namespace)
        if sections is None:
            entry["supported"] = False
        else:
            entry["supported"] = True
            entry["sections"] = await render(sections, resolve_related)
            entry["actions"] = [a.id for a in registry.get_resource_actions(resource)]
        output.append(entry)
    return output


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config_kwargs: dict[str, Any] = {}
    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)
    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig
    if args.context:
        config_kwargs["kubeconfig_context"] = args.context

    config = SectionsConfig(**config_kwargs)
    setup_logging(config.log_level)

    if args.command == "kinds":
        registry = AdapterRegistry.from_plugins(
            StaticResourceAccessor(), load_entrypoints=config.load_entrypoint_plugins
        )
        for kind in sorted(registry.get_supported_kinds()):
            print(kind)
        return 0

    try:
        resources = load_documents(args.file)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to read {args.file}: {e}")
        return 1

    if args.live:
        from kube_sections.clients.kubernetes import KubernetesResourceAccessor

        accessor: Any = KubernetesResourceAccessor(config)
    else:
        accessor = StaticResourceAccessor(resources)

    try:
        registry = AdapterRegistry.from_plugins(
            accessor, load_entrypoints=config.load_entrypoint_plugins
        )
        output = asyncio.run(describe(registry, resources, args.namespace, args.resolve_related))
    except KubeSectionsError as e:
        logger.error(f"{e}")
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
