"""CLI commands for resolving and inspecting content versions."""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from ..adapters.memory_store import InMemoryVersionStore, StoreLoadError
from ..config.runtime import get_settings
from ..models.requests import ResolveRequest
from ..observability import configure_logging
from ..services.resolution_service import ResolutionService, UnitNotFoundError


def _parse_attributes(pairs: list[str] | None) -> dict[str, str] | None:
    """Turn ``key=value`` pairs into a dict; exits on malformed pairs."""
    if not pairs:
        return None
    attributes: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: attribute must be key=value, got {pair!r}", file=sys.stderr)
            sys.exit(2)
        attributes[key] = value
    return attributes


def _build_service(file_path: Path | None) -> ResolutionService:
    settings = get_settings()
    path = file_path if file_path is not None else Path(settings.store_path)
    try:
        store = InMemoryVersionStore.from_file(path)
    except StoreLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    return ResolutionService(store=store, settings=settings)


def _request_from_args(args: argparse.Namespace) -> ResolveRequest:
    """Build the request; exits on values the request model rejects."""
    attributes = _parse_attributes(args.attribute)
    try:
        return ResolveRequest(
            unit_id=args.unit_id,
            campaign=args.campaign,
            segment=args.segment,
            address_state=args.address_state,
            region=args.region,
            language=args.language,
            device=args.device,
            attributes=attributes,
            preview=args.preview,
            respect_active_window=False if args.ignore_window else None,
            now=args.now,
        )
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        print(f"Error: invalid request ({fields})", file=sys.stderr)
        sys.exit(2)


def _add_context_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("unit_id", help="Page slug or template id")
    parser.add_argument("--file", type=Path, default=None, help="Versions JSON file (default: settings store_path)")
    parser.add_argument("--campaign", default=None)
    parser.add_argument("--segment", default=None)
    parser.add_argument("--address-state", default=None, help="Visitor region code")
    parser.add_argument("--region", default=None)
    parser.add_argument("--language", default=None)
    parser.add_argument("--device", default=None)
    parser.add_argument("--attribute", action="append", help="Extra attribute as key=value (repeatable)")
    parser.add_argument("--preview", action="store_true", help="Include draft versions")
    parser.add_argument("--ignore-window", action="store_true", help="Ignore active_from/active_to")
    parser.add_argument("--now", default=None, help="ISO instant to resolve at")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Resolve targeted content versions")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve the version to render")
    _add_context_args(resolve_parser)

    explain_parser = subparsers.add_parser("explain", help="Show how each version scores")
    _add_context_args(explain_parser)

    list_parser = subparsers.add_parser("list", help="List versions of a unit")
    list_parser.add_argument("unit_id", help="Page slug or template id")
    list_parser.add_argument("--file", type=Path, default=None)
    list_parser.add_argument("--status", choices=["draft", "published"], default=None)

    subparsers.add_parser("serve", help="Run the MCP server over stdio")

    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)

    if args.command == "resolve":
        service = _build_service(args.file)
        response = service.resolve(_request_from_args(args))
        if response is None:
            print(json.dumps({"success": False, "error": "Page or version not found"}))
            return 1
        print(json.dumps({"success": True, "data": response.model_dump(mode="json")}, indent=2))
    elif args.command == "explain":
        service = _build_service(args.file)
        try:
            explained = service.explain(_request_from_args(args))
        except UnitNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(json.dumps(explained.model_dump(mode="json"), indent=2))
    elif args.command == "list":
        service = _build_service(args.file)
        try:
            versions = service.list_versions(args.unit_id, args.status)
        except UnitNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        for v in versions:
            flags = " default" if v.is_default else ""
            print(f"v{v.version}\t{v.status.value}\tpriority={v.priority}{flags}")
    elif args.command == "serve":
        from .mcp.server import run_server

        run_server()
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
