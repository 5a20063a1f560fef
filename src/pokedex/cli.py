"""CLI entrypoint for the Pokédex read service."""

import argparse
import json
import sys
from pathlib import Path

from pokedex.api.pokemon_api import get_pokemon_detail, list_pokemon
from pokedex.config.loader import get_section, load_config
from pokedex.errors import PokedexError
from pokedex.service import PokedexService
from pokedex.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _build_service(args: argparse.Namespace) -> PokedexService:
    return PokedexService.from_config(args.config_data)


def cmd_list(args: argparse.Namespace) -> None:
    """Print one list page."""
    service = _build_service(args)
    page = list_pokemon(service, limit=args.limit, offset=args.offset, search=args.search, type=args.type)

    if args.format == "json":
        print(page.model_dump_json(by_alias=True, indent=2))
        return

    print(f"{'ID':<6} {'Name':<24} {'Types':<30}")
    print("-" * 60)
    for item in page.pokemon:
        print(f"{item.id:<6} {item.name:<24} {', '.join(item.types):<30}")
    print(f"\n{len(page.pokemon)} shown, {page.total_count} matching by name")


def cmd_show(args: argparse.Namespace) -> None:
    """Print the detail view for one Pokémon."""
    service = _build_service(args)
    detail = get_pokemon_detail(service, args.name)

    if args.format == "json":
        print(detail.model_dump_json(by_alias=True, indent=2))
        return

    print(f"#{detail.id} {detail.name}")
    print(f"Types:   {', '.join(detail.types)}")
    print(f"Height:  {detail.height} m")
    print(f"Weight:  {detail.weight} kg")
    print("Stats:")
    for stat in detail.stats:
        print(f"  {stat.name:<18} {stat.value}")
    abilities = [f"{a.name} (hidden)" if a.is_hidden else a.name for a in detail.abilities]
    print(f"Abilities: {', '.join(abilities)}")
    print(f"\n{detail.description}\n")
    if detail.evolution_chain:
        print("Evolution: " + " -> ".join(stage.name for stage in detail.evolution_chain))
    else:
        print("Evolution: unavailable")


def cmd_cache_status(args: argparse.Namespace) -> None:
    """Warm the name index and print cache state."""
    service = _build_service(args)
    service.cache.get_index()
    print(json.dumps(service.cache.status(), indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the HTTP server."""
    import uvicorn

    from pokedex.server import create_app

    server_cfg = get_section(args.config_data, "server")
    host = args.host or server_cfg["host"]
    port = args.port or int(server_cfg["port"])
    logger.info(f"Serving Pokédex API on http://{host}:{port}")
    uvicorn.run(create_app(config=args.config_data), host=host, port=port)


def main(argv=None) -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="pokedex",
        description="Cached read API over the PokeAPI catalog",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: pokedex.config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override logging level (DEBUG, INFO, WARNING, ...)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list command
    list_parser = subparsers.add_parser("list", help="List Pokémon with search/type filters")
    list_parser.add_argument("--limit", type=str, default=None, help="Page size (default: 20)")
    list_parser.add_argument("--offset", type=str, default=None, help="Page offset (default: 0)")
    list_parser.add_argument("--search", type=str, default=None, help="Name substring")
    list_parser.add_argument("--type", type=str, default=None, help="Type filter (applied to the page)")
    list_parser.add_argument("--format", type=str, choices=["json", "text"], default="text", help="Output format")
    list_parser.set_defaults(func=cmd_list)

    # show command
    show_parser = subparsers.add_parser("show", help="Show one Pokémon's details")
    show_parser.add_argument("name", type=str, help="Pokémon name or ID")
    show_parser.add_argument("--format", type=str, choices=["json", "text"], default="text", help="Output format")
    show_parser.set_defaults(func=cmd_show)

    # cache commands
    cache_parser = subparsers.add_parser("cache", help="Name index cache utilities")
    cache_subparsers = cache_parser.add_subparsers(
        dest="cache_subcommand",
        help="Cache subcommands",
        required=True,
    )
    cache_status_parser = cache_subparsers.add_parser("status", help="Fetch the index and print cache state")
    cache_status_parser.set_defaults(func=cmd_cache_status)

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind host")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    args.config_data = load_config(args.config)
    configure_logging(args.log_level or get_section(args.config_data, "logging")["level"])

    try:
        args.func(args)
    except PokedexError as e:
        logger.error(f"Error running command '{args.command}': {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
