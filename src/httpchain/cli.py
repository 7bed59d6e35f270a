"""Command-line interface for httpchain."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from . import __version__
from .http.client import HttpClient
from .listeners import EventDispatcher, RequestLoggingListener, ResponseLoggingListener
from .logging_config import setup_logging
from .models.config import ClientConfig, TransportName
from .models.message import HttpEntity, HttpMethod, HttpRequest


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="httpchain",
        description="Execute an HTTP request through the first available transport",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Simple GET
  httpchain https://example.com

  # Show status line and headers too
  httpchain -i https://example.com

  # POST a JSON body
  httpchain -X POST -H "Content-Type: application/json" -d '{"a": 1}' https://httpbin.org/post

  # Only use the socket transport
  httpchain --transport socket http://example.com

  # Check which transports work here
  httpchain --doctor
        """,
    )

    parser.add_argument(
        "url",
        nargs="?",
        help="URL to request",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )

    # Request
    request_group = parser.add_argument_group("request")
    request_group.add_argument(
        "--request",
        "-X",
        dest="method",
        choices=[method.value for method in HttpMethod],
        type=str.upper,
        default=None,
        help="HTTP method (default: GET, or POST with --data)",
    )
    request_group.add_argument(
        "--header",
        "-H",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Request header (repeatable)",
    )
    request_group.add_argument(
        "--data",
        "-d",
        type=str,
        default=None,
        help="Request body",
    )

    # Transport settings
    transport_group = parser.add_argument_group("transport settings")
    transport_group.add_argument(
        "--transport",
        "-t",
        action="append",
        choices=[name.value for name in TransportName],
        default=None,
        help="Transport to try, in order (repeatable; default: all)",
    )
    transport_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Read timeout in seconds (default: 5)",
    )
    transport_group.add_argument(
        "--user-agent",
        "-A",
        type=str,
        default=None,
        help="Custom User-Agent string",
    )
    transport_group.add_argument(
        "--no-decode",
        action="store_true",
        help="Leave transfer and content coding in place",
    )
    transport_group.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML config file",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--include",
        "-i",
        action="store_true",
        help="Print status and headers before the body",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress everything but the body",
    )

    return parser


def parse_header(raw: str) -> tuple[str, str]:
    """Split a 'Name: value' command-line header."""
    name, found, value = raw.partition(":")
    if not found or not name.strip():
        raise ValueError(f"Invalid header (expected 'Name: value'): {raw}")
    return name.strip(), value.strip()


def build_config(args: argparse.Namespace) -> ClientConfig:
    """Merge the config file (if any) with command-line overrides."""
    config_kwargs: dict = {}
    if args.config:
        config_kwargs = ClientConfig.from_yaml_file(args.config).model_dump()

    if args.transport:
        config_kwargs["transports"] = args.transport
    if args.timeout is not None:
        config_kwargs["read_timeout"] = args.timeout
    if args.user_agent:
        config_kwargs["user_agent"] = args.user_agent
    if args.no_decode:
        config_kwargs["decode_transfer_encoding"] = False
        config_kwargs["decode_content_encoding"] = False

    # Log level
    if args.verbose:
        config_kwargs["log_level"] = "DEBUG"
    elif args.quiet:
        config_kwargs["log_level"] = "ERROR"

    return ClientConfig.model_validate(config_kwargs)


def build_request(args: argparse.Namespace) -> HttpRequest:
    """Build the request described by the command-line arguments."""
    headers = dict(parse_header(raw) for raw in args.header)
    entity = None
    if args.data is not None:
        content_type = next((v for k, v in headers.items() if k.lower() == "content-type"), None)
        entity = HttpEntity(args.data, content_type or "application/x-www-form-urlencoded")

    method = args.method or ("POST" if entity is not None else "GET")
    return HttpRequest(method, args.url, headers=headers, entity=entity)


def run_request(args: argparse.Namespace) -> int:
    """Run a single request with given arguments."""
    console = Console()
    err_console = Console(stderr=True)

    if not args.url:
        err_console.print("[red]Error:[/red] Please provide a URL to request")
        return 1

    try:
        config = build_config(args)
        request = build_request(args)
    except Exception as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    logger = setup_logging(level=config.log_level, log_file=config.log_file)
    emit = EventDispatcher(RequestLoggingListener(logger), ResponseLoggingListener(logger))
    client = HttpClient.from_config(config, emit=emit, logger=logger)

    try:
        response = client.execute(request)
    except RuntimeError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    if args.include:
        console.print(f"[bold]HTTP {response.status_code}[/bold]", highlight=False)
        for name, value in response.get_all_headers().items():
            console.print(f"[cyan]{name}[/cyan]: {value}", highlight=False)
        console.print()

    if response.entity is not None and response.entity.content:
        sys.stdout.write(response.entity.text)
        sys.stdout.flush()

    return 0 if response.status_code < 400 else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.doctor:
        from .doctor import run_doctor

        try:
            config = build_config(args)
        except Exception as e:
            Console(stderr=True).print(f"[red]Configuration error:[/red] {e}")
            return 1
        return run_doctor(config)

    return run_request(args)


if __name__ == "__main__":
    sys.exit(main())
