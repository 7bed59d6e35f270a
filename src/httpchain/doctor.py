"""Diagnostic tool for verifying httpchain dependencies and transports."""

from importlib import import_module
from typing import Optional

from rich.console import Console
from rich.table import Table

from .models.config import DEFAULT_TRANSPORT_ORDER, ClientConfig
from .transports import create_transport

CORE_DEPENDENCIES = [
    ("requests", "requests"),
    ("urllib3", "urllib3"),
    ("charset_normalizer", "charset-normalizer"),
    ("pydantic", "pydantic"),
    ("rich", "rich"),
]

OPTIONAL_DEPENDENCIES = [
    ("yaml", "pyyaml"),
]


def check_dependency(
    module_name: str, package_name: Optional[str] = None, optional: bool = False
) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)
        optional: Whether this is an optional dependency

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        if optional:
            return False, f"[WARN] {display_name} (optional - not installed)"
        return False, f"[MISSING] {display_name}"


def check_transports(config: Optional[ClientConfig] = None) -> list[tuple[str, bool, bool]]:
    """
    Report which transports are available in this environment.

    Returns:
        (name, available, enabled) for every built-in transport, in
        default priority order
    """
    config = config or ClientConfig()
    results = []
    for name in DEFAULT_TRANSPORT_ORDER:
        transport = create_transport(name, config)
        results.append((name.value, transport.is_available(), name in config.transports))
    return results


def run_doctor(config: Optional[ClientConfig] = None, console: Optional[Console] = None) -> int:
    """
    Run diagnostic checks and display results.

    Returns:
        Exit code (0 if all core dependencies are present and at least one
        enabled transport is available, 1 otherwise)
    """
    console = console or Console()
    console.print("Running httpchain diagnostics...\n")

    deps_table = Table(title="Dependencies")
    deps_table.add_column("Package")
    deps_table.add_column("Status")

    core_ok = True
    for module_name, package_name in CORE_DEPENDENCIES:
        ok, message = check_dependency(module_name, package_name)
        core_ok = core_ok and ok
        deps_table.add_row(package_name, "[green]OK[/green]" if ok else f"[red]{message}[/red]")

    for module_name, package_name in OPTIONAL_DEPENDENCIES:
        ok, message = check_dependency(module_name, package_name, optional=True)
        deps_table.add_row(package_name, "[green]OK[/green]" if ok else f"[yellow]{message}[/yellow]")

    console.print(deps_table)

    transport_table = Table(title="Transports (priority order)")
    transport_table.add_column("Transport")
    transport_table.add_column("Available")
    transport_table.add_column("Enabled")

    usable = False
    for name, available, enabled in check_transports(config):
        usable = usable or (available and enabled)
        transport_table.add_row(
            name,
            "[green]yes[/green]" if available else "[red]no[/red]",
            "yes" if enabled else "[dim]no[/dim]",
        )

    console.print(transport_table)

    if not core_ok:
        console.print("\n[red]Some core dependencies are missing.[/red] Try: pip install --upgrade httpchain")
        return 1
    if not usable:
        console.print("\n[red]No enabled transport is available.[/red]")
        return 1

    console.print("\n[green]All checks passed.[/green]")
    return 0
