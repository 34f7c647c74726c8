"""CLI — roles, check, current, switch, verify."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tiergate.auth.classifier import classify
from tiergate.auth.permissions import check
from tiergate.auth.registry import ROLE_POLICIES, all_policies, display_name, lookup, verify_registry
from tiergate.config import Config
from tiergate.core.broadcaster import RoleBroadcaster
from tiergate.errors import InvalidRoleError, RegistryError
from tiergate.models.policy import AccessContext
from tiergate.storage.sqlite_slot import SQLiteRoleSlot


def _open_broadcaster(config: Config) -> RoleBroadcaster:
    slot = SQLiteRoleSlot(config.slot_db_path, key=config.slot_key, wal_mode=config.wal_mode)
    slot.initialize()
    return RoleBroadcaster(slot, default_role=config.fallback_role)


@click.group()
@click.version_option(package_name="tiergate")
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="State directory (defaults to ~/.tiergate or $TIERGATE_HOME)",
)
@click.pass_context
def main(ctx: click.Context, home: Path | None) -> None:
    """Tiergate — role and permission inspection."""
    config = Config.load(home.expanduser() if home else None)
    logging.basicConfig(level=config.log_level.upper())
    ctx.obj = config


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print policies as JSON")
def roles(as_json: bool) -> None:
    """List every role with its tier and data scope."""
    policies = all_policies()
    if as_json:
        click.echo(json.dumps([p.to_response() for p in policies], indent=2))
        return

    table = Table(title="Roles")
    table.add_column("Role", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="magenta")
    table.add_column("Tier", justify="right")
    table.add_column("Scope", style="green")
    table.add_column("Team")
    for policy in policies:
        table.add_row(
            policy.role.value,
            display_name(policy.role),
            classify(policy.role).value,
            str(policy.tier_level),
            policy.data_access_scope.value,
            "yes" if policy.can_manage_team else "",
        )
    Console().print(table)


@main.command(name="check")
@click.argument("role")
@click.argument("resource")
@click.argument("action")
@click.option("--owned/--not-owned", "ownership", default=None, help="Ownership of the record")
@click.option("--status", default=None, help="Workflow status of the record")
@click.option("--amount", type=float, default=None, help="Transaction amount")
def check_cmd(
    role: str,
    resource: str,
    action: str,
    ownership: bool | None,
    status: str | None,
    amount: float | None,
) -> None:
    """Evaluate one permission. Exits 0 when allowed, 1 when denied."""
    try:
        policy = lookup(role)
    except InvalidRoleError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    ctx = AccessContext(ownership=ownership, status=status, amount=amount)
    allowed = check(policy, resource, action, ctx)
    click.echo(f"{'ALLOW' if allowed else 'DENY'} {role} {action} {resource}")
    sys.exit(0 if allowed else 1)


@main.command()
@click.pass_obj
def current(config: Config) -> None:
    """Show the current role."""
    broadcaster = _open_broadcaster(config)
    try:
        role = broadcaster.get_current()
    finally:
        broadcaster.slot.close()
    click.echo(f"{role.value} ({display_name(role)})")


@main.command()
@click.argument("role")
@click.pass_obj
def switch(config: Config, role: str) -> None:
    """Switch the current role."""
    broadcaster = _open_broadcaster(config)
    try:
        result = broadcaster.set_current(role)
    finally:
        broadcaster.slot.close()

    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    Console().print(
        Panel(
            f"[green]✓[/green] Current role: {result.new_role.value}\n"
            f"Name: {display_name(result.new_role)}\n"
            f"Previous: {result.old_role.value if result.old_role else '-'}",
            title="Role Switched" if result.changed else "Role Unchanged",
        )
    )


@main.command()
def verify() -> None:
    """Check registry invariants."""
    try:
        verify_registry(ROLE_POLICIES)
    except RegistryError as e:
        click.echo(f"Registry invalid: {e}", err=True)
        sys.exit(1)
    click.echo(f"Registry OK: {len(ROLE_POLICIES)} roles")


if __name__ == "__main__":
    main()
