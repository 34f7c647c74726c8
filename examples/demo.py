"""Walkthrough of tiergate: lookup -> check -> can_see -> role switching across two contexts."""

import json
import tempfile
from pathlib import Path

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from tiergate.auth.classifier import classify
from tiergate.auth.permissions import check
from tiergate.auth.registry import display_name, lookup
from tiergate.auth.scope import can_see
from tiergate.auth.tiers import approvers_for_action
from tiergate.core.broadcaster import RoleBroadcaster
from tiergate.models.policy import AccessContext, Actor, DataItem
from tiergate.models.role import Role
from tiergate.storage.sqlite_slot import SQLiteRoleSlot

console = Console()


def step_header(num: int, title: str) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold cyan]Step {num}:[/bold cyan] [yellow]{title}[/yellow]",
            border_style="cyan",
        )
    )


def display_json(data: dict | list, title: str | None = None) -> None:
    json_str = json.dumps(data, indent=2)
    console.print(Panel(JSON(json_str), title=title, border_style="green"))


def demo() -> None:
    step_header(1, "Look up a policy")
    policy = lookup(Role.BORROWER_CONTROLLER)
    display_json(policy.to_response(), title=display_name(policy.role))

    step_header(2, "Evaluate permissions")
    table = Table(title="borrower-controller on loan_application")
    table.add_column("Action", style="cyan")
    table.add_column("Context")
    table.add_column("Result", style="magenta")
    cases = [
        ("update", AccessContext(status="draft", amount=250_000)),
        ("update", AccessContext(status="draft", amount=2_500_000)),
        ("update", AccessContext(status="submitted", amount=250_000)),
        ("update", AccessContext(status="draft")),
        ("delete", AccessContext(status="draft", amount=1)),
    ]
    for action, ctx in cases:
        allowed = check(policy, "loan_application", action, ctx)
        table.add_row(
            action,
            json.dumps(ctx.model_dump(exclude_none=True)),
            "[green]allow[/green]" if allowed else "[red]deny[/red]",
        )
    console.print(table)

    step_header(3, "Resolve data visibility")
    actor = Actor(id="u-ana", team_id="finance")
    for item in (
        DataItem(owner_id="u-ben", team_id="finance"),
        DataItem(owner_id="u-cal", team_id="treasury"),
    ):
        visible = can_see(policy.data_access_scope, item, actor)
        console.print(f"  {item.owner_id}@{item.team_id}: {'visible' if visible else 'hidden'}")

    step_header(4, "Approval chains")
    console.print(f"  lender approvers for loan_approval_under_2m at $1.5M: "
                  f"{approvers_for_action('lender', 'loan_approval_under_2m', 1_500_000)}")
    console.print(f"  category of 'lender-risk-analyst': {classify('lender-risk-analyst')}")

    step_header(5, "Switch roles across two contexts")
    with tempfile.TemporaryDirectory() as tmp:
        db_path = Path(tmp) / "state.db"
        slot_a, slot_b = SQLiteRoleSlot(db_path), SQLiteRoleSlot(db_path)
        slot_a.initialize()
        slot_b.initialize()
        tab_a, tab_b = RoleBroadcaster(slot_a), RoleBroadcaster(slot_b)
        tab_b.subscribe(lambda old, new: console.print(f"  [tab b] {old} -> {new}"))
        tab_b.get_current()

        tab_a.set_current(Role.LENDER_UNDERWRITER)
        tab_b.sync()
        console.print(f"  tab b now sees: {tab_b.get_current()}")

        rejected = tab_a.set_current("lender-intern")
        console.print(f"  rejected: {rejected.error}")
        slot_a.close()
        slot_b.close()


if __name__ == "__main__":
    demo()
