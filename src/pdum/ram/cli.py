"""CLI entry point for pdum_ram."""

import json
import os
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from pdum.ram import admin
from pdum.ram._console import set_verbose
from pdum.ram.types import (
    DEFAULT_ROLE_DESCRIPTION,
    FC_ASSUME_ROLE_POLICY,
    FNF_ASSUME_ROLE_POLICY,
    ProfileError,
    RamError,
)

app = typer.Typer(
    help="Idempotent provisioning of Alibaba Cloud RAM roles and policies",
    no_args_is_help=True,
)
console = Console()

_TRUST_PRESETS = {
    "fc": FC_ASSUME_ROLE_POLICY,
    "fnf": FNF_ASSUME_ROLE_POLICY,
}

_state = {"normalize": False}


@app.callback()
def main_options(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Profile file to read (default: ~/.fcli/config.yaml)",
        envvar="PDUM_RAM_CONFIG",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every RAM request and retry detail"),
    normalize: bool = typer.Option(
        False,
        "--normalize",
        help="Replace underscores with hyphens in role and policy names",
    ),
):
    """Global options."""
    if config is not None:
        os.environ["PDUM_RAM_CONFIG"] = str(config)
    set_verbose(verbose)
    _state["normalize"] = normalize


def _name(name: str) -> str:
    return admin.normalize_name(name) if _state["normalize"] else name


def _load_document(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise typer.BadParameter(f"Could not read policy document {path}: {e}") from e


def _run(action, *args, **kwargs):
    """Run an admin action, mapping package errors to exit codes."""
    try:
        return action(*args, **kwargs)
    except (RamError, ProfileError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        sys.exit(130)


@app.command("version")
def version():
    """Show the version of pdum_ram."""
    from pdum.ram import __version__

    console.print(f"pdum_ram version: [bold green]{__version__}[/bold green]")


@app.command("ensure-role")
def ensure_role(
    role_name: str = typer.Argument(..., help="The role name"),
    create: bool = typer.Option(True, "--create/--no-create", help="Create the role if it does not exist"),
    description: str = typer.Option(DEFAULT_ROLE_DESCRIPTION, "--description", "-d"),
    trust: Optional[str] = typer.Option(
        None,
        "--trust",
        "-t",
        help="Trust policy for a new role: 'fc', 'fnf' or a path to a JSON document (default: fc)",
    ),
):
    """
    Make sure a role exists, creating it if needed.

    Examples:
        pdum_ram ensure-role fc-default-role
        pdum_ram ensure-role flow-role --trust fnf
    """
    assume_role_policy = None
    if trust is not None:
        assume_role_policy = _TRUST_PRESETS.get(trust) or _load_document(Path(trust))

    role = _run(
        admin.ensure_role,
        _name(role_name),
        create_if_not_exist=create,
        description=description,
        assume_role_policy=assume_role_policy,
    )
    console.print(f"[green]Role ready:[/green] {role.role_name} {role.arn}")


@app.command("ensure-policy")
def ensure_policy(
    policy_name: str = typer.Argument(..., help="The custom policy name"),
    document: Path = typer.Argument(..., help="Path to the JSON policy document"),
):
    """Create or update a custom policy from a JSON document."""
    _run(admin.ensure_policy, _name(policy_name), _load_document(document))


@app.command("attach")
def attach(
    policy_name: str = typer.Argument(..., help="The policy name"),
    role_name: str = typer.Argument(..., help="The role name"),
    policy_type: str = typer.Option("System", "--type", help="System or Custom"),
):
    """Attach a policy to a role unless it is already attached."""
    try:
        _run(admin.ensure_attached, _name(policy_name), _name(role_name), policy_type)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@app.command("grant")
def grant(
    policy_name: str = typer.Argument(..., help="The custom policy name"),
    document: Path = typer.Argument(..., help="Path to the JSON policy document"),
    role_name: str = typer.Argument(..., help="The role to attach the policy to"),
):
    """Create or update a custom policy and attach it to a role."""
    _run(admin.grant, _name(policy_name), _load_document(document), _name(role_name))


@app.command("attached")
def attached(role_name: str = typer.Argument(..., help="The role name")):
    """List the policies attached to a role."""
    policies = _run(admin.list_attached_policies, _name(role_name))

    table = Table(title=f"Policies attached to {_name(role_name)}")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Description", style="dim")
    for policy in policies:
        table.add_row(policy.policy_name, policy.policy_type, policy.description)
    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
