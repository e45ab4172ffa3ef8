#!/usr/bin/env python3
"""
siteop CLI - Declarative management of Netlify sites.

Reads resource declarations from YAML/JSON files, reconciles them against
the Netlify API and keeps tracked state in a local JSON file.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List

import click
import yaml
from tabulate import tabulate

from config import LoggingConfig, NetlifyConfig, StateConfig
from controller import Controller
from netlify_api.client import NetlifyClient
from plugins.registry import get_registry, register_builtin_plugins
from state import StateError, StateStore
from validation import validate_attributes


def load_declarations(filename: str) -> List[Dict[str, Any]]:
    """
    Load resource declarations from a file.

    The file holds a ``resources`` list whose entries have ``name``,
    ``type`` and ``spec`` keys.
    """
    with open(filename, "r") as f:
        if filename.endswith(".yaml") or filename.endswith(".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, dict) or not isinstance(data.get("resources"), list):
        raise click.ClickException(f"{filename}: expected a 'resources' list")

    resources = []
    for i, entry in enumerate(data["resources"]):
        if not isinstance(entry, dict) or "name" not in entry or "type" not in entry:
            raise click.ClickException(
                f"{filename}: resource #{i} must have 'name' and 'type'"
            )
        resources.append(
            {
                "name": entry["name"],
                "type": entry["type"],
                "spec": entry.get("spec") or {},
            }
        )
    return resources


def _open_state(ctx: click.Context) -> StateStore:
    try:
        return StateStore(ctx.obj["state_file"])
    except StateError as e:
        raise click.ClickException(str(e))


def _make_controller(ctx: click.Context) -> Controller:
    try:
        netlify_config = NetlifyConfig.from_env()
    except ValueError as e:
        raise click.ClickException(str(e))

    client = NetlifyClient(
        api_token=netlify_config.api_token,
        api_base_url=netlify_config.api_base_url,
        timeout=netlify_config.timeout,
    )
    return Controller(client=client, state=_open_state(ctx), registry=get_registry())


def _report(result) -> None:
    if result.success:
        click.echo(result.message)
    else:
        click.echo(f"Error: {result.message}", err=True)


@click.group()
@click.option(
    "--state",
    "state_file",
    default=None,
    help="Path to the state file (default: $SITEOP_STATE_FILE).",
)
@click.pass_context
def cli(ctx, state_file):
    """siteop - declarative Netlify site management"""
    logging_config = LoggingConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, logging_config.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    register_builtin_plugins()

    ctx.ensure_object(dict)
    ctx.obj["state_file"] = state_file or StateConfig.from_env().state_file


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@click.pass_context
def validate(ctx, filename):
    """Validate declarations in a YAML/JSON file"""
    registry = get_registry()
    failed = False

    for resource in load_declarations(filename):
        reconciler = registry.get_reconciler_for_resource_type(resource["type"])
        if reconciler is None:
            click.echo(f"{resource['name']}: unknown type {resource['type']}", err=True)
            failed = True
            continue

        is_valid, error = validate_attributes(resource["spec"], reconciler.schema)
        if is_valid:
            click.echo(f"{resource['name']}: valid")
        else:
            click.echo(f"{resource['name']}: {error}", err=True)
            failed = True

    if failed:
        sys.exit(1)


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@click.pass_context
def apply(ctx, filename):
    """Create or update resources declared in a YAML/JSON file"""
    resources = load_declarations(filename)
    controller = _make_controller(ctx)
    failed = False

    for resource in resources:
        result = asyncio.run(
            controller.apply(resource["name"], resource["type"], resource["spec"])
        )
        _report(result)
        failed = failed or not result.success

    if failed:
        sys.exit(1)


@cli.command()
@click.pass_context
def refresh(ctx):
    """Re-read every tracked resource from the API"""
    controller = _make_controller(ctx)
    failed = False

    for name in controller.state.list():
        result = asyncio.run(controller.refresh(name))
        _report(result)
        failed = failed or not result.success

    if failed:
        sys.exit(1)


@cli.command()
@click.option(
    "--output", "-o", type=click.Choice(["table", "json", "yaml"]), default="table"
)
@click.pass_context
def show(ctx, output):
    """Show tracked state"""
    store = _open_state(ctx)
    entries = {}
    for name in store.list():
        resource_type, data = store.get(name)
        entries[name] = {"type": resource_type, "id": data.id, **data.attributes}

    if output == "json":
        click.echo(json.dumps(entries, indent=2))
    elif output == "yaml":
        click.echo(yaml.dump(entries, default_flow_style=False))
    else:
        headers = ["Name", "Type", "ID", "Site Name", "Account", "Deploy URL", "Repo"]
        rows = []
        for name, entry in entries.items():
            repo = entry.get("repo")
            rows.append(
                [
                    name,
                    entry["type"],
                    entry["id"],
                    entry.get("name", ""),
                    entry.get("account_slug", ""),
                    entry.get("deploy_url", ""),
                    f"{repo['repo_path']}@{repo['repo_branch']}" if repo else "-",
                ]
            )
        click.echo(tabulate(rows, headers=headers, tablefmt="grid"))


@cli.command(name="import")
@click.argument("name")
@click.argument("resource_id")
@click.option("--type", "resource_type", default="netlify_site", show_default=True)
@click.pass_context
def import_(ctx, name, resource_id, resource_type):
    """Track an existing remote object under NAME"""
    controller = _make_controller(ctx)
    result = asyncio.run(controller.import_resource(name, resource_type, resource_id))
    _report(result)
    if not result.success:
        sys.exit(1)


@cli.command()
@click.argument("name")
@click.confirmation_option(prompt="Are you sure you want to delete this resource?")
@click.pass_context
def destroy(ctx, name):
    """Delete a tracked resource"""
    controller = _make_controller(ctx)
    result = asyncio.run(controller.destroy(name))
    _report(result)
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    cli()
