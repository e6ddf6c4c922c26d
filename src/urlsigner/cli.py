"""urlsigner CLI - sign and verify URLs from the shell."""

import json
import sys
import tomllib
from pathlib import Path
from typing import Any, cast

import click
from rich.console import Console
from rich.table import Table

from urlsigner.common.errors import SignerConfigError
from urlsigner.common.logging import setup_logging
from urlsigner.common.settings import Settings
from urlsigner.gateway.verifier import Verifier
from urlsigner.signer.config import SignerConfig, as_words
from urlsigner.signer.resolver import MappingResolver
from urlsigner.signer.signer import SignedUrl, Signer

console = Console()


def _load_config(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    config_path = Path(path).expanduser()
    if not config_path.exists():
        console.print(f"[red]Config not found: {config_path}[/red]")
        sys.exit(1)

    raw = config_path.read_bytes()
    if config_path.suffix.lower() == ".toml":
        data = tomllib.loads(raw.decode("utf-8"))
    else:
        data = json.loads(raw.decode("utf-8"))

    if isinstance(data, dict) and isinstance(data.get("signer"), dict):
        return cast(dict[str, Any], data["signer"])
    return cast(dict[str, Any], data) if isinstance(data, dict) else {}


def _parse_params(values: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got {item!r}", param_hint="--param")
        params[key] = value
    return params


def _load_catalog(path: str | None) -> MappingResolver | None:
    if not path:
        return None
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise click.BadParameter(
            "Catalog must be a JSON object of id -> path", param_hint="--catalog"
        )
    try:
        return MappingResolver({int(key): str(value) for key, value in data.items()})
    except ValueError as exc:
        raise click.BadParameter(
            f"Catalog ids must be integers: {exc}", param_hint="--catalog"
        ) from exc


def _build_config(ctx: click.Context) -> SignerConfig:
    try:
        return SignerConfig(
            base_url=ctx.obj["base_url"],
            secret=ctx.obj["secret"],
            resource_base=ctx.obj["resource_base"],
            param_name=ctx.obj["param_name"],
            use_timestamp=ctx.obj["use_timestamp"],
            strip_words=ctx.obj["strip_words"],
        )
    except SignerConfigError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        sys.exit(1)


@click.group()
@click.option("--base-url", default=None, help="Base URL prepended to signed paths")
@click.option("--secret", default=None, help="Shared HMAC secret")
@click.option("--resource-base", default=None, help="Path prefix applied before signing")
@click.option("--param-name", default=None, help="Query parameter carrying the token")
@click.option(
    "--timestamp/--no-timestamp",
    "use_timestamp",
    default=None,
    help="Mix the current time into the token",
)
@click.option(
    "--config",
    type=click.Path(exists=False, dir_okay=False),
    help="Path to config (JSON or TOML with optional [signer] section)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: str | None,
    secret: str | None,
    resource_base: str | None,
    param_name: str | None,
    use_timestamp: bool | None,
    config: str | None,
) -> None:
    """urlsigner CLI - Generate and check HMAC signed URLs."""
    settings = Settings()
    setup_logging(settings.log_level, settings.log_json)
    config_data = _load_config(config)

    if use_timestamp is None:
        use_timestamp = bool(config_data.get("use_timestamp", settings.use_timestamp))

    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url or config_data.get("base_url") or settings.base_url
    ctx.obj["secret"] = (
        secret or config_data.get("secret") or settings.secret_bytes() or b""
    )
    ctx.obj["resource_base"] = (
        resource_base or config_data.get("resource_base") or settings.resource_base
    )
    ctx.obj["param_name"] = param_name or config_data.get("param_name") or settings.param_name
    ctx.obj["use_timestamp"] = use_timestamp
    ctx.obj["strip_words"] = as_words(config_data.get("strip_words", settings.strip_words))
    ctx.obj["max_skew_seconds"] = config_data.get("max_skew_seconds", settings.max_skew_seconds)


@cli.command("sign")
@click.argument("resource")
@click.option("--param", "params", multiple=True, help="Extra query parameter (key=value)")
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON object mapping numeric ids to resource paths",
)
@click.pass_context
def sign_cmd(
    ctx: click.Context,
    resource: str,
    params: tuple[str, ...],
    catalog: str | None,
) -> None:
    """Sign a resource path (or a catalog id) and print the URL."""
    signer = Signer(_build_config(ctx), resolver=_load_catalog(catalog))
    result = signer.generate_signed_url(resource, _parse_params(params))

    if not isinstance(result, SignedUrl):
        console.print(f"[red]Could not sign {resource}: {result.reason}[/red]")
        sys.exit(1)

    click.echo(result.url)


@cli.command("verify")
@click.argument("url")
@click.option("--max-skew", type=int, default=None, help="Freshness window in seconds")
@click.pass_context
def verify_cmd(ctx: click.Context, url: str, max_skew: int | None) -> None:
    """Verify a signed URL."""
    config = _build_config(ctx)
    skew = max_skew if max_skew is not None else ctx.obj["max_skew_seconds"]
    verifier = Verifier.from_config(config, max_skew_seconds=skew)

    result = verifier.verify_url(url)
    if result.accepted:
        console.print("[green]✓ Signature is valid[/green]")
    else:
        console.print(f"[red]✗ Signature rejected: {result.outcome.value}[/red]")
        sys.exit(1)


@cli.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective signer configuration (secret redacted)."""
    table = Table(title="Signer Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("base_url", str(ctx.obj["base_url"]))
    table.add_row("secret", "********" if ctx.obj["secret"] else "[red]unset[/red]")
    table.add_row("resource_base", str(ctx.obj["resource_base"] or "-"))
    table.add_row("param_name", str(ctx.obj["param_name"]))
    table.add_row("use_timestamp", str(ctx.obj["use_timestamp"]))
    table.add_row("strip_words", ", ".join(ctx.obj["strip_words"]) or "-")
    table.add_row("max_skew_seconds", str(ctx.obj["max_skew_seconds"]))

    console.print(table)


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
