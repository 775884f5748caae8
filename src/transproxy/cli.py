from __future__ import annotations
import json
from pathlib import Path
from typing import List, Optional
import typer
from rich import print
from rich.markup import escape
from .version import __version__
from .config import ProxyConfig, KEY_ENV, REGION_ENV, ENDPOINT_ENV, TIMEOUT_ENV
from .handler import make_handler

app = typer.Typer(add_completion=False, help="Azure Translator proxy: local invocation tools")


def _local_handler():
    return make_handler(ProxyConfig.from_env())


@app.callback(invoke_without_command=True)
def _version(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version"),
) -> None:
    if version:
        print(__version__)
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit(0)


@app.command("check-config")
def check_config():
    """Show which proxy settings are present in the environment."""
    cfg = ProxyConfig.from_env()
    print(f"[bold]{KEY_ENV}:[/bold] {'set' if cfg.api_key else '[red]missing[/red]'}")
    print(f"[bold]{REGION_ENV}:[/bold] {escape(cfg.region) if cfg.region else '[red]missing[/red]'}")
    print(f"[bold]{ENDPOINT_ENV}:[/bold] {cfg.endpoint}")
    print(f"[bold]{TIMEOUT_ENV}:[/bold] {cfg.request_timeout if cfg.request_timeout is not None else 'none'}")
    if not cfg.has_credentials:
        print("[red]Credentials are not configured; every request will answer 500.[/red]")
        raise typer.Exit(1)
    print("[green]OK[/green]")


@app.command()
def translate(
    texts: List[str] = typer.Argument(..., help="Texts to translate"),
    target_lang: str = typer.Option(..., "--to", help="Target language code"),
    source_lang: Optional[str] = typer.Option(None, "--from", help="Source language code (auto-detect if omitted)"),
    json_out: bool = typer.Option(False, "--json", help="Print the raw handler response"),
):
    """Run TEXTS through the proxy handler exactly as the deployed function would."""
    body = {"texts": texts, "targetLang": target_lang}
    if source_lang:
        body["sourceLang"] = source_lang
    response = _local_handler()({"httpMethod": "POST", "body": json.dumps(body)})
    payload = json.loads(response["body"])

    if json_out:
        typer.echo(json.dumps(response, ensure_ascii=False, indent=2))
    elif response["statusCode"] == 200:
        for source, item in zip(texts, payload["translations"]):
            print(f"{escape(source)} [dim]->[/dim] {escape(item['text'])}")
    else:
        print(f"[red]Error {response['statusCode']}:[/red] {escape(str(payload.get('error')))}")

    if response["statusCode"] != 200:
        raise typer.Exit(1)


@app.command()
def invoke(
    event_file: Path = typer.Argument(..., exists=True, readable=True, help="JSON file holding a platform event"),
):
    """Pass a stored event through the handler and print the response."""
    event = json.loads(event_file.read_text(encoding="utf-8"))
    response = _local_handler()(event)
    typer.echo(json.dumps(response, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    app()
