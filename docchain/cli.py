"""
DocChain CLI - hash files locally and talk to a running DocChain API
"""
import sys
from pathlib import Path

import click
import requests
from rich.console import Console
from rich.table import Table

from docchain import __version__
from docchain.client import LiveAPIClient
from docchain.config import get_config
from docchain.hashing import hash_file, is_well_formed_hash, truncate_hash
from docchain.utils import get_logger, setup_logging, write_json

console = Console()
logger = get_logger(__name__)


def _client(ctx: click.Context) -> LiveAPIClient:
    return LiveAPIClient(base_url=ctx.obj["api_url"])


def _fail(exc: Exception) -> None:
    """Report an API or connection error and exit with status 1."""
    message = str(exc)
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        try:
            message = exc.response.json().get("detail", message)
        except ValueError:
            pass
    logger.error("API call failed: %s", message)
    console.print(f"\n[red]✗ Error: {message}[/red]")
    sys.exit(1)


def _resolve_hash(file_or_hash: str) -> str:
    """Hash a file path, or accept a literal 64-hex-character hash."""
    path = Path(file_or_hash)
    if path.is_file():
        return hash_file(path)
    if is_well_formed_hash(file_or_hash):
        return file_or_hash.lower()
    raise click.BadParameter(
        "not an existing file or a 64-character hexadecimal hash",
        param_hint="FILE_OR_HASH",
    )


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version=__version__)
@click.option("--api-url", envvar="DOCCHAIN_API_URL", default=None, help="DocChain API base URL")
@click.pass_context
def main(ctx, api_url):
    """
    DocChain - document hash registry

    Hash files, register them, and verify them later.
    """
    config = get_config()
    setup_logging(config.log_level, config.log_file)
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url or config.api_url


# ═══════════════════════════════════════════════════════════════════
# LOCAL COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command("hash")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def hash_command(files):
    """Print the SHA-256 hash of one or more files"""
    for file_path in files:
        console.print(f"{hash_file(file_path)}  {file_path}")


@main.command()
@click.option("--host", default=None, help="Bind address (default from config)")
@click.option("--port", default=None, type=int, help="Port (default from config)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the DocChain API with uvicorn"""
    import uvicorn

    config = get_config()
    host = host or config.api_host
    port = port or config.api_port
    console.print(f"\n[bold blue]DocChain API[/bold blue] on http://{host}:{port}")
    uvicorn.run("docchain.api.main:app", host=host, port=port, reload=reload)


# ═══════════════════════════════════════════════════════════════════
# API COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--title", "-t", required=True, help="Document title")
@click.option("--issuer", "-i", required=True, help="Issuer identifier")
@click.option("--description", "-d", default=None, help="Optional description")
@click.option("--ipfs-hash", default=None, help="Optional IPFS reference")
@click.option("--public", "is_public", is_flag=True, help="Mark the document public")
@click.pass_context
def register(ctx, file_path, title, issuer, description, ipfs_hash, is_public):
    """Hash FILE_PATH locally and register it"""
    document_hash = hash_file(file_path)
    console.print(f"\n[bold blue]Registering:[/bold blue] {file_path}")
    console.print(f"  Hash: [cyan]{document_hash}[/cyan]")

    try:
        document = _client(ctx).register_document(
            title=title,
            filename=Path(file_path).name,
            documentHash=document_hash,
            issuer=issuer,
            description=description,
            ipfsHash=ipfs_hash,
            isPublic=is_public,
        )
    except requests.RequestException as e:
        _fail(e)

    logger.info("Registered %s as %s", document_hash, document["id"])
    console.print(f"\n[green]✓ Registered as {document['id']}[/green]")


@main.command()
@click.argument("file_or_hash")
@click.option("--verifier", default=None, help="Verifier identifier to record")
@click.option("--output", "-o", type=click.Path(), help="Write the full result as JSON")
@click.pass_context
def verify(ctx, file_or_hash, verifier, output):
    """Verify a file (or a hash) against the registry"""
    document_hash = _resolve_hash(file_or_hash)

    try:
        result = _client(ctx).verify(document_hash, verifier_address=verifier)
    except requests.RequestException as e:
        _fail(e)

    if not result["exists"]:
        console.print(f"\n[yellow]? Not registered:[/yellow] {truncate_hash(document_hash)}")
    else:
        document = result["document"]
        table = Table(title="Verification Result")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="magenta")
        table.add_row("Title", document["title"])
        table.add_row("File", document["filename"])
        table.add_row("Hash", truncate_hash(document_hash, 24))
        table.add_row("Issuer", result["issuer"] or "")
        table.add_row("Registered", str(result["timestamp"]))
        table.add_row("Verifications", str(len(result["verifications"])))
        console.print(table)

        if result["isValid"]:
            console.print("\n[green]✓ Valid[/green]")
        else:
            console.print("\n[red]✗ Revoked[/red]")

    if output:
        write_json(result, output)
        console.print(f"\n[green]✓ Saved to {output}[/green]")


@main.command()
@click.argument("document_hash")
@click.pass_context
def revoke(ctx, document_hash):
    """Revoke a registered hash"""
    try:
        revoked = _client(ctx).revoke(document_hash)
    except requests.RequestException as e:
        _fail(e)

    if not revoked:
        console.print(f"\n[red]✗ Document not found: {truncate_hash(document_hash)}[/red]")
        sys.exit(1)
    console.print("\n[green]✓ Document revoked[/green]")


@main.command()
@click.pass_context
def documents(ctx):
    """List registered documents, newest first"""
    try:
        rows = _client(ctx).list_documents()
    except requests.RequestException as e:
        _fail(e)

    table = Table(title=f"Documents ({len(rows)})")
    table.add_column("Title", style="cyan")
    table.add_column("Hash")
    table.add_column("Status")
    table.add_column("Registered")
    for row in rows:
        status = "[red]revoked[/red]" if row["isRevoked"] else "[green]valid[/green]"
        table.add_row(row["title"], truncate_hash(row["documentHash"]), status, row["createdAt"])
    console.print(table)


@main.command()
@click.pass_context
def stats(ctx):
    """Show registry statistics"""
    try:
        data = _client(ctx).get_stats()
    except requests.RequestException as e:
        _fail(e)

    table = Table(title="Registry Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_row("Total documents", str(data["totalDocuments"]))
    table.add_row("Verified", str(data["verified"]))
    table.add_row("Revoked", str(data["revoked"]))
    table.add_row("This month", str(data["thisMonth"]))
    console.print(table)


if __name__ == "__main__":
    main()
