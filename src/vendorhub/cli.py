"""
vendorhub CLI entrypoint

Serves the HTTP API and offers admin commands against the configured store.
"""

import asyncio
from typing import NoReturn

import typer

from vendorhub.bootstrap import create_registry
from vendorhub.config import get_settings
from vendorhub.domain import list_plans
from vendorhub.errors import VendorHubError
from vendorhub.persistence import CSV_HEADER, VendorRegistry, write_csv_file

app = typer.Typer(help="vendorhub CLI: API server and vendor registry admin tools.")


def _registry() -> VendorRegistry:
    return create_registry(get_settings())


def _fail(error: Exception) -> NoReturn:
    typer.secho(str(error), fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("vendorhub.api:create_app", host=host, port=port, reload=reload, factory=True)


@app.command()
def plans() -> None:
    """Show the subscription plan catalog."""
    for plan in list_plans():
        marker = " (most popular)" if plan.popular else ""
        savings = f" - {plan.savings}" if plan.savings else ""
        typer.echo(f"{plan.id.value}: {plan.name} ₹{plan.price} / {plan.duration}{savings}{marker}")


@app.command("list")
def list_vendors(
    search: str = typer.Option("", help="Match name, shop name, email or phone"),
    status: str = typer.Option("all", help="all, pending, active or suspended"),
) -> None:
    """List registered vendors."""
    try:
        records = asyncio.run(_registry().query(search, status))
    except (VendorHubError, ValueError) as e:
        _fail(e)
    if not records:
        typer.echo("No vendors found")
        return
    for record in records:
        typer.echo(
            f"{record.id}  {record.name} | {record.shop_name} | {record.phone} | "
            f"{record.plan.value} | {record.status.value} | {record.registration_date.isoformat()}"
        )


@app.command()
def set_status(vendor_id: str, status: str) -> None:
    """Change a vendor's status to pending, active or suspended."""
    try:
        record = asyncio.run(_registry().update_status(vendor_id, status))
    except (VendorHubError, ValueError) as e:
        _fail(e)
    typer.secho(f"Vendor status updated to {record.status.value}", fg=typer.colors.GREEN)


@app.command()
def export(
    output: str | None = typer.Option(None, help="CSV file to write (defaults to the configured name)"),
    search: str = typer.Option("", help="Match name, shop name, email or phone"),
    status: str = typer.Option("all", help="all, pending, active or suspended"),
) -> None:
    """Export vendors to a CSV file."""
    target = output or get_settings().csv_filename
    try:
        records = asyncio.run(_registry().query(search, status))
    except (VendorHubError, ValueError) as e:
        _fail(e)
    path = write_csv_file(target, records)
    typer.secho(
        f"Exported {len(records)} vendors ({len(CSV_HEADER)} columns) to {path}",
        fg=typer.colors.GREEN,
    )


@app.command()
def stats() -> None:
    """Show vendor counts per status."""
    try:
        counts = asyncio.run(_registry().counts())
    except VendorHubError as e:
        _fail(e)
    for k, v in counts.model_dump().items():
        typer.echo(f"  {k}: {v}")


if __name__ == "__main__":
    app()
