"""Typer CLI entrypoint."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer

from razerctl.core.errors import DeviceAttributeError, RazerctlError
from razerctl.core.model import to_jsonable
from razerctl.core.service import RazerService

app = typer.Typer(help="Query and configure Razer peripherals through their kernel driver attributes")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    config: Path | None = typer.Option(None, "--config", help="Path to a config.yaml"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config": config}


def _build_service(ctx: typer.Context) -> RazerService:
    config = (ctx.obj or {}).get("config")
    service = RazerService(config_path=config)
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


def _echo_json(value: Any) -> None:
    typer.echo(json.dumps(to_jsonable(value), indent=2))


def _fail(exc: RazerctlError) -> typer.Exit:
    if isinstance(exc, DeviceAttributeError):
        typer.echo(f"Error: {exc.kind}: {exc}", err=True)
    else:
        typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@app.command("list")
def list_devices(ctx: typer.Context) -> None:
    """List connected devices with their type and serial."""
    try:
        service = _build_service(ctx)
        devices = service.list_devices()
        if not devices:
            typer.echo("No Razer devices found")
            return

        for index, device in enumerate(devices, start=1):
            typer.echo(f"{index}:\n{device}\n")
    except RazerctlError as exc:
        raise _fail(exc) from None


@app.command("query")
def query(ctx: typer.Context, serial: str) -> None:
    """Print every attribute of a device as JSON; unreadable ones are listed under "errors"."""
    try:
        service = _build_service(ctx)
        _echo_json(service.query(serial))
    except RazerctlError as exc:
        raise _fail(exc) from None


@app.command("get")
def get_attribute(ctx: typer.Context, serial: str, attribute: str) -> None:
    """Print a single attribute as JSON (null when the device does not report it)."""
    try:
        service = _build_service(ctx)
        _echo_json(service.get_attribute(serial, attribute))
    except RazerctlError as exc:
        raise _fail(exc) from None


@app.command("info")
def info(ctx: typer.Context, serial: str) -> None:
    """Print the identity of a device (type, serial, firmware version)."""
    try:
        service = _build_service(ctx)
        _echo_json(service.identity(serial))
    except RazerctlError as exc:
        raise _fail(exc) from None


@app.command("set-dpi")
def set_dpi(
    ctx: typer.Context,
    serial: str,
    x: int = typer.Argument(..., help="Horizontal resolution"),
    y: int | None = typer.Argument(None, help="Vertical resolution, defaults to X"),
) -> None:
    """Set the pointer resolution of a device."""
    try:
        service = _build_service(ctx)
        resolution = service.set_dpi(serial, x, y)
        typer.echo(f"Set dpi={resolution} on {serial}")
    except RazerctlError as exc:
        raise _fail(exc) from None


@app.command("set-poll-rate")
def set_poll_rate(
    ctx: typer.Context,
    serial: str,
    rate: int = typer.Argument(..., help="Polling rate in Hz: 125, 500 or 1000"),
) -> None:
    """Set the polling rate of a device."""
    try:
        service = _build_service(ctx)
        applied = service.set_poll_rate(serial, rate)
        typer.echo(f"Set poll_rate={int(applied)} on {serial}")
    except RazerctlError as exc:
        raise _fail(exc) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
