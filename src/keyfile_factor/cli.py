"""Command line interface for Keyfile Factor."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from keyfile_factor import __version__
from keyfile_factor.crypto.primitives import sha256
from keyfile_factor.crypto.secure_memory import secure_zeroize, wiped
from keyfile_factor.errors import (
    DatabaseFileSelectedError,
    EmptyKeyFileError,
    KeyFileError,
    RandomSourceError,
)
from keyfile_factor.keyfile import KeyFileKey, create_key_file

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_RANDOM = 2
EXIT_FS = 3
EXIT_KEYFILE = 4

console = Console()


def _package_version() -> str:
    try:
        return version("keyfile-factor")
    except PackageNotFoundError:
        return __version__


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fingerprint(key: bytes) -> str:
    with wiped(sha256(key)) as digest:
        return digest.hex()


def _handle_action(action: Callable[[], None]) -> int:
    try:
        action()
    except DatabaseFileSelectedError:
        console.print("[red]Error: selected file is a database, not a key file[/red]")
        return EXIT_KEYFILE
    except EmptyKeyFileError:
        console.print("[red]Error: key file is empty[/red]")
        return EXIT_KEYFILE
    except RandomSourceError as exc:
        console.print(f"[red]Random source failure:[/red] {exc}")
        return EXIT_RANDOM
    except KeyFileError as exc:
        console.print(f"[red]Key file error:[/red] {exc}")
        return EXIT_KEYFILE
    except FileExistsError as exc:
        console.print(f"[red]{exc}. Use --overwrite to replace.[/red]")
        return EXIT_FS
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/red] {exc}")
        return EXIT_FS
    except PermissionError as exc:
        console.print(f"[red]Permission denied:[/red] {exc}")
        return EXIT_FS
    except OSError as exc:  # noqa: BLE001
        console.print(f"[red]Filesystem error:[/red] {exc}")
        return EXIT_FS
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Unexpected error:[/red] {exc}")
        return EXIT_USAGE
    return EXIT_SUCCESS


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=_package_version(), prog_name="Keyfile Factor")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Create and inspect key files used as a master key factor."""
    _configure_logging(verbose)


@cli.command(
    help="Create a new random XML key file.",
    epilog="Examples:\n  keyfile create vault.keyx\n  keyfile create vault.keyx --entropy 'mashed keys' --overwrite",
)
@click.argument("output_path", type=click.Path(path_type=Path))
@click.option("--entropy", "entropy_text", help="Extra text mixed into the random key.")
@click.option(
    "--entropy-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File whose contents are mixed into the random key.",
)
@click.option(
    "--overwrite/--no-overwrite",
    default=False,
    help="Overwrite output if it already exists.",
)
@click.pass_context
def create(
    ctx: click.Context,
    output_path: Path,
    entropy_text: str | None,
    entropy_file: Path | None,
    overwrite: bool,
) -> None:
    entropy = bytearray()

    def _run() -> None:
        if entropy_text:
            entropy.extend(entropy_text.encode("utf-8"))
        if entropy_file is not None:
            entropy.extend(entropy_file.read_bytes())
        create_key_file(output_path, entropy or None, overwrite=overwrite)

    try:
        code = _handle_action(_run)
    finally:
        secure_zeroize(entropy)
    if code == EXIT_SUCCESS:
        console.print(f"[green]Created key file[/green] {output_path}.")
    ctx.exit(code)


@cli.command(
    help="Resolve a key file and show which format it uses.",
    epilog="Example:\n  keyfile inspect vault.keyx",
)
@click.argument("key_path", type=click.Path(path_type=Path))
@click.option(
    "--allow-database/--refuse-database",
    default=False,
    help="Accept files that look like a password database.",
)
@click.pass_context
def inspect(ctx: click.Context, key_path: Path, allow_database: bool) -> None:
    def _run() -> None:
        with KeyFileKey.load(key_path, refuse_database_file=not allow_database) as key:
            data = key.key_data
            path = key.path
            table = Table(show_header=False, box=None)
            table.add_row("Format", key.key_format.value)
            table.add_row("Key length", f"{len(data)} bytes")
            table.add_row("SHA-256", _fingerprint(data))
        console.print(f"[bold]Key file[/bold] {path}")
        console.print(table)

    ctx.exit(_handle_action(_run))


@cli.command(name="version", help="Show the installed version.")
def version_cmd() -> None:
    console.print(f"Keyfile Factor {_package_version()}")


def main(argv: list[str] | None = None) -> int:
    try:
        return cli.main(args=argv, prog_name="keyfile", standalone_mode=False)
    except SystemExit as exc:  # noqa: TRY003
        code = exc.code if isinstance(exc.code, int) else EXIT_USAGE
        return code
    except click.ClickException as exc:
        exc.show()
        return EXIT_USAGE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
