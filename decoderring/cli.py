# decoderring/cli.py

from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from .services.logging import setup_logging
from .services.files import read_bytes, overwrite_bytes, append_bytes
from .config.loader import get_config, save_config
from .core.engines import available_engines, get_engine_class
from .core.errors import DecoderRingError, FileAccessError, UnknownCommandError, UnknownEngineError
from .core.models import Command
from .core.ring import build_map
from .core import transformer
from .core.transformer import transform_detailed
from . import __version__

# --- Typer App ---
app = typer.Typer(help="DecoderRing - obfuscate text files with two numeric seeds.")

def version_callback(value: bool):
    if value:
        print(f"DecoderRing Version: {__version__}")
        raise typer.Exit()

@app.callback()
def main_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    engine: Optional[str] = typer.Option(None, "--engine", "-e", help="Random engine used to shuffle the ring (overrides config)."),
    log_file: bool = typer.Option(True, "--log-file/--no-log-file", help="Also write logs to the user log directory."),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True, help="Show version and exit."),
):
    """ Main callback to set up logging """
    config = get_config()
    setup_logging(level=config.log_level, verbose=verbose, log_to_file=log_file)
    ctx.ensure_object(dict)
    ctx.obj["VERBOSE"] = verbose
    ctx.obj["ENGINE"] = engine or config.engine


def print_header(header: str, width: int, fill: str) -> None:
    """Prints `header` centered between two rules of `fill`."""
    rule = fill * width
    typer.echo(rule)
    typer.echo(header.center(width, fill))
    typer.echo(rule)


def _engine_from(ctx: typer.Context) -> str:
    name = (ctx.obj or {}).get("ENGINE") or get_config().engine
    get_engine_class(name) # Raises UnknownEngineError early
    return name


def _prompt_seed(label: str) -> int:
    """Reads a seed without echoing it. Re-asks until a non-negative integer is given."""
    while True:
        value = typer.prompt(label, type=int, hide_input=True)
        if value >= 0:
            return value
        typer.echo("Seed must not be negative.", err=True)


def _resolve_seeds(seed1: Optional[int], seed2: Optional[int]):
    if seed1 is None:
        seed1 = _prompt_seed("Enter inner seed")
    if seed2 is None:
        seed2 = _prompt_seed("Enter outer seed")
    return seed1, seed2


def _run_transform(
    command: Command,
    path: Path,
    engine: str,
    seed1: Optional[int],
    seed2: Optional[int],
    write: Optional[bool],
    show: Optional[bool],
    always_confirm: bool = False,
) -> bytes:
    """
    Shared body of encrypt and decrypt.

    Reads the file, transforms it, optionally shows the result and
    overwrites the file. Raises FileAccessError when the file can't be read
    or written; nothing is written in that case.
    """
    config = get_config()
    data = read_bytes(path)
    seed1, seed2 = _resolve_seeds(seed1, seed2)

    if command is Command.DECRYPT:
        ring = build_map(seed2, seed1, engine=engine)
    else:
        ring = build_map(seed1, seed2, engine=engine)
    result = transform_detailed(data, ring)
    logger.debug(f"{command.value}: {result.remapped} bytes remapped, {result.passed_through} passed through.")

    show_contents = config.show_contents if show is None else show
    if show_contents:
        print_header("File Contents", config.header_width, config.header_fill)
        typer.echo(result.content)
        typer.echo(config.header_fill * config.header_width)

    if write is None:
        if always_confirm or config.confirm_overwrite:
            write = typer.confirm("Overwrite the contents of the file?", default=False)
        else:
            write = True

    if write:
        overwrite_bytes(path, result.content)
        typer.echo("Successfully overwritten.")
    else:
        logger.info(f"Left {path} unchanged.")
    return result.content


def _run_append(path: Path, engine: str, text: Optional[str], seed1: Optional[int], seed2: Optional[int]) -> bytes:
    config = get_config()
    if text is None:
        text = typer.prompt("Enter text to append")
    seed1, seed2 = _resolve_seeds(seed1, seed2)

    encrypted = transformer.append(seed1, seed2, text.encode("utf-8"), engine=engine)
    append_bytes(path, encrypted, separator=config.line_separator.encode("utf-8"))
    typer.echo(encrypted + b" was appended to the file")
    return encrypted


def _flag_choice(on: bool, off: bool, on_name: str, off_name: str) -> Optional[bool]:
    """Folds two opposing flags into True, False or None when neither was given."""
    if on and off:
        raise typer.BadParameter(f"{on_name} and {off_name} cannot be combined.")
    if on:
        return True
    if off:
        return False
    return None


def _exit_on_error(err: DecoderRingError):
    logger.error(str(err))
    code = 2 if isinstance(err, UnknownEngineError) else 1
    raise typer.Exit(code=code)


SEED1_OPTION = typer.Option(None, "--seed1", "--inner", min=0, help="Inner seed. Prompted for (hidden) when omitted.")
SEED2_OPTION = typer.Option(None, "--seed2", "--outer", min=0, help="Outer seed. Prompted for (hidden) when omitted.")
YES_OPTION = typer.Option(False, "--yes", "-y", help="Overwrite the file without asking.")
NO_WRITE_OPTION = typer.Option(False, "--no-write", help="Never overwrite the file.")
SHOW_OPTION = typer.Option(False, "--show", help="Print the transformed contents even if config disables it.")
QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Do not print the transformed contents.")
PATH_ARGUMENT = typer.Argument(..., help="Path to the text file.", dir_okay=False, resolve_path=True)


@app.command()
def encrypt(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    seed1: Optional[int] = SEED1_OPTION,
    seed2: Optional[int] = SEED2_OPTION,
    yes: bool = YES_OPTION,
    no_write: bool = NO_WRITE_OPTION,
    show: bool = SHOW_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """
    Encrypts the file with the ring built from (seed1, seed2).
    """
    logger.info("Starting encryption program...")
    write = _flag_choice(yes, no_write, "--yes", "--no-write")
    show_contents = _flag_choice(show, quiet, "--show", "--quiet")
    try:
        _run_transform(Command.ENCRYPT, path, _engine_from(ctx), seed1, seed2, write, show_contents)
    except DecoderRingError as e:
        _exit_on_error(e)


@app.command()
def decrypt(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    seed1: Optional[int] = SEED1_OPTION,
    seed2: Optional[int] = SEED2_OPTION,
    yes: bool = YES_OPTION,
    no_write: bool = NO_WRITE_OPTION,
    show: bool = SHOW_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """
    Decrypts the file. Give the same seeds, in the same order, as for encrypt.
    """
    logger.info("Decryption program started...")
    write = _flag_choice(yes, no_write, "--yes", "--no-write")
    show_contents = _flag_choice(show, quiet, "--show", "--quiet")
    try:
        _run_transform(Command.DECRYPT, path, _engine_from(ctx), seed1, seed2, write, show_contents)
    except DecoderRingError as e:
        _exit_on_error(e)


@app.command()
def append(
    ctx: typer.Context,
    path: Path = PATH_ARGUMENT,
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Text to encrypt and append. Prompted for when omitted."),
    seed1: Optional[int] = SEED1_OPTION,
    seed2: Optional[int] = SEED2_OPTION,
):
    """
    Encrypts a line of text and appends it to the file on a new line.
    """
    logger.info("Starting encryption program...")
    try:
        _run_append(path, _engine_from(ctx), text, seed1, seed2)
    except DecoderRingError as e:
        _exit_on_error(e)


@app.command()
def session(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Path to the text file. Prompted for when omitted.", dir_okay=False, resolve_path=True),
):
    """
    Interactive loop: encrypt, decrypt or append to one file until 'exit'.
    """
    config = get_config()
    try:
        engine = _engine_from(ctx)
    except UnknownEngineError as e:
        _exit_on_error(e)

    print_header(f"DecoderRing {__version__}", config.header_width, config.header_fill)
    if path is None:
        path = Path(typer.prompt("Enter a filepath to open")).expanduser().resolve()

    while True:
        raw = typer.prompt("Enter a command to execute")
        try:
            command = Command.parse(raw)
        except UnknownCommandError as e:
            logger.error(str(e))
            typer.echo("Invalid command! Try again.", err=True)
            continue

        if command is Command.EXIT:
            logger.info("Closing the program...")
            break

        try:
            if command is Command.APPEND:
                _run_append(path, engine, None, None, None)
            else:
                logger.info(f"Starting {command.value} program...")
                _run_transform(command, path, engine, None, None, write=None, show=None, always_confirm=True)
        except FileAccessError as e:
            logger.error(str(e))
            typer.echo(f"ERROR: {e.reason}.", err=True)


@app.command("config")
def config_command(
    engine: Optional[str] = typer.Option(None, "--engine", help="Default random engine."),
    show_contents: bool = typer.Option(False, "--show-contents", help="Print transformed contents by default."),
    hide_contents: bool = typer.Option(False, "--hide-contents", help="Do not print transformed contents by default."),
    confirm: bool = typer.Option(False, "--confirm", help="Ask before overwriting files."),
    no_confirm: bool = typer.Option(False, "--no-confirm", help="Overwrite files without asking."),
):
    """
    Shows the effective configuration, or saves the given changes.
    """
    config = get_config()
    updates = {}
    if engine is not None:
        try:
            get_engine_class(engine)
        except UnknownEngineError as e:
            _exit_on_error(e)
        updates["engine"] = engine
    show = _flag_choice(show_contents, hide_contents, "--show-contents", "--hide-contents")
    if show is not None:
        updates["show_contents"] = show
    ask = _flag_choice(confirm, no_confirm, "--confirm", "--no-confirm")
    if ask is not None:
        updates["confirm_overwrite"] = ask

    if updates:
        config = config.model_copy(update=updates)
        try:
            saved_to = save_config(config)
        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            raise typer.Exit(code=1)
        logger.success(f"Configuration saved to: {saved_to}")

    typer.echo(config.model_dump_json(indent=4))
    typer.echo(f"Available engines: {', '.join(available_engines())}")


if __name__ == "__main__":
    app()
