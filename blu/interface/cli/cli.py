import logging
from pathlib import Path
from typing import IO

import click
from pydantic import BaseModel

from blu.application.config_loader import load_config
from blu.application.response_applier import ResponseApplier
from blu.domain.completion_envelope import extract_completion_text_from_json
from blu.domain.events.emitter import BluEventEmitter
from blu.domain.events.stderr_observer import StderrEventObserver
from blu.domain.models.classified_response import FileSetResponse
from blu.domain.response_classifier import classify, diagnose_json, strip_outer_fence
from blu.domain.validation.path_validator import validate_workspace_root
from blu.interface.cli.output_models import ApplyOutput, ClassifyOutput, DiagnoseOutput

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2


def _json_emit(model: BaseModel) -> None:
    # Single-line JSON, omit None fields (e.g., ApplyOutput.text for file sets).
    click.echo(model.model_dump_json(exclude_none=True), nl=True)


def _get_json_mode(ctx: click.Context) -> bool:
    obj = ctx.obj or {}
    return bool(obj.get("json", False))


def _configure_logging(level: str | int) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


def _format_error(e: Exception) -> str:
    """Format exception into user-friendly message."""
    if isinstance(e, FileNotFoundError):
        return f"File not found: {e.filename}" if e.filename else str(e)
    if isinstance(e, UnicodeDecodeError):
        return "Response is not valid UTF-8"
    return str(e)


def _read_response(source: IO[str], envelope: bool) -> str:
    body = source.read()
    if envelope:
        return extract_completion_text_from_json(body)
    return body


@click.group(help="Classify LLM responses and apply them to a workspace.")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable JSON on stdout.")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj["json"] = bool(json_output)
    ctx.obj["verbose"] = bool(verbose)
    if verbose:
        _configure_logging(logging.DEBUG)


@cli.command("classify")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--envelope", is_flag=True, help="SOURCE is a chat-completion JSON body.")
@click.pass_context
def classify_cmd(ctx: click.Context, source: IO[str], envelope: bool) -> None:
    """Report whether a response is inline text or a file set."""
    try:
        response = classify(_read_response(source, envelope))

        if isinstance(response, FileSetResponse):
            paths = list(response.value)
            if _get_json_mode(ctx):
                _json_emit(ClassifyOutput(exit_code=EXIT_OK, kind=response.kind, paths=paths))
                raise click.exceptions.Exit(EXIT_OK)
            click.echo(f"kind={response.kind}")
            for path in paths:
                click.echo(path)
            return

        if _get_json_mode(ctx):
            _json_emit(ClassifyOutput(exit_code=EXIT_OK, kind=response.kind, text=response.value))
            raise click.exceptions.Exit(EXIT_OK)
        click.echo(f"kind={response.kind}")
        click.echo(response.value)

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(ClassifyOutput(exit_code=EXIT_ERROR, error=_format_error(e)))
            raise click.exceptions.Exit(EXIT_ERROR)
        raise click.ClickException(_format_error(e)) from e


@cli.command("apply")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--root",
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Workspace root that file sets are written under.",
)
@click.option("--envelope", is_flag=True, help="SOURCE is a chat-completion JSON body.")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parallel writes (overrides config).")
@click.pass_context
def apply_cmd(
    ctx: click.Context,
    source: IO[str],
    root: Path,
    envelope: bool,
    workers: int | None,
) -> None:
    """Apply a response: print text responses, write file sets under ROOT."""
    try:
        workspace_root = validate_workspace_root(root)
        cfg = load_config(project_root=workspace_root, user_home=Path.home())

        if not ctx.obj.get("verbose"):
            _configure_logging(cfg.logging.level)

        emitter = BluEventEmitter()
        if cfg.events.stderr:
            emitter.subscribe(StderrEventObserver())

        # CLI --workers overrides config
        max_workers = workers if workers is not None else cfg.materialize.max_workers
        logger.debug(f"Applying response under {workspace_root} with max_workers={max_workers}")

        applier = ResponseApplier(emitter=emitter, max_workers=max_workers)
        outcome = applier.apply(_read_response(source, envelope), workspace_root)

        if outcome.materialization is None:
            if _get_json_mode(ctx):
                _json_emit(ApplyOutput(exit_code=EXIT_OK, kind=outcome.kind, text=outcome.text))
                raise click.exceptions.Exit(EXIT_OK)
            click.echo(outcome.text)
            return

        exit_code = EXIT_OK if outcome.ok else EXIT_PARTIAL
        entries = outcome.materialization.entries

        if _get_json_mode(ctx):
            _json_emit(
                ApplyOutput(
                    exit_code=exit_code,
                    kind=outcome.kind,
                    results=entries,
                    message=outcome.message,
                )
            )
            raise click.exceptions.Exit(exit_code)

        for entry in entries:
            line = f"{entry.path}: {entry.outcome.value}"
            if entry.reason:
                line += f" ({entry.reason})"
            click.echo(line)
        click.echo(outcome.message, err=True)

        if exit_code != EXIT_OK:
            raise click.exceptions.Exit(exit_code)

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(ApplyOutput(exit_code=EXIT_ERROR, error=_format_error(e)))
            raise click.exceptions.Exit(EXIT_ERROR)
        raise click.ClickException(_format_error(e)) from e


@cli.command("diagnose")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_context
def diagnose_cmd(ctx: click.Context, source: IO[str]) -> None:
    """Locate the first JSON syntax error in a (fence-stripped) response."""
    try:
        diagnostic = diagnose_json(strip_outer_fence(source.read()))

        if _get_json_mode(ctx):
            _json_emit(
                DiagnoseOutput(exit_code=EXIT_OK, valid=diagnostic is None, diagnostic=diagnostic)
            )
            raise click.exceptions.Exit(EXIT_OK)

        if diagnostic is None:
            click.echo("valid=true")
            return
        click.echo("valid=false")
        click.echo(diagnostic.format())

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(DiagnoseOutput(exit_code=EXIT_ERROR, error=_format_error(e)))
            raise click.exceptions.Exit(EXIT_ERROR)
        raise click.ClickException(_format_error(e)) from e
