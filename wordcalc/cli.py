"""CLI entry point for wordcalc."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional, Protocol, TextIO

import click

from wordcalc import __version__
from wordcalc.config.settings import CalcConfig, load_config
from wordcalc.interp.errors import InterpError
from wordcalc.interp.interpreter import Interpreter
from wordcalc.service.expression import ExpressionService, ExpressionServiceError
from wordcalc.service.models import ExpressionError
from wordcalc.service.repository import FileExprErrorRepository, InMemoryExprErrorRepository
from wordcalc.utils.logging import configure_logging, get_logger
from wordcalc.utils.result import ExitCode
from wordcalc.web.client import ClientError, ExpressionHTTPClient, ValidationResult

DEFAULT_CONFIG = "./config"

PROMPT = ">"
EXIT_COMMAND = "\\e"
EVALUATE_PREFIX = "eval "
VALIDATE_PREFIX = "validate "
ERRORS_COMMAND = "errors"

# Failures reported to the user as "error: ..." rather than as crashes
REPORTABLE = (InterpError, ClientError, ExpressionServiceError)


def exit_code_for(error: Exception) -> int:
    """Rejected questions exit REJECTED; transport and store faults exit GENERAL_ERROR."""
    if isinstance(error, InterpError):
        return ExitCode.REJECTED
    if isinstance(error, ClientError) and error.kind is not None:
        return ExitCode.REJECTED
    return ExitCode.GENERAL_ERROR


class UnknownCommandError(Exception):
    """The REPL did not recognize the command."""

    pass


class Backend(Protocol):
    def evaluate(self, expression: str) -> int: ...

    def validate(self, expression: str) -> ValidationResult: ...

    def get_expression_errors(self) -> list[ExpressionError]: ...


class LocalBackend:
    """Answers questions in-process through the expression service."""

    def __init__(self, service: ExpressionService) -> None:
        self.service = service

    def evaluate(self, expression: str) -> int:
        return self.service.evaluate(expression)

    def validate(self, expression: str) -> ValidationResult:
        try:
            return ValidationResult(valid=self.service.validate(expression))
        except InterpError as e:
            return ValidationResult(valid=False, reason=e.message)

    def get_expression_errors(self) -> list[ExpressionError]:
        return self.service.get_expression_errors()


def build_service(config: CalcConfig) -> ExpressionService:
    """Wire interpreter and error store from configuration."""
    if config.storage.errors_file is not None:
        repository = FileExprErrorRepository(config.storage.errors_file)
    else:
        repository = InMemoryExprErrorRepository()

    interpreter = Interpreter(max_input_length=config.lexer.max_input_length)
    return ExpressionService(interpreter, repository)


class Context:
    """CLI context for sharing state between commands."""

    def __init__(self, config: CalcConfig) -> None:
        self.config = config
        self.logger = get_logger("cli")
        self._service: Optional[ExpressionService] = None

    @property
    def service(self) -> ExpressionService:
        if self._service is None:
            self._service = build_service(self.config)
        return self._service

    def backend(self, remote: bool, url: Optional[str] = None) -> Backend:
        """
        Pick where questions are answered.

        A URL implies remote mode; plain --remote uses client.base_url. The
        HTTP client is closed when the current command finishes.
        """
        if not (remote or url):
            return LocalBackend(self.service)

        client = ExpressionHTTPClient(
            url or self.config.client.base_url,
            timeout=self.config.client.timeout,
        )
        click.get_current_context().call_on_close(client.close)
        return client


pass_context = click.make_pass_decorator(Context)


def remote_options(f):
    """Add --remote/--local and --url to a command."""
    f = click.option(
        "--url",
        metavar="URL",
        default=None,
        help="Server URL (implies --remote, overrides client.base_url)",
    )(f)
    f = click.option(
        "--remote/--local",
        default=False,
        help="Send requests to the wordcalc server at client.base_url",
    )(f)
    return f


def output_json(data) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def format_expression_error(error: ExpressionError) -> str:
    return (
        f'\t"{error.expression}"; on {error.method.endpoint}; '
        f"{error.frequency} times; {error.kind.value}"
    )


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help="Path to config directory",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default=None,
    help="Logging level (overrides config)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format (overrides config)",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path,
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    wordcalc - answers arithmetic questions asked in plain English.

    Questions look like "What is 3 plus 10 minus 5?". Operations are applied
    strictly left to right. Rejected questions are counted by kind.
    """
    result = load_config(config)
    if result.is_err():
        click.echo(f"error: {result.unwrap_err()}", err=True)
        ctx.exit(ExitCode.CONFIG_INVALID)

    calc_config = result.unwrap()
    configure_logging(
        level=log_level or calc_config.logging.level,
        format_type=log_format or calc_config.logging.format,
    )

    ctx.obj = Context(config=calc_config)


@cli.command()
@click.argument("expression")
@remote_options
@pass_context
def evaluate(ctx: Context, expression: str, remote: bool, url: Optional[str]) -> None:
    """Answer EXPRESSION."""
    try:
        result = ctx.backend(remote, url).evaluate(expression)
    except REPORTABLE as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(exit_code_for(e))

    click.echo(result)


@cli.command()
@click.argument("expression")
@remote_options
@pass_context
def validate(ctx: Context, expression: str, remote: bool, url: Optional[str]) -> None:
    """Check that EXPRESSION is a well-formed question."""
    try:
        outcome = ctx.backend(remote, url).validate(expression)
    except REPORTABLE as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(exit_code_for(e))

    if outcome.valid:
        click.echo("valid")
        return

    click.echo(f"invalid: {outcome.reason}")
    sys.exit(ExitCode.REJECTED)


@cli.command()
@remote_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format",
)
@pass_context
def errors(ctx: Context, remote: bool, url: Optional[str], output_format: str) -> None:
    """List rejected expressions and how often they were seen."""
    try:
        records = ctx.backend(remote, url).get_expression_errors()
    except REPORTABLE as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(ExitCode.GENERAL_ERROR)

    if output_format == "json":
        output_json([r.to_dict() for r in records])
        return

    for record in records:
        click.echo(format_expression_error(record))


class Repl:
    """
    Line-oriented interactive loop.

    Commands: ``eval <question>``, ``validate <question>``, ``errors``;
    ``\\e`` or end of input quits.
    """

    def __init__(self, backend: Backend, stdin: TextIO) -> None:
        self.backend = backend
        self.stdin = stdin

    def run(self) -> None:
        while True:
            click.echo(f"{PROMPT} ", nl=False)
            line = self.stdin.readline()
            if not line:
                click.echo()
                return

            command = line.rstrip("\r\n")
            if command == EXIT_COMMAND:
                return

            try:
                output = self.execute(command)
            except (*REPORTABLE, UnknownCommandError) as e:
                click.echo(f"error: {e}")
                continue

            if output:
                click.echo(output)

    def execute(self, command: str) -> str:
        if not command:
            return ""

        if command.startswith(EVALUATE_PREFIX):
            return str(self.backend.evaluate(command[len(EVALUATE_PREFIX):]))

        if command.startswith(VALIDATE_PREFIX):
            outcome = self.backend.validate(command[len(VALIDATE_PREFIX):])
            if outcome.valid:
                return "true"
            return f"false ({outcome.reason})"

        if command == ERRORS_COMMAND:
            return "\n".join(
                format_expression_error(r) for r in self.backend.get_expression_errors()
            )

        raise UnknownCommandError("unknown command")


@cli.command()
@remote_options
@pass_context
def repl(ctx: Context, remote: bool, url: Optional[str]) -> None:
    """Start an interactive session."""
    click.echo(f"wordcalc {__version__}")
    Repl(ctx.backend(remote, url), sys.stdin).run()


@cli.command()
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", type=int, default=None, help="Port (overrides config)")
@pass_context
def serve(ctx: Context, host: Optional[str], port: Optional[int]) -> None:
    """Run the HTTP server."""
    from wordcalc.web.app import create_app

    host = host or ctx.config.server.host
    port = port or ctx.config.server.port

    ctx.logger.info("server_starting", host=host, port=port)
    create_app(ctx.service).run(host=host, port=port)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
