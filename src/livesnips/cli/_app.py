"""The command-line interface for livesnips."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from livesnips.config import safe_load_config
from livesnips.utils import create_cli_logger

from ._commands import CLIContext, register_commands

_HELP = "Live snippet templates with computed blocks."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="livesnips",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
    ) -> None:
        """Launch the livesnips CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with additional details.
            config: Explicit path to config file.
        """
        loaded_config, config_error = safe_load_config(config_path=config)

        level = "debug" if verbose else loaded_config.logging.level.value
        cli_logger = create_cli_logger(
            level=level,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
        )

        CLIContext.set_current(
            CLIContext(
                config=loaded_config,
                verbose=verbose,
                config_path=config,
                config_error=config_error,
                logger=cli_logger,
            )
        )
        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `livesnips` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
