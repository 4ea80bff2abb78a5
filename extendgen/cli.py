import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from extendgen.codegen.extend import extend as run_extend
from extendgen.codegen.types import ResourceType
from extendgen.config import get_config
from extendgen.exceptions import ExtendGenError
from extendgen.interaction import ConsoleInteraction

console = Console()
app = typer.Typer(
    name='extendgen',
    help='Override theme and extension resources without forking them',
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(message)s',
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def extend(
    resource_type: Annotated[
        ResourceType, typer.Argument(help='Type of the resource to extend')
    ],
    resource_name: Annotated[
        str, typer.Argument(help='Name of the resource, e.g. Header')
    ],
    target: Annotated[
        str,
        typer.Option('--target', '-t', help='Module to create the override in'),
    ] = '.',
    source: Annotated[
        str | None,
        typer.Option(
            '--source', '-s', help='Module to extend from instead of searching'
        ),
    ] = None,
    typescript: Annotated[
        bool,
        typer.Option('--typescript/--javascript', help='Language of generated files'),
    ] = False,
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug output')
    ] = False,
) -> None:
    """Create an override of a resource in the target module.

    Exports you pick are extended, everything else is re-exported from the
    module the resource comes from.

    Examples:
        extendgen extend component Header
        extendgen extend route Checkout --target ./my-theme --typescript
        extendgen extend query ProductList -s node_modules/@scandipwa/scandipwa
    """
    setup_logging(verbose)

    try:
        settings = get_config(config)
        created = asyncio.run(
            run_extend(
                resource_type,
                resource_name,
                target,
                logging.getLogger('extendgen'),
                ConsoleInteraction(console),
                source_module_path=source,
                config=settings,
                is_typescript=typescript,
            )
        )
    except (ExtendGenError, OSError) as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        raise typer.Exit(1)

    if not created:
        console.print('[yellow]No files were created.[/yellow]')
        return

    console.print('[dim]Created files:[/dim]')
    for path in created:
        console.print(f'  - {path}')


@app.command()
def version() -> None:
    """Show the version of extendgen."""
    from extendgen import __version__

    console.print(f'extendgen version: {__version__}')


if __name__ == '__main__':
    app()
