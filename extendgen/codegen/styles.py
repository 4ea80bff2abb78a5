"""Style file handling for component and route overrides."""

import logging
from pathlib import Path

from extendgen.codegen.file_writer import FileMaterializer
from extendgen.codegen.types import ResourceType, StyleOption
from extendgen.config import ExtendConfig
from extendgen.interaction import Choice, UserInteraction

logger = logging.getLogger(__name__)

__all__ = [
    'is_style_file_applicable',
    'get_style_file_name',
    'render_style_file',
    'select_style_option',
    'create_style_file',
    'maybe_create_style',
]


def is_style_file_applicable(resource_type: ResourceType, file_name: str) -> bool:
    """Only the component file of a component or route carries styles."""
    return resource_type.has_styles and '.component' in file_name


def get_style_file_name(resource_name: str, config: ExtendConfig) -> str:
    return f'{resource_name}{config.style_extension}'


def render_style_file(resource_name: str, option: StyleOption) -> str:
    match option:
        case StyleOption.EXTEND:
            header = f'// Additions to the original {resource_name} styles'
        case StyleOption.OVERRIDE:
            header = f'// Replacement for the original {resource_name} styles'
        case StyleOption.KEEP:
            raise ValueError('Keeping styles does not create a style file')

    return f'{header}\n\n.{resource_name} {{\n}}\n'


async def select_style_option(interaction: UserInteraction) -> StyleOption:
    return await interaction.select(
        'What would you like to do with styles?',
        [
            Choice(display_name=option.description, value=option)
            for option in StyleOption
        ],
    )


def create_style_file(
    resource_name: str,
    target_directory: Path,
    option: StyleOption,
    config: ExtendConfig,
    writer: FileMaterializer,
    logger: logging.Logger = logger,
) -> str | None:
    """Write the style file for ``option``; None if it already exists."""
    style_path = Path(target_directory) / get_style_file_name(resource_name, config)

    if not writer.write(style_path, render_style_file(resource_name, option)):
        logger.warning(f'File {style_path.name} exists and will not be overwritten')
        return None

    return str(style_path)


async def maybe_create_style(
    resource_name: str,
    target_directory: Path,
    interaction: UserInteraction,
    config: ExtendConfig,
    writer: FileMaterializer,
    logger: logging.Logger = logger,
) -> tuple[StyleOption, str | None]:
    """Ask how to treat styles and create at most one style file.

    Returns:
        The chosen option and the created file path, or None when the option
        keeps the original styles or the file already exists.
    """
    option = await select_style_option(interaction)

    if option is StyleOption.KEEP:
        return option, None

    return option, create_style_file(
        resource_name, target_directory, option, config, writer, logger
    )
