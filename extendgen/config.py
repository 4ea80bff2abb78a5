import os
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from extendgen.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['extendgen.yaml', 'extendgen.yml']


class ExtendConfig(BaseSettings):
    """Settings consulted while resolving and generating an override.

    Built once at the entry point and passed explicitly to every step;
    instances are immutable.
    """

    model_config = SettingsConfigDict(env_prefix='EXTENDGEN_', frozen=True)

    marker_file: str = Field(
        'package.json', description='File that marks the root of a module.'
    )

    metadata_key: str = Field(
        'scandipwa',
        description='Key of the marker file section holding module metadata.',
    )

    parent_key: str = Field(
        'parentTheme',
        description='Metadata key naming the parent module of a theme.',
    )

    alias_key: str = Field(
        'themeAlias', description='Metadata key holding the import alias of a module.'
    )

    default_module_type: str = Field(
        'theme', description='Module type assumed when the metadata declares none.'
    )

    fallback_source_modules: list[str] = Field(
        default_factory=lambda: ['@scandipwa/scandipwa'],
        description='Modules searched after the parent chain, in order.',
    )

    script_extensions: list[str] = Field(
        default_factory=lambda: ['.ts', '.tsx', '.js', '.jsx'],
        description='File extensions treated as resource source files.',
    )

    style_extension: str = Field(
        '.style.scss', description='Suffix of generated style files.'
    )

    lint_command: list[str] = Field(
        default_factory=lambda: ['npx', 'eslint', '--fix'],
        description='Command run over the created files once generation is done.',
    )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.load(Path(path).read_text(), Loader=yaml.FullLoader) or {}


def _validate(data: dict, source: str) -> ExtendConfig:
    try:
        return ExtendConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f'Invalid configuration: {e}', config_path=source)


def get_config(path: str | None = None) -> ExtendConfig:
    """Load configuration from a file, pyproject.toml or the environment."""
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        return _validate(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _validate(load_yaml(candidate), str(candidate))

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        pyproject = tomllib.loads(candidate.read_text())
        tools = pyproject.get('tool', {})

        if 'extendgen' in tools:
            return _validate(tools['extendgen'], str(candidate))

    return ExtendConfig()
