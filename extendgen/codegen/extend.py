"""Override pipeline orchestration.

This module provides the ExtendPipeline class and the ``extend`` entry point
that turn a resource of an ancestor module into an override inside a
descendant module.
"""

import logging
from pathlib import Path

from extendgen.codegen.exports import (
    analyze_exports,
    collect_references,
    get_default_export_code,
    strip_type_assertions,
)
from extendgen.codegen.file_writer import FileMaterializer
from extendgen.codegen.lint import EslintFixer, LintFixer
from extendgen.codegen.modules import resolve_module
from extendgen.codegen.resources import (
    get_file_list,
    get_relative_resource_directory,
    locate_resource,
    resolve_target_resource_directory,
    validate_resource_existence,
)
from extendgen.codegen.styles import is_style_file_applicable, maybe_create_style
from extendgen.codegen.synthesis import (
    collect_copied_imports,
    get_module_import_directory,
    get_source_import_path,
    synthesize,
)
from extendgen.codegen.types import (
    GeneratedFile,
    ModuleInfo,
    Resource,
    ResourceType,
    StyleOption,
    SynthesisContext,
)
from extendgen.codegen.utils import replace_ts_with_js
from extendgen.config import ExtendConfig
from extendgen.exceptions import CodeGenerationError, ResourceNotFoundError
from extendgen.interaction import UserInteraction, choose_exports

__all__ = ['ExtendPipeline', 'extend']

TYPE_FILE_MARKER = '.type.ts'


class ExtendPipeline:
    """Creates overrides of a resource, one source file at a time.

    The pipeline runs through these stages:
    - resolve the target module,
    - locate the source resource in the module hierarchy,
    - validate the source resource exists outside the target module,
    - process every resource file in order,
    - run the lint auto-fixer once over everything created.

    Files are processed strictly one after another: each may stop for
    operator input, and prompts for different files must not interleave.

    Attributes:
        config: The immutable configuration used by every step.
        interaction: Where export and style choices come from.
        lint_fixer: Post-processor for created files. When None, an
            EslintFixer running in the target module is used.
        writer: Create-only writer for generated files.

    Example:
        >>> pipeline = ExtendPipeline(ExtendConfig(), ConsoleInteraction())
        >>> created = asyncio.run(
        ...     pipeline.run(ResourceType.COMPONENT, 'Header', './my-theme')
        ... )
    """

    def __init__(
        self,
        config: ExtendConfig,
        interaction: UserInteraction,
        logger: logging.Logger | None = None,
        lint_fixer: LintFixer | None = None,
        writer: FileMaterializer | None = None,
    ):
        self.config = config
        self.interaction = interaction
        self.logger = logger or logging.getLogger(__name__)
        self.lint_fixer = lint_fixer
        self.writer = writer or FileMaterializer()

    async def run(
        self,
        resource_type: ResourceType,
        resource_name: str,
        target_module_path: str | Path,
        source_module_path: str | Path | None = None,
        is_typescript: bool = False,
    ) -> list[str]:
        """Create the override and return the created file paths in order.

        An empty list means the source resource was not found or nothing
        was created.
        """
        target_module = resolve_module(target_module_path, self.config)
        relative_directory = get_relative_resource_directory(
            resource_name, resource_type
        )

        try:
            source_resource_path = locate_resource(
                resource_name,
                resource_type,
                target_module.root_path,
                source_module_path,
                self.config,
            )
        except ResourceNotFoundError as e:
            self.logger.warning(str(e))
            return []

        source_module = resolve_module(source_resource_path, self.config)

        if not validate_resource_existence(
            source_resource_path,
            source_module.root_path,
            target_module.root_path,
            resource_type,
            resource_name,
            self.logger,
        ):
            return []

        resource = Resource(
            type=resource_type,
            name=resource_name,
            source_path=source_resource_path,
            file_list=get_file_list(
                resource_type, resource_name, source_resource_path, self.config
            ),
        )
        target_directory = resolve_target_resource_directory(
            relative_directory,
            target_module.root_path,
            source_module.type,
            source_module.name,
        )
        self.logger.debug(
            f'Extending {source_resource_path} into {target_directory}: '
            f'{", ".join(resource.file_list)}'
        )

        created_files: list[str] = []
        for file_name in resource.file_list:
            created_files.extend(
                await self._process_file(
                    resource,
                    file_name,
                    source_module,
                    target_directory,
                    is_typescript,
                )
            )

        lint_fixer = self.lint_fixer or EslintFixer(
            self.config.lint_command, cwd=target_module.root_path, logger=self.logger
        )
        try:
            lint_fixer.fix(list(created_files))
        except Exception as e:
            self.logger.warning(f'Lint auto-fix failed: {e}')

        return created_files

    async def _process_file(
        self,
        resource: Resource,
        file_name: str,
        source_module: ModuleInfo,
        target_directory: Path,
        is_typescript: bool,
    ) -> list[str]:
        """Handle one resource file; returns the paths it created."""
        if not is_typescript and TYPE_FILE_MARKER in file_name:
            self.logger.warning(
                f'Skipping {file_name}: type declarations are not generated '
                'for JavaScript'
            )
            return []

        # a query resource path is the query file itself
        source_file_path = (
            resource.source_path
            if resource.type is ResourceType.QUERY
            else resource.source_path / file_name
        )
        new_file_path = target_directory / (
            file_name if is_typescript else replace_ts_with_js(file_name)
        )

        if new_file_path.exists():
            self.logger.warning(f'File {file_name} exists and will not be overwritten')
            return []

        code = source_file_path.read_text(encoding='utf-8')
        export_map = analyze_exports(code, file_name, include_types=is_typescript)

        if not export_map.named:
            self.logger.warning(
                f'No named exports were found in {file_name}, continuing.'
            )
            return []

        default_code = get_default_export_code(export_map, code)
        if default_code and not is_typescript:
            default_code = strip_type_assertions(default_code, file_name)
            references = collect_references(default_code, file_name)
        elif export_map.default is not None:
            references = export_map.default.references
        else:
            references = frozenset()

        chosen = await choose_exports(
            self.interaction, file_name, list(export_map.named)
        )

        created: list[str] = []
        style_option: StyleOption | None = None
        if is_style_file_applicable(resource.type, file_name):
            style_option, style_path = await maybe_create_style(
                resource.name,
                target_directory,
                self.interaction,
                self.config,
                self.writer,
                self.logger,
            )
            if style_path is not None:
                created.append(style_path)

        if not chosen:
            self.logger.warning(
                f'Nothing was chosen to extend in {file_name}, skipping.'
            )
            return created

        relative_directory = get_relative_resource_directory(
            resource.name, resource.type
        )
        context = SynthesisContext(
            all_exports=list(export_map.named),
            chosen_exports=chosen,
            default_export_code=default_code,
            file_name=file_name,
            resource_type=resource.type,
            resource_name=resource.name,
            relative_resource_directory=relative_directory,
            source_module_name=source_module.name,
            source_module_type=source_module.type,
            source_module_alias=source_module.alias,
            source_import_path=get_source_import_path(
                source_module.name,
                source_module.alias,
                resource.type,
                relative_directory,
                file_name,
            ),
            chosen_style_option=style_option,
            copied_imports=collect_copied_imports(
                export_map,
                code,
                references,
                get_module_import_directory(source_module.name, relative_directory),
                is_typescript,
            ),
            default_references=references,
            is_typescript=is_typescript,
        )

        try:
            content = synthesize(context)
        except CodeGenerationError as e:
            self.logger.warning(f'Skipping {file_name}: {e}')
            return created

        generated = GeneratedFile(path=new_file_path, content=content)
        generated.created = self.writer.write(generated.path, generated.content)

        if generated.created:
            created.append(str(generated.path))
        else:
            self.logger.warning(f'File {file_name} exists and will not be overwritten')

        return created


async def extend(
    resource_type: ResourceType,
    resource_name: str,
    target_module_path: str | Path,
    logger: logging.Logger | None,
    interaction: UserInteraction,
    source_module_path: str | Path | None = None,
    config: ExtendConfig | None = None,
    is_typescript: bool = False,
    lint_fixer: LintFixer | None = None,
) -> list[str]:
    """Override ``resource_name`` in the module at ``target_module_path``.

    Args:
        resource_type: Type of the resource to extend.
        resource_name: Name of the resource to extend, e.g. 'Header'.
        target_module_path: Module the new resource is created in.
        logger: Receives skip notifications. Defaults to this module's logger.
        interaction: Asks the operator what to extend.
        source_module_path: Module to extend from. Searched through the
            module hierarchy when omitted.
        config: Configuration for the run. Defaults to ExtendConfig().
        is_typescript: Generate TypeScript instead of JavaScript.
        lint_fixer: Post-processor for created files.

    Returns:
        Absolute paths of the created files, in creation order.
    """
    pipeline = ExtendPipeline(
        config or ExtendConfig(),
        interaction,
        logger=logger,
        lint_fixer=lint_fixer,
    )
    return await pipeline.run(
        resource_type,
        resource_name,
        target_module_path,
        source_module_path=source_module_path,
        is_typescript=is_typescript,
    )
