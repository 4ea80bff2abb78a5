"""Custom exceptions for extendgen.

This module defines a hierarchy of exceptions used throughout extendgen
to provide clear, actionable error messages for the different ways an
override can fail to be generated.
"""


class ExtendGenError(Exception):
    """Base exception for all extendgen errors.

    All exceptions raised by extendgen inherit from this class, making it easy
    to catch all extendgen-related errors with a single except clause.

    Example:
        try:
            await extend(ResourceType.COMPONENT, 'Header', './my-theme', ...)
        except ExtendGenError as e:
            print(f"extendgen error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ModuleResolutionError(ExtendGenError):
    """No module boundary was found above a path.

    Raised when walking up the directory hierarchy reaches the filesystem
    root without finding the module marker file.

    Attributes:
        path: The path the walk started from.
        marker: The marker file name that was searched for.
    """

    def __init__(self, path: str, marker: str = 'package.json'):
        self.path = path
        self.marker = marker
        super().__init__(f"No module ('{marker}') found above '{path}'")


class ResourceNotFoundError(ExtendGenError):
    """No reachable module defines the requested resource.

    Attributes:
        resource_type: The type of the resource (component, route, ...).
        resource_name: The name of the resource.
        searched: Module roots that were searched, in precedence order.
    """

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        searched: list[str] | None = None,
    ):
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.searched = searched or []
        message = f"{resource_type.capitalize()} '{resource_name}' was not found"
        if self.searched:
            message += f' (searched: {", ".join(self.searched)})'
        super().__init__(message)


class CodeGenerationError(ExtendGenError):
    """Error during code generation.

    Raised when the synthesized file content is not valid source code.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class ConfigurationError(ExtendGenError):
    """Error in configuration.

    This exception is raised when the configuration is invalid or
    cannot be loaded.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(ExtendGenError):
    """Error writing generated output.

    This exception is raised when a generated file cannot be written
    to its target location.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
