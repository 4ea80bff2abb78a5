import re

__all__ = (
    'capitalize',
    'replace_ts_with_js',
    'strip_script_extension',
    'source_local_name',
)

SCRIPT_EXTENSION_PATTERN = re.compile(r'\.(jsx?|tsx?)$')


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def replace_ts_with_js(file_name: str) -> str:
    """Map a TypeScript file name to its JavaScript counterpart.

    Header.component.tsx -> Header.component.js
    """
    return re.sub(r'\.tsx?$', '.js', file_name)


def strip_script_extension(file_name: str) -> str:
    return SCRIPT_EXTENSION_PATTERN.sub('', file_name)


def source_local_name(name: str) -> str:
    """Local binding the original symbol is imported under.

    HeaderComponent -> SourceHeaderComponent, mapStateToProps -> sourceMapStateToProps
    """
    if name[:1].isupper():
        return f'Source{name}'
    return f'source{capitalize(name)}'
