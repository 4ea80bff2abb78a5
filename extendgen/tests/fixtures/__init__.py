"""Test fixtures for extendgen tests.

This module provides sample theme sources and helpers that lay out module
trees on disk for the resolution and generation tests.
"""

import json
from pathlib import Path

from extendgen.codegen.types import StyleOption

HEADER_COMPONENT_JS = """\
import PropTypes from 'prop-types';
import { PureComponent } from 'react';

import './Header.style';

/** @namespace Component/Header/Component */
export class HeaderComponent extends PureComponent {
    static propTypes = {
        title: PropTypes.string.isRequired
    };

    render() {
        const { title } = this.props;

        return <header block="Header">{ title }</header>;
    }
}

export const headerPropTypes = {
    title: PropTypes.string
};

export default HeaderComponent;
"""

HEADER_CONTAINER_JS = """\
import { PureComponent } from 'react';
import { connect } from 'react-redux';

import HeaderComponent from './Header.component';
import { HEADER_TITLE } from './Header.config';

/** @namespace Component/Header/Container/mapStateToProps */
export const mapStateToProps = (state) => ({
    isOpen: state.HeaderReducer.isOpen
});

/** @namespace Component/Header/Container/mapDispatchToProps */
export const mapDispatchToProps = () => ({});

/** @namespace Component/Header/Container */
export class HeaderContainer extends PureComponent {
    render() {
        return <HeaderComponent title={ HEADER_TITLE } />;
    }
}

export default connect(mapStateToProps, mapDispatchToProps)(HeaderContainer);
"""

HEADER_CONFIG_JS = """\
export const HEADER_TITLE = 'Header';
"""

HEADER_TYPE_TS = """\
export interface HeaderComponentProps {
    title: string;
}
"""

HEADER_STYLE_SCSS = """\
.Header {
    display: block;
}
"""

HEADER_COMPONENT_TSX = """\
import { PureComponent } from 'react';

import { HeaderComponentProps } from './Header.type';

export interface HeaderState {
    isOpen: boolean;
}

export class HeaderComponent extends PureComponent<HeaderComponentProps, HeaderState> {
    render(): JSX.Element {
        return <header>{ this.props.title }</header>;
    }
}

export const headerPropTypes = {
    title: 'string',
};

export default HeaderComponent as unknown as typeof PureComponent;
"""

PRODUCT_LIST_QUERY_JS = """\
import { Field } from 'Util/Query';

/** @namespace Query/ProductList */
export class ProductListQuery {
    getQuery() {
        return new Field('products');
    }
}

export default new ProductListQuery();
"""

CHECKOUT_COMPONENT_JS = """\
import { PureComponent } from 'react';

export class CheckoutComponent extends PureComponent {
    render() {
        return null;
    }
}

export default CheckoutComponent;
"""

WISHLIST_BUTTON_COMPONENT_JS = """\
import { PureComponent } from 'react';

export class WishlistButtonComponent extends PureComponent {
    render() {
        return null;
    }
}

export default WishlistButtonComponent;
"""


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return path


def write_module(
    root: Path,
    name: str,
    module_type: str | None = 'theme',
    alias: str | None = None,
    parent: str | None = None,
) -> Path:
    """Create a module root with a package.json describing it."""
    metadata = {}
    if module_type:
        metadata['type'] = module_type
    if alias:
        metadata['themeAlias'] = alias
    if parent:
        metadata['parentTheme'] = parent

    manifest = {'name': name, 'version': '1.0.0'}
    if metadata:
        manifest['scandipwa'] = metadata

    write_file(root / 'package.json', json.dumps(manifest, indent=4))
    return root


def create_workspace(tmp_path: Path) -> dict[str, Path]:
    """Lay out a child theme with an installed parent theme and extension.

    Returns:
        Mapping with the 'theme', 'parent' and 'extension' module roots.
    """
    theme = write_module(
        tmp_path / 'my-theme', 'my-theme', parent='@scandipwa/scandipwa'
    )

    parent = write_module(
        theme / 'node_modules' / '@scandipwa' / 'scandipwa',
        '@scandipwa/scandipwa',
        alias='Source',
    )
    header = parent / 'src' / 'component' / 'Header'
    write_file(header / 'Header.component.js', HEADER_COMPONENT_JS)
    write_file(header / 'Header.container.js', HEADER_CONTAINER_JS)
    write_file(header / 'Header.config.js', HEADER_CONFIG_JS)
    write_file(header / 'Header.type.ts', HEADER_TYPE_TS)
    write_file(header / 'Header.style.scss', HEADER_STYLE_SCSS)
    write_file(
        parent / 'src' / 'route' / 'Checkout' / 'Checkout.component.js',
        CHECKOUT_COMPONENT_JS,
    )
    write_file(
        parent / 'src' / 'query' / 'ProductList.query.js', PRODUCT_LIST_QUERY_JS
    )

    extension = write_module(
        theme / 'node_modules' / '@scandipwa' / 'wishlist',
        '@scandipwa/wishlist',
        module_type='extension',
    )
    write_file(
        extension
        / 'src'
        / 'component'
        / 'WishlistButton'
        / 'WishlistButton.component.js',
        WISHLIST_BUTTON_COMPONENT_JS,
    )

    return {'theme': theme, 'parent': parent, 'extension': extension}


def create_typescript_workspace(tmp_path: Path) -> dict[str, Path]:
    """Lay out a child theme whose parent theme is written in TypeScript."""
    theme = write_module(tmp_path / 'ts-theme', 'ts-theme', parent='base-theme')
    parent = write_module(
        theme / 'node_modules' / 'base-theme', 'base-theme', alias='Base'
    )
    header = parent / 'src' / 'component' / 'Header'
    write_file(header / 'Header.component.tsx', HEADER_COMPONENT_TSX)
    write_file(header / 'Header.type.ts', HEADER_TYPE_TS)
    return {'theme': theme, 'parent': parent}


class ScriptedInteraction:
    """UserInteraction answering from a script instead of a terminal.

    Args:
        selections: Export names to pick, keyed by file name.
        style_option: Answer to every style question.
    """

    def __init__(
        self,
        selections: dict[str, list[str]] | None = None,
        style_option: StyleOption = StyleOption.KEEP,
    ):
        self.selections = selections or {}
        self.style_option = style_option
        self.prompts: list[str] = []
        self.offered: dict[str, list[str]] = {}

    async def multi_select(self, prompt, options):
        self.prompts.append(prompt)
        file_name = prompt.rsplit(' ', 1)[-1]
        self.offered[file_name] = [option.display_name for option in options]
        wanted = self.selections.get(file_name, [])
        return [option.value for option in options if option.display_name in wanted]

    async def select(self, prompt, options):
        self.prompts.append(prompt)
        return next(
            option.value for option in options if option.value == self.style_option
        )


class RecordingLintFixer:
    def __init__(self, error: Exception | None = None):
        self.calls: list[list[str]] = []
        self.error = error

    def fix(self, file_paths):
        self.calls.append(list(file_paths))
        if self.error:
            raise self.error
