"""Tests for style file handling."""

import asyncio

import pytest

from extendgen.codegen.file_writer import FileMaterializer
from extendgen.codegen.styles import (
    create_style_file,
    is_style_file_applicable,
    maybe_create_style,
    render_style_file,
    select_style_option,
)
from extendgen.codegen.types import ResourceType, StyleOption
from extendgen.config import ExtendConfig

from .fixtures import ScriptedInteraction


class TestApplicability:
    @pytest.mark.parametrize(
        'resource_type,file_name,expected',
        [
            (ResourceType.COMPONENT, 'Header.component.js', True),
            (ResourceType.ROUTE, 'Checkout.component.tsx', True),
            (ResourceType.COMPONENT, 'Header.container.js', False),
            (ResourceType.QUERY, 'ProductList.query.js', False),
            (ResourceType.STORE, 'Cart.component.js', False),
        ],
    )
    def test_applicable(self, resource_type, file_name, expected):
        assert is_style_file_applicable(resource_type, file_name) is expected


class TestRenderStyleFile:
    def test_extend(self):
        assert render_style_file('Header', StyleOption.EXTEND) == (
            '// Additions to the original Header styles\n\n.Header {\n}\n'
        )

    def test_override(self):
        content = render_style_file('Header', StyleOption.OVERRIDE)
        assert content.startswith('// Replacement for the original Header styles')

    def test_keep(self):
        with pytest.raises(ValueError):
            render_style_file('Header', StyleOption.KEEP)


class TestCreateStyle:
    def test_select_offers_every_option(self):
        interaction = ScriptedInteraction(style_option=StyleOption.OVERRIDE)

        option = asyncio.run(select_style_option(interaction))

        assert option is StyleOption.OVERRIDE
        assert interaction.prompts == ['What would you like to do with styles?']

    def test_create(self, tmp_path):
        path = create_style_file(
            'Header',
            tmp_path,
            StyleOption.EXTEND,
            ExtendConfig(),
            FileMaterializer(),
        )
        assert path == str(tmp_path / 'Header.style.scss')

    def test_create_existing(self, tmp_path, caplog):
        (tmp_path / 'Header.style.scss').write_text('.Header {}', encoding='utf-8')

        path = create_style_file(
            'Header',
            tmp_path,
            StyleOption.EXTEND,
            ExtendConfig(),
            FileMaterializer(),
        )

        assert path is None
        assert 'Header.style.scss exists' in caplog.text
        assert (tmp_path / 'Header.style.scss').read_text() == '.Header {}'

    def test_keep_creates_nothing(self, tmp_path):
        result = asyncio.run(
            maybe_create_style(
                'Header',
                tmp_path,
                ScriptedInteraction(style_option=StyleOption.KEEP),
                ExtendConfig(),
                FileMaterializer(),
            )
        )

        assert result == (StyleOption.KEEP, None)
        assert list(tmp_path.iterdir()) == []

    def test_extend_creates_one_file(self, tmp_path):
        option, path = asyncio.run(
            maybe_create_style(
                'Header',
                tmp_path,
                ScriptedInteraction(style_option=StyleOption.EXTEND),
                ExtendConfig(),
                FileMaterializer(),
            )
        )

        assert option is StyleOption.EXTEND
        assert [p.name for p in tmp_path.iterdir()] == ['Header.style.scss']
        assert path == str(tmp_path / 'Header.style.scss')
