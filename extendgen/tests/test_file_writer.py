"""Tests for create-only file writing."""

from unittest.mock import patch

import pytest
from upath import UPath

from extendgen.codegen.file_writer import FileMaterializer
from extendgen.exceptions import OutputError


class TestFileMaterializer:
    def test_creates_file_and_parents(self, tmp_path):
        writer = FileMaterializer()
        path = tmp_path / 'src' / 'component' / 'Header' / 'Header.component.js'

        assert writer.write(path, 'export default 1;\n')

        assert path.read_text(encoding='utf-8') == 'export default 1;\n'

    def test_existing_file_untouched(self, tmp_path):
        """Test an existing file is never replaced."""
        path = tmp_path / 'Header.component.js'
        path.write_text('custom', encoding='utf-8')
        writer = FileMaterializer()

        assert not writer.write(path, 'generated')

        assert path.read_text(encoding='utf-8') == 'custom'

    def test_second_write_is_skipped(self, tmp_path):
        writer = FileMaterializer()
        path = tmp_path / 'a.js'

        assert writer.write(str(path), 'first')
        assert not writer.write(str(path), 'second')
        assert path.read_text(encoding='utf-8') == 'first'

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('', encoding='utf-8')

        with pytest.raises(OutputError) as exc_info:
            FileMaterializer().write(blocker / 'nested' / 'a.js', 'content')

        assert exc_info.value.output_path.endswith('a.js')

    def test_race_with_concurrent_creation(self, tmp_path):
        """Test a file created after the existence check is not replaced."""
        path = tmp_path / 'a.js'
        path.write_text('other process', encoding='utf-8')

        with patch.object(type(UPath(path)), 'exists', return_value=False):
            assert not FileMaterializer().write(path, 'generated')

        assert path.read_text(encoding='utf-8') == 'other process'
