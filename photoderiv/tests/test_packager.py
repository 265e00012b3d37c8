"""Tests for Packager class."""

import zipfile

import pytest
from photoderiv.packager import Packager


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / 'out'
    (root / '20' / 'trips').mkdir(parents=True)
    (root / 'a.jpg').write_bytes(b'corrected')
    (root / '20' / 'a.jpg').write_bytes(b'small')
    (root / '20' / 'trips' / 'c.jpeg').write_bytes(b'nested')
    return root


class TestPackager:
    """Tests for Packager class."""

    def test_archive_entries(self, tree, tmp_path, logger):
        dest = tmp_path / 'out.zip'

        count = Packager(logger).archive(tree, dest)

        assert count == 3
        with zipfile.ZipFile(dest) as zf:
            assert sorted(zf.namelist()) == ['20/a.jpg', '20/trips/c.jpeg', 'a.jpg']
            assert zf.read('20/trips/c.jpeg') == b'nested'

    def test_entries_stored_uncompressed(self, tree, tmp_path, logger):
        dest = tmp_path / 'out.zip'

        Packager(logger).archive(tree, dest)

        with zipfile.ZipFile(dest) as zf:
            assert all(info.compress_type == zipfile.ZIP_STORED for info in zf.infolist())

    def test_archive_inside_tree_is_skipped(self, tree, logger):
        dest = tree / 'bundle.zip'

        Packager(logger).archive(tree, dest)
        count = Packager(logger).archive(tree, dest)

        assert count == 3
        with zipfile.ZipFile(dest) as zf:
            assert 'bundle.zip' not in zf.namelist()

    def test_stable_entry_order(self, tree, tmp_path, logger):
        first = tmp_path / 'one.zip'
        second = tmp_path / 'two.zip'

        Packager(logger).archive(tree, first)
        Packager(logger).archive(tree, second)

        with zipfile.ZipFile(first) as a, zipfile.ZipFile(second) as b:
            assert a.namelist() == b.namelist()

    def test_skips_partial_writes(self, tree, tmp_path, logger):
        (tree / '.a.jpg.x1y2.part').write_bytes(b'half')

        count = Packager(logger).archive(tree, tmp_path / 'out.zip')

        assert count == 3

    def test_missing_tree(self, tmp_path, logger):
        with pytest.raises(OSError):
            Packager(logger).archive(tmp_path / 'missing', tmp_path / 'out.zip')

    def test_no_temp_file_left(self, tree, tmp_path, logger):
        Packager(logger).archive(tree, tmp_path / 'out.zip')

        assert [p.name for p in tmp_path.iterdir() if p.name.endswith('.part')] == []
