"""Tests for AssetClassifier class."""

import pytest

from photoderiv.asset_classifier import AssetClassifier, AssetKind, clean_stem


class TestCleanStem:
    """Tests for clean_stem()."""

    @pytest.mark.parametrize('stem, expected', [
        ('photo', 'photo'),
        ('_photo_', 'photo'),
        ('--photo-400--', 'photo-400'),
        ('  my photo!', 'my photo'),
        ('___', ''),
    ])
    def test_trims_non_alphanumeric(self, stem, expected):
        assert clean_stem(stem) == expected


class TestAssetClassifier:
    """Tests for AssetClassifier class."""

    @pytest.fixture
    def classifier(self):
        return AssetClassifier()

    def test_init_defaults(self, classifier):
        """Test the preset widths and reserved names are ignored directories."""
        assert classifier.widths == (20, 200, 400, 600, 800, 1000, 1200)
        assert 'default' in classifier.ignored_dir_names
        assert '800' in classifier.ignored_dir_names

    def test_source_candidate(self, classifier, tmp_path):
        path = tmp_path / 'photo.jpg'
        path.write_bytes(b'')

        assert classifier.classify(path) == AssetKind.SOURCE_CANDIDATE

    @pytest.mark.parametrize('name', ['a.jpg', 'a.JPG', 'a.jpeg', 'a.Png', 'a.gif', 'a.webp'])
    def test_supported_extensions(self, classifier, tmp_path, name):
        assert classifier.classify(tmp_path / name, is_dir=False) == AssetKind.SOURCE_CANDIDATE

    @pytest.mark.parametrize('name', ['a.avif', 'notes.txt', 'a.tiff', 'README', 'a.jpg.bak'])
    def test_unsupported_extensions(self, classifier, tmp_path, name):
        assert classifier.classify(tmp_path / name, is_dir=False) == AssetKind.IGNORE

    @pytest.mark.parametrize('name', ['photo-400.jpg', 'photo-20.png', 'photo-1200.jpeg', '_photo-800_.jpg'])
    def test_derivative_names_ignored(self, classifier, tmp_path, name):
        assert classifier.classify(tmp_path / name, is_dir=False) == AssetKind.IGNORE

    @pytest.mark.parametrize('name', ['photo-5.jpg', 'photo-12345.jpg', 'photo400.jpg', 'photo_400.jpg'])
    def test_near_derivative_names_kept(self, classifier, tmp_path, name):
        assert classifier.classify(tmp_path / name, is_dir=False) == AssetKind.SOURCE_CANDIDATE

    def test_known_false_positive(self, classifier, tmp_path):
        """Test a year-suffixed original is treated as a derivative."""
        assert classifier.classify(tmp_path / 'event-2024.jpg', is_dir=False) == AssetKind.IGNORE

    def test_width_directory_ignored(self, classifier, tmp_path):
        path = tmp_path / '800'
        path.mkdir()

        assert classifier.classify(path) == AssetKind.IGNORE

    def test_reserved_directory_ignored(self, classifier, tmp_path):
        assert classifier.classify(tmp_path / 'default', is_dir=True) == AssetKind.IGNORE

    def test_other_directory(self, classifier, tmp_path):
        path = tmp_path / 'holiday'
        path.mkdir()

        assert classifier.classify(path) == AssetKind.DIRECTORY

    def test_directory_with_image_name(self, classifier, tmp_path):
        """Test a directory is never a source candidate."""
        assert classifier.classify(tmp_path / 'album.jpg', is_dir=True) == AssetKind.DIRECTORY

    def test_custom_configuration(self, tmp_path):
        """Test widths, reserved names and extensions are injectable."""
        classifier = AssetClassifier(widths=[64], reserved_names=['out'], extensions=['.PNG'])

        assert classifier.classify(tmp_path / '64', is_dir=True) == AssetKind.IGNORE
        assert classifier.classify(tmp_path / '800', is_dir=True) == AssetKind.DIRECTORY
        assert classifier.classify(tmp_path / 'out', is_dir=True) == AssetKind.IGNORE
        assert classifier.classify(tmp_path / 'default', is_dir=True) == AssetKind.DIRECTORY
        assert classifier.classify(tmp_path / 'a.png', is_dir=False) == AssetKind.SOURCE_CANDIDATE
        assert classifier.classify(tmp_path / 'a.jpg', is_dir=False) == AssetKind.IGNORE

    def test_reserved_path_matches_only_that_directory(self, tmp_path):
        """Test a reserved path skips that directory but not others with its name."""
        classifier = AssetClassifier(reserved_paths=[tmp_path / 'out'])

        assert classifier.classify(tmp_path / 'out', is_dir=True) == AssetKind.IGNORE
        assert classifier.classify(tmp_path / 'trips' / 'out', is_dir=True) == AssetKind.DIRECTORY

    def test_is_derivative_name(self):
        assert AssetClassifier.is_derivative_name('photo-400') is True
        assert AssetClassifier.is_derivative_name('photo') is False
