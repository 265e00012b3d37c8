"""
Pytest fixtures for photoderiv tests.
"""

import pytest


@pytest.fixture
def write_image():
    """Fixture providing a factory that writes a test image to disk."""
    from PIL import Image

    def _write(path, size=(40, 30), color=(255, 0, 0), mode='RGB', fmt=None, orientation=None, image=None):
        path.parent.mkdir(parents=True, exist_ok=True)
        img = image if image is not None else Image.new(mode, size, color=color)
        params = {}
        if orientation is not None:
            exif = Image.Exif()
            exif[0x0112] = orientation
            params['exif'] = exif.tobytes()
        img.save(path, format=fmt, **params)
        return path

    return _write


@pytest.fixture
def half_and_half():
    """Fixture providing a 1000x600 image: left half red, right half blue."""
    from PIL import Image

    img = Image.new('RGB', (1000, 600), color=(255, 0, 0))
    img.paste((0, 0, 255), (500, 0, 1000, 600))
    return img


@pytest.fixture
def rgba_buffer():
    """Fixture providing a 3x2 RGBA buffer with a distinct value per pixel."""
    from PIL import Image

    img = Image.new('RGBA', (3, 2))
    img.putdata([
        (1, 0, 0, 255), (2, 0, 0, 255), (3, 0, 0, 255),
        (4, 0, 0, 255), (5, 0, 0, 255), (6, 0, 0, 255),
    ])
    return img


@pytest.fixture
def photo_tree(tmp_path, write_image):
    """
    Fixture providing a small input tree.

    photos/
        a.jpg               orientation 6, 100x60
        b.png               no orientation, 80x40
        notes.txt
        trips/c.jpeg        orientation 1, 50x50
        trips/c-400.jpeg    looks like a derivative
        200/old.jpg         generated output from a previous layout
    """
    root = tmp_path / 'photos'
    write_image(root / 'a.jpg', size=(100, 60), orientation=6)
    write_image(root / 'b.png', size=(80, 40), mode='RGBA', color=(0, 255, 0, 128))
    (root / 'notes.txt').write_text('not an image')
    write_image(root / 'trips' / 'c.jpeg', size=(50, 50), orientation=1)
    write_image(root / 'trips' / 'c-400.jpeg', size=(20, 20))
    write_image(root / '200' / 'old.jpg', size=(20, 20))
    return root


@pytest.fixture
def small_widths():
    """Fixture providing a short width list."""
    return (20, 40)


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
