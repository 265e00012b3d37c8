"""
AssetClassifier - Decides which filesystem entries are source images.
"""

import enum
import re
from pathlib import Path
from typing import Iterable, Optional, Union

DEFAULT_WIDTHS = (20, 200, 400, 600, 800, 1000, 1200)
DEFAULT_RESERVED_NAMES = frozenset({'default'})
# avif is planned but not supported yet
DEFAULT_EXTENSIONS = frozenset({'jpg', 'jpeg', 'png', 'gif', 'webp'})


class AssetKind(enum.Enum):
    DIRECTORY = 'directory'
    SOURCE_CANDIDATE = 'source'
    IGNORE = 'ignore'


def clean_stem(stem: str) -> str:
    """Trim leading and trailing non-alphanumeric characters from a stem."""
    start = 0
    end = len(stem)
    while start < end and not stem[start].isalnum():
        start += 1
    while end > start and not stem[end - 1].isalnum():
        end -= 1
    return stem[start:end]


class AssetClassifier:
    """
    Classifies paths as directories to walk, source candidates, or ignored.

    Directories named after a derivative width or a reserved output name
    are ignored so generated output is never walked. Files whose cleaned
    stem ends in a hyphen and 2-4 digits (``photo-400.jpg``) are taken to
    be width-suffixed derivatives and ignored as well. That heuristic also
    catches genuine originals such as ``event-2024.jpg``.
    """

    # Pattern for width-suffixed derivative names: name-400
    DERIVATIVE_PATTERN = re.compile(r'.*-\d{2,4}$')

    def __init__(
        self,
        widths: Iterable[int] = DEFAULT_WIDTHS,
        reserved_names: Iterable[str] = DEFAULT_RESERVED_NAMES,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        reserved_paths: Iterable[Union[str, Path]] = ()
    ):
        """
        Initialize classifier.

        Args:
            widths: Derivative widths; directories with these names are skipped
            reserved_names: Other directory names that hold generated output
            extensions: Supported source extensions, without the dot
            reserved_paths: Specific directories to skip, matched by resolved path
        """
        self.widths = tuple(widths)
        self.ignored_dir_names = frozenset(str(w) for w in self.widths) | frozenset(reserved_names)
        self.extensions = frozenset(ext.lower().lstrip('.') for ext in extensions)
        self.reserved_paths = frozenset(Path(p).resolve() for p in reserved_paths)

    @classmethod
    def is_derivative_name(cls, stem: str) -> bool:
        """True if a file stem looks like a generated width-suffixed derivative."""
        return cls.DERIVATIVE_PATTERN.match(clean_stem(stem)) is not None

    def is_supported_extension(self, path: Union[str, Path]) -> bool:
        suffix = Path(path).suffix
        return bool(suffix) and suffix[1:].lower() in self.extensions

    def classify(self, path: Union[str, Path], is_dir: Optional[bool] = None) -> AssetKind:
        """
        Classify a filesystem entry.

        Args:
            path: Entry to classify
            is_dir: Whether the entry is a directory, if already known
        """
        path = Path(path)
        if is_dir is None:
            is_dir = path.is_dir()

        if is_dir:
            if path.name in self.ignored_dir_names:
                return AssetKind.IGNORE
            if self.reserved_paths and path.resolve() in self.reserved_paths:
                return AssetKind.IGNORE
            return AssetKind.DIRECTORY

        if not self.is_supported_extension(path):
            return AssetKind.IGNORE

        if self.is_derivative_name(path.stem):
            return AssetKind.IGNORE

        return AssetKind.SOURCE_CANDIDATE
