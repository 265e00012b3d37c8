"""
Packager - Bundles the output tree into a single ZIP archive.
"""

import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, Union


class Packager:
    """
    Writes an uncompressed ZIP of a directory tree.

    Entries are stored in sorted order with paths relative to the tree
    root, so the same tree always yields the same entry list.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def archive(self, source_tree: Union[str, Path], dest_archive: Union[str, Path]) -> int:
        """
        Archive a directory tree.

        Args:
            source_tree: Directory to archive
            dest_archive: Path of the ZIP file to write

        Returns:
            Number of files stored

        Raises:
            OSError: If the tree cannot be read or the archive written
        """
        source_tree = Path(source_tree)
        dest_archive = Path(dest_archive)

        if not source_tree.is_dir():
            raise NotADirectoryError(f"Not a directory: {source_tree}")

        dest_archive.parent.mkdir(parents=True, exist_ok=True)
        dest_resolved = dest_archive.resolve()

        self.logger.info(f"Archiving {source_tree} -> {dest_archive}")

        fd, tmp_name = tempfile.mkstemp(
            dir=dest_archive.parent, prefix=f".{dest_archive.name}.", suffix='.part'
        )
        count = 0
        try:
            with os.fdopen(fd, 'wb') as f, zipfile.ZipFile(f, 'w', compression=zipfile.ZIP_STORED) as zf:
                for dirpath, dirnames, filenames in os.walk(source_tree):
                    dirnames.sort()
                    for name in sorted(filenames):
                        path = Path(dirpath) / name
                        resolved = path.resolve()
                        if resolved == dest_resolved or resolved == Path(tmp_name).resolve():
                            continue
                        # In-progress writes from an interrupted run
                        if name.startswith('.') and name.endswith('.part'):
                            continue
                        arcname = path.relative_to(source_tree).as_posix()
                        zf.write(path, arcname)
                        count += 1
            os.replace(tmp_name, dest_archive)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

        self.logger.info(f"Archive complete: {count} files in {dest_archive}")
        return count
