"""
Class lookup over directories and jar/zip archives.
"""

import logging
import zipfile
from pathlib import Path
from typing import Optional

from .classfile import Class, parse_bytes

log = logging.getLogger(__name__)


class ClassPath:
    """Manages a classpath for looking up classes."""

    def __init__(self):
        self.entries: list[Path | zipfile.ZipFile] = []
        self._cache: dict[str, Class] = {}
        self._zip_files: list[zipfile.ZipFile] = []

    def add_path(self, path: str | Path):
        """Add a path to the classpath (directory or jar/zip)."""
        path = Path(path)
        if path.suffix in (".jar", ".zip"):
            zf = zipfile.ZipFile(path, "r")
            self._zip_files.append(zf)
            self.entries.append(zf)
        elif path.is_dir():
            self.entries.append(path)
        else:
            raise ValueError(f"Invalid classpath entry: {path}")

    def _read(self, class_file: str) -> Optional[bytes]:
        for entry in self.entries:
            if isinstance(entry, zipfile.ZipFile):
                try:
                    return entry.read(class_file)
                except KeyError:
                    continue
            path = entry / class_file
            if path.exists():
                return path.read_bytes()
        return None

    def find_class(self, class_name: str) -> Optional[Class]:
        """Find and parse a class by name (e.g., 'java/lang/String')."""
        class_name = class_name.replace(".", "/")
        if class_name in self._cache:
            return self._cache[class_name]

        data = self._read(class_name + ".class")
        if data is None:
            log.debug("class %s not found on classpath", class_name)
            return None

        info = parse_bytes(data)
        self._cache[class_name] = info
        return info

    def close(self):
        """Close all zip files."""
        for zf in self._zip_files:
            zf.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
