"""File system access used by commands and data runners."""

import os
import runpy
from pathlib import Path
from typing import Any, Dict

from whoa.exceptions import FileSystemError


class FileSystem:
    """Thin wrapper over the local file system which reports failures uniformly."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read(self, file_path: str) -> str:
        try:
            return Path(file_path).read_text(encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Cannot read file {file_path}: {e}") from e

    def write(self, file_path: str, contents: str):
        try:
            Path(file_path).write_text(contents, encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Cannot write file {file_path}: {e}") from e

    def delete(self, file_path: str):
        """Delete a file. A missing file is not an error."""
        try:
            Path(file_path).unlink(missing_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot delete file {file_path}: {e}") from e

    def scan_folder(self, folder_path: str) -> Dict[str, str]:
        """
        List folder entries.

        Returns:
            Dict mapping entry names to their real paths
        """
        if not os.path.isdir(folder_path):
            raise FileSystemError(f"Not a folder: {folder_path}")

        return {
            entry.name: os.path.realpath(entry.path)
            for entry in sorted(os.scandir(folder_path), key=lambda e: e.name)
        }

    def is_folder(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_writable(self, path: str) -> bool:
        return os.access(path, os.W_OK)

    def create_folder(self, folder_path: str):
        try:
            os.mkdir(folder_path)
        except OSError as e:
            raise FileSystemError(f"Cannot create folder {folder_path}: {e}") from e

    def delete_folder(self, folder_path: str):
        if not os.path.isdir(folder_path):
            raise FileSystemError(f"Not a folder: {folder_path}")
        try:
            os.rmdir(folder_path)
        except OSError as e:
            raise FileSystemError(f"Cannot delete folder {folder_path}: {e}") from e

    def delete_folder_recursive(self, folder_path: str):
        for path in self.scan_folder(folder_path).values():
            if self.is_folder(path):
                self.delete_folder_recursive(path)
            else:
                self.delete(path)

        self.delete_folder(folder_path)

    def symlink(self, target_path: str, link_path: str):
        try:
            os.symlink(target_path, link_path)
        except OSError as e:
            raise FileSystemError(f"Cannot create link {link_path}: {e}") from e

    def require_file(self, path: str) -> Dict[str, Any]:
        """Execute a Python file and return the names it defines."""
        if not os.path.isfile(path):
            raise FileSystemError(f"File not found: {path}")

        return runpy.run_path(path)
