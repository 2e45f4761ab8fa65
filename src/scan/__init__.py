"""Source file discovery."""

from scan.files import find_source_files, is_excluded_path

__all__ = ["find_source_files", "is_excluded_path"]
