"""
Shared lookup tables for extractors.

- known_folders: Known Folder GUID -> folder name
- appid_loader: Jump List AppID -> application name
"""

from .appid_loader import AppIdTable, load_appid_table
from .known_folders import UNMAPPED, KnownFolderTable, lookup_known_folder

__all__ = [
    "AppIdTable",
    "KnownFolderTable",
    "UNMAPPED",
    "load_appid_table",
    "lookup_known_folder",
]
