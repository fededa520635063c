import importlib.metadata

from .ddl import (
    DdlOptions,
    create_foreign_key,
    create_index,
    create_primary_key,
    create_table,
    drop_index,
    drop_table,
)
from .errors import DdlError, InvalidArgument
from .naming import Raw, as_is, as_str, compose, lower_case, quoted, upper_case
from .main import main

try:
    __version__ = importlib.metadata.version("ddl-formatter")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"  # fallback version

__all__ = [
    'DdlOptions',
    'DdlError',
    'InvalidArgument',
    'Raw',
    'as_is',
    'as_str',
    'compose',
    'lower_case',
    'upper_case',
    'quoted',
    'create_table',
    'drop_table',
    'create_index',
    'drop_index',
    'create_primary_key',
    'create_foreign_key',
    'main',
]
