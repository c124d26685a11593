"""
Backup module - .habittrack export and import
"""
from .service import (
    build_export,
    dumps_export,
    export_filename,
    export_from,
    parse_import,
    import_into,
    write_export_file,
    read_import_file
)

__all__ = [
    'build_export',
    'dumps_export',
    'export_filename',
    'export_from',
    'parse_import',
    'import_into',
    'write_export_file',
    'read_import_file'
]
