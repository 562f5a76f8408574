"""winget-sources: manage winget package sources from Python.

Wraps the ``winget source`` subcommands:
- list (parsed from the fixed-width table winget prints)
- add / update
- export (JSON text, returned as-is or written to a file)
"""

__version__ = "0.1.0"

from .models import Source
from .exceptions import WinGetSourcesError, ToolNotInstalled, ActionFailed, ParseError
from .table import SourceListParser, FixedWidthTableParser, parse_source_table
from .process import ProcessResult, WinGetRunner, find_winget
from .manager import SourceManager

__all__ = [
    'Source',
    'WinGetSourcesError',
    'ToolNotInstalled',
    'ActionFailed',
    'ParseError',
    'SourceListParser',
    'FixedWidthTableParser',
    'parse_source_table',
    'ProcessResult',
    'WinGetRunner',
    'find_winget',
    'SourceManager',
]
