"""High-level winget source management façade used by the CLI."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Union

from .config import SourceManagerConfig
from .exceptions import ActionFailed, ParseError, ToolNotInstalled
from .models import Source
from .process import ProcessResult, WinGetRunner, find_winget
from .table import FixedWidthTableParser, SourceListParser

logger = logging.getLogger(__name__)


SOURCE_LIST_CMD = ["source", "list"]
SOURCE_ADD_CMD = ["source", "add"]
SOURCE_UPDATE_CMD = ["source", "update"]
SOURCE_EXPORT_CMD = ["source", "export"]


class SourceManager:
    """Lists, adds, updates and exports winget sources.

    Every call starts a fresh winget process and blocks until it exits.
    A non-zero winget exit code is reported through the return value
    (``False``, ``""`` or ``[]``); exceptions are reserved for winget not
    starting at all (ToolNotInstalled), an unreadable source table
    (ParseError) and anything else going wrong (ActionFailed).
    """

    def __init__(self, runner: Optional[WinGetRunner] = None,
                 parser: Optional[SourceListParser] = None):
        """
        Args:
            runner: Object with ``run(args) -> ProcessResult`` (default: WinGetRunner)
            parser: Parser for ``source list`` output (default: FixedWidthTableParser)
        """
        self.runner = runner if runner is not None else WinGetRunner()
        self.parser = parser if parser is not None else FixedWidthTableParser()

    @classmethod
    def from_config(cls, config: SourceManagerConfig) -> "SourceManager":
        """Build a manager from a SourceManagerConfig."""
        executable = config.executable or find_winget()
        return cls(runner=WinGetRunner(executable=executable, timeout=config.timeout))

    @contextmanager
    def _action(self, failure_message: str):
        try:
            yield
        except (ToolNotInstalled, ParseError) as e:
            logger.error("%s %s", failure_message, e)
            raise
        except Exception as e:
            logger.error("%s %s: %s", failure_message, type(e).__name__, e)
            raise ActionFailed(failure_message, e) from e

    def _export_text(self, source_name: Optional[str]) -> str:
        args = list(SOURCE_EXPORT_CMD)
        if source_name is not None:
            args.extend(["-n", source_name])
        result: ProcessResult = self.runner.run(args)
        if result.exit_code != 0:
            logger.warning("winget source export failed (rc=%d)", result.exit_code)
            return ""
        return "".join(result.output).strip()

    def list_sources(self) -> List[Source]:
        """Return installed sources in the order winget lists them."""
        with self._action("Getting installed sources failed."):
            result = self.runner.run(SOURCE_LIST_CMD)
            if result.exit_code != 0:
                logger.warning("winget source list failed (rc=%d)", result.exit_code)
                return []
            return self.parser.parse(result.output)

    def add_source(self, name: str, arg: str, source_type: Optional[str] = None) -> bool:
        """Add a new source (needs administrator rights).

        Args:
            name:        Name of the source to add
            arg:         Source argument, usually a URL
            source_type: Source type; some sources (e.g. msstore) require it

        Returns:
            True if winget exited with 0
        """
        args = list(SOURCE_ADD_CMD) + ["-n", name, "-a", arg]
        if source_type:
            args.extend(["-t", source_type])
        args.append("--accept-source-agreements")

        with self._action("Adding source failed."):
            result = self.runner.run(args)
            return result.exit_code == 0

    def update_sources(self) -> bool:
        """Update all installed sources. May take a while."""
        with self._action("Updating sources failed."):
            result = self.runner.run(SOURCE_UPDATE_CMD)
            return result.exit_code == 0

    def export_sources(self, source_name: Optional[str] = None) -> str:
        """Return the sources as JSON text (all, or only ``source_name``).

        The text is returned as winget printed it, trimmed; an empty string
        means the export failed.
        """
        with self._action("Exporting sources failed."):
            return self._export_text(source_name)

    def export_sources_to_file(self, file: Union[str, Path],
                               source_name: Optional[str] = None) -> bool:
        """Write the exported sources to ``file``, overwriting it.

        The file is left untouched when winget fails or prints nothing.
        """
        with self._action("Exporting sources failed."):
            text = self._export_text(source_name)
            if not text:
                return False
            Path(file).write_text(text, encoding="utf-8")
            logger.debug("Wrote %d characters of source export to %s", len(text), file)
            return True
