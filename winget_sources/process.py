"""Running the winget executable."""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .exceptions import ToolNotInstalled

logger = logging.getLogger(__name__)


def _winget_candidates() -> List[str]:
    candidates = ["winget"]
    local_appdata = os.environ.get("LOCALAPPDATA")
    if local_appdata:
        candidates.append(str(Path(local_appdata) / "Microsoft" / "WindowsApps" / "winget.exe"))
    return candidates


def find_winget() -> str:
    """Auto-detect winget binary path."""
    for candidate in _winget_candidates():
        resolved = shutil.which(candidate) or (candidate if Path(candidate).is_file() else None)
        if resolved and Path(resolved).is_file():
            return resolved
    return "winget"  # let it fail with a clear error at runtime


@dataclass
class ProcessResult:
    """Exit code and captured stdout lines of one winget invocation."""
    exit_code: int
    output: List[str] = field(default_factory=list)


class WinGetRunner:
    """Runs winget subcommands and captures their standard output.

    stderr is captured only to keep it off the console; callers never see it.
    """

    def __init__(self, executable: str = "winget", timeout: Optional[float] = None):
        """
        Args:
            executable: winget binary name or path
            timeout:    Seconds before the process is killed (None = wait forever)
        """
        self.executable = executable
        self.timeout = timeout

    def run(self, args: Sequence[str]) -> ProcessResult:
        """Run ``executable *args`` and wait for it to finish.

        Raises:
            ToolNotInstalled: If the executable cannot be launched
            subprocess.TimeoutExpired: If ``timeout`` elapses
        """
        cmd = [self.executable, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except OSError as e:
            # FileNotFoundError, PermissionError, exec format errors
            raise ToolNotInstalled(self.executable) from e

        if result.returncode != 0:
            logger.debug("%s exited with rc=%d", " ".join(cmd), result.returncode)

        return ProcessResult(
            exit_code=result.returncode,
            output=(result.stdout or "").splitlines(),
        )
