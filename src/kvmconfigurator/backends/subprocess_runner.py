"""Subprocess process runner implementation."""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import ExternalToolNotFound
from ..interfaces.process import ProcessResult, ProcessRunner
from ..logging import get_logger

log = get_logger(__name__)


class SubprocessRunner(ProcessRunner):
    """Run processes using the subprocess module."""

    def run(
        self,
        command: List[str],
        capture_output: bool = True,
        cwd: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> ProcessResult:
        """Run a command."""
        log.debug("process.run", command=command, capture_output=capture_output)
        try:
            result = subprocess.run(
                command,
                capture_output=capture_output,
                check=False,
                cwd=str(cwd) if cwd else None,
                env=env,
                text=True,
            )
        except FileNotFoundError as e:
            raise ExternalToolNotFound(command[0]) from e

        if result.returncode != 0:
            log.debug("process.nonzero_exit", command=command, returncode=result.returncode)
        return ProcessResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
