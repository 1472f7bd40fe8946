"""
Run the cdk executable as a child process.
"""

import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import IO, Callable, Dict, List, Optional, Union

from .models import ProcessOutcome

logger = logging.getLogger(__name__)


def _validate_command_args(args: List[str]) -> None:
    """Validate cdk CLI arguments for safe execution."""
    for arg in args:
        if not isinstance(arg, str):
            msg = f"cdk argument must be a string, got {type(arg).__name__}"
            raise TypeError(msg)
        if any(char in arg for char in ("\x00", "\n", "\r")):
            msg = "cdk argument contains an invalid control character"
            raise ValueError(msg)


def _pump(stream: IO[str], sink: Callable[[str], None]) -> None:
    """Forward every line of a pipe to ``sink`` until EOF."""
    with stream:
        for line in iter(stream.readline, ""):
            sink(line)


def run_cdk(
    args: List[str],
    cwd: Union[str, Path],
    cdk_command: str = "cdk",
    env: Optional[Dict[str, str]] = None,
) -> ProcessOutcome:
    """
    Run cdk and wait for it to exit.

    stdout and stderr are logged line by line as they arrive; stderr is also
    accumulated for the caller to classify. The exit code is not interpreted
    here.

    Args:
        args: Command arguments (without the ``cdk`` prefix)
        cwd: CDK project directory
        cdk_command: Executable to run
        env: Extra environment variables for the child

    Returns:
        ProcessOutcome with exit code, stderr and stdout text
    """
    command = [cdk_command, *args]
    _validate_command_args(command)
    logger.debug(f"Running command: {' '.join(command)} (cwd={cwd})")

    process_env = os.environ.copy()
    if env:
        process_env.update(env)

    try:
        # No shell: each token reaches cdk unchanged
        process = subprocess.Popen(
            command,
            cwd=cwd,
            env=process_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        logger.error(f"Failed to run command {command[0]}: {e}")
        return ProcessOutcome(exit_code=1, stderr=str(e))

    stdout_chunks: List[str] = []
    stderr_chunks: List[str] = []

    def on_stdout(line: str) -> None:
        logger.info(line.rstrip("\n"))
        stdout_chunks.append(line)

    def on_stderr(line: str) -> None:
        logger.info(line.rstrip("\n"))
        stderr_chunks.append(line)

    readers = [
        threading.Thread(target=_pump, args=(process.stdout, on_stdout), daemon=True),
        threading.Thread(target=_pump, args=(process.stderr, on_stderr), daemon=True),
    ]
    for reader in readers:
        reader.start()

    exit_code = process.wait()
    # All output must reach the log before the outcome is reported
    for reader in readers:
        reader.join()

    if exit_code != 0:
        logger.debug(f"Command failed with code {exit_code}")

    return ProcessOutcome(
        exit_code=exit_code,
        stderr="".join(stderr_chunks),
        stdout="".join(stdout_chunks),
    )
