from __future__ import annotations

import os
import signal
import subprocess
from typing import Sequence


def popen(cmd: Sequence[str], *, env: dict[str, str] | None = None) -> subprocess.Popen:
    """
    Start the server in its own process group so uvicorn workers go down with it.
    """
    return subprocess.Popen(
        list(cmd),
        env=env,
        start_new_session=True,
    )


def _signal_tree(proc: subprocess.Popen, sig: int) -> None:
    if os.name == "posix":
        try:
            os.killpg(proc.pid, sig)
            return
        except ProcessLookupError:
            return
        except PermissionError:
            pass
    if sig == signal.SIGTERM:
        proc.terminate()
    else:
        proc.kill()


def terminate_tree(proc: subprocess.Popen | None, timeout_s: float = 5.0) -> None:
    """SIGTERM the process group, then SIGKILL it if it is still alive after `timeout_s`."""
    if proc is None or proc.poll() is not None:
        return

    _signal_tree(proc, signal.SIGTERM)
    try:
        proc.wait(timeout=timeout_s)
    except subprocess.TimeoutExpired:
        _signal_tree(proc, getattr(signal, "SIGKILL", signal.SIGTERM))
        proc.wait(timeout=timeout_s)
