"""Run external programs while echoing and capturing their output."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from typing import IO

DEFAULT_EXIT_CODE = 1


def _pump(pipe: IO[str], sink: IO[str], chunks: list[str]) -> None:
    with pipe:
        for line in pipe:
            sink.write(line)
            sink.flush()
            chunks.append(line)


def run_cmd(cmd: str, *args: str) -> tuple[int, str, str]:
    """Run ``cmd`` with ``args``; return (exit code, stdout, stderr).

    Output is echoed to this process's stdout and stderr as it arrives.
    A program that cannot be started yields exit code 1 and the reason
    in place of stderr.
    """
    try:
        proc = subprocess.Popen(
            [cmd, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as err:
        if os.sep in cmd:
            return DEFAULT_EXIT_CODE, "", str(err)
        return (
            DEFAULT_EXIT_CODE,
            "",
            f'exec: "{cmd}": executable file not found in $PATH',
        )
    except OSError as err:
        return DEFAULT_EXIT_CODE, "", str(err)

    out: list[str] = []
    errs: list[str] = []
    pumps = [
        threading.Thread(target=_pump, args=(proc.stdout, sys.stdout, out)),
        threading.Thread(target=_pump, args=(proc.stderr, sys.stderr, errs)),
    ]
    for pump in pumps:
        pump.start()
    for pump in pumps:
        pump.join()
    code = proc.wait()
    if code < 0:
        code = -1
    return code, "".join(out), "".join(errs)