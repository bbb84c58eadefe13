from __future__ import annotations

import signal
import subprocess
import sys
import time

from todolist.settings import settings


def _terminate(proc: subprocess.Popen) -> None:
    if proc.poll() is not None:
        return
    proc.terminate()
    try:
        proc.wait(timeout=5)
    except subprocess.TimeoutExpired:
        proc.kill()


def main() -> int:
    python = sys.executable
    api_proc = subprocess.Popen([python, "run_local.py"])
    if not settings.NOTIFICATIONS_ENABLED:
        try:
            return api_proc.wait()
        except KeyboardInterrupt:
            _terminate(api_proc)
            return 0
    worker_proc = subprocess.Popen([python, "-m", "todolist.worker"])

    try:
        while True:
            api_code = api_proc.poll()
            worker_code = worker_proc.poll()
            if api_code is not None:
                _terminate(worker_proc)
                return api_code
            if worker_code is not None:
                _terminate(api_proc)
                return worker_code
            time.sleep(0.5)
    except KeyboardInterrupt:
        _terminate(api_proc)
        _terminate(worker_proc)
        return 0


if __name__ == "__main__":
    signal.signal(signal.SIGINT, signal.default_int_handler)
    raise SystemExit(main())
