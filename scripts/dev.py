#!/usr/bin/env python3
"""
Dev runner for the scheduler API.
Usage: python scripts/dev.py
"""

import os
import signal
import socket
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
BACKEND_PORT = int(os.environ.get("BACKEND_PORT", "8000"))
API_BASE = f"http://localhost:{BACKEND_PORT}"


def port_in_use(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex(("127.0.0.1", port)) == 0


def main():
    os.chdir(ROOT)
    if port_in_use(BACKEND_PORT):
        print(f"Port {BACKEND_PORT} is in use. Stop the process or set BACKEND_PORT=<port>")
        sys.exit(1)

    print()
    print(f"  Scheduler API: {API_BASE}/docs")
    print()

    backend = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "server.app:app", "--reload",
         "--host", "0.0.0.0", "--port", str(BACKEND_PORT)],
        cwd=ROOT,
        env=os.environ.copy(),
    )

    def cleanup(sig=None, frame=None):
        backend.terminate()
        backend.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, cleanup)
    signal.signal(signal.SIGTERM, cleanup)

    backend.wait()


if __name__ == "__main__":
    main()
