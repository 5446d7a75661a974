#!/usr/bin/env python3
"""Start the quote API with uvicorn, honouring the PORT environment variable."""

import os
import sys
import subprocess
from pathlib import Path

port = os.environ.get("PORT", "8000")
try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

# Allow running from a checkout without `pip install -e .`
src_path = str(Path(__file__).resolve().parent / "src")
pythonpath = os.environ.get("PYTHONPATH", "")
os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{pythonpath}" if pythonpath else src_path
sys.path.insert(0, src_path)

cmd = [
    sys.executable,
    "-m",
    "uvicorn",
    "freight_quote.main:app",
    "--host",
    "0.0.0.0",
    "--port",
    str(port_int),
    "--proxy-headers",
    "--forwarded-allow-ips", "*",
]

try:
    import freight_quote.main  # noqa: F401
except ImportError as e:
    print(f"Failed to import freight_quote.main: {e}", file=sys.stderr)
    print(f"   PYTHONPATH: {os.environ['PYTHONPATH']}", file=sys.stderr)
    sys.exit(1)

print(f"Starting server on port {port_int}...", file=sys.stderr)
try:
    sys.exit(subprocess.call(cmd))
except KeyboardInterrupt:
    print("Server interrupted by user", file=sys.stderr)
    sys.exit(0)
