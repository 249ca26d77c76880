"""Serverless entrypoint exposing the MacroHunt ASGI app."""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from macro_hunt.api.app import create_app  # noqa: E402
from macro_hunt.containers import build_container  # noqa: E402

# Settings come from the deployment environment; the container is built once
# per cold start and shared by every request.
app = create_app(build_container())

__all__ = ["app"]
