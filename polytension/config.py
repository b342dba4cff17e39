"""
Runtime settings shared by the desktop, web and export entry points.

Defaults can be overridden with ``POLYTENSION_<FIELD>`` environment variables
(e.g. ``POLYTENSION_FPS=30``); command-line flags override both.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

ENV_PREFIX = "POLYTENSION_"


@dataclass
class Settings:
    fps: float = 60.0
    width: int = 960
    height: int = 540
    # Canvas pixels per window pixel; the browser build drew at twice the window size.
    pixel_ratio: float = 2.0
    background: str = "black"
    host: str = "127.0.0.1"
    port: int = 5000
    base_url: str = "polytension://local/"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        settings = cls()
        overrides = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            kind = type(getattr(settings, f.name))
            try:
                overrides[f.name] = kind(raw)
            except ValueError as e:
                raise ValueError(f"{ENV_PREFIX}{f.name.upper()}={raw!r}: {e}") from e
        return replace(settings, **overrides)

    def frame_interval_ms(self) -> int:
        return max(1, int(round(1000.0 / max(1e-3, self.fps))))
