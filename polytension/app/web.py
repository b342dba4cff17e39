"""
Polytension - Web Version
Serves the animation to a browser; the seed lives in the page URL (?s=...)
so a copied address reproduces the same pattern.
"""
from __future__ import annotations

import base64
import io
import logging
import threading
import webbrowser
from collections import OrderedDict
from dataclasses import dataclass
from threading import Timer
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from flask import Flask, jsonify, render_template_string, request

from ..config import Settings
from ..core.animation import ManualScheduler, Polytension
from ..core.seed import Location, resolve_seed, with_seed
from ..render.raster import RasterSurface

logger = logging.getLogger(__name__)

MAX_SESSIONS = 16
MAX_SIDE = 2048


@dataclass(frozen=True)
class RenderedFrame:
    seed: str
    frame: int
    png: bytes

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Polytension</title>
    <style>
        html, body { margin: 0; height: 100%; background: {{ background }}; overflow: hidden; }
        img { display: block; width: 100vw; height: 100vh; cursor: pointer; }
    </style>
</head>
<body>
    <img id="canvas" alt="">
    <script>
        const seed = {{ seed|tojson }};
        history.replaceState({ path: {{ url|tojson }} }, "", {{ url|tojson }});

        const img = document.getElementById("canvas");
        const w = Math.round(window.innerWidth * {{ pixel_ratio }});
        const h = Math.round(window.innerHeight * {{ pixel_ratio }});

        async function nextFrame() {
            try {
                const params = new URLSearchParams({ s: seed, w: w, h: h });
                const res = await fetch("{{ url_for('frame') }}?" + params.toString());
                const data = await res.json();
                img.src = "data:image/png;base64," + data.image;
            } catch (e) {
                console.error(e);
            }
            requestAnimationFrame(nextFrame);
        }

        img.addEventListener("click", () => {
            const params = new URLSearchParams(window.location.search);
            params.set("new", "1");
            window.location.search = params.toString();
        });

        nextFrame();
    </script>
</body>
</html>
"""


class SessionRegistry:
    """Running animations keyed by (seed, width, height), oldest evicted first."""

    def __init__(self, settings: Settings, limit: int = MAX_SESSIONS):
        self.settings = settings
        self.limit = limit
        self._sessions: OrderedDict = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, seed: str, width: int, height: int):
        key = (seed, width, height)
        with self._lock:
            entry = self._sessions.get(key)
            if entry is not None:
                self._sessions.move_to_end(key)
                return entry
            surface = RasterSurface(width, height, self.settings.background)
            scheduler = ManualScheduler()
            session = Polytension(
                surface, scheduler, Location(with_seed(self.settings.base_url, seed)), self.settings.background
            )
            entry = (session, scheduler, threading.Lock())
            self._sessions[key] = entry
            while len(self._sessions) > self.limit:
                old_key, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted session %s", old_key)
            return entry

    def step(self, seed: str, width: int, height: int) -> RenderedFrame:
        """Advance the session one frame and encode it before anyone else can paint."""
        session, scheduler, lock = self.get(seed, width, height)
        with lock:
            if not scheduler.tick():
                session.run(seed=seed)
            buf = io.BytesIO()
            session.surface.to_image().save(buf, format="PNG")
            return RenderedFrame(seed, session.frame, buf.getvalue())


def _without_param(url: str, name: str) -> str:
    parts = urlsplit(url)
    pairs = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != name]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(pairs), ""))


def _dimension(name: str, default: int) -> int:
    raw = request.args.get(name, type=int)
    if raw is None or raw <= 0:
        return default
    return min(raw, MAX_SIDE)


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or Settings.from_env()
    app = Flask(__name__)
    registry = SessionRegistry(settings)
    app.extensions["polytension"] = registry

    @app.route('/')
    def index():
        force = request.args.get("new") is not None
        location = Location(_without_param(request.url, "new"))
        seed = resolve_seed(location, force_new_seed=force)
        logger.info("Page for seed %s", seed)
        return render_template_string(
            HTML_TEMPLATE,
            seed=seed,
            url=location.url,
            background=settings.background,
            pixel_ratio=settings.pixel_ratio,
        )

    @app.route('/frame')
    def frame():
        seed = request.args.get("s") or None
        if seed is None:
            return jsonify({"error": "missing seed parameter 's'"}), 400
        width = _dimension("w", settings.width)
        height = _dimension("h", settings.height)
        rendered = registry.step(seed, width, height)
        return jsonify({
            "seed": rendered.seed,
            "frame": rendered.frame,
            "image": base64.b64encode(rendered.png).decode("ascii"),
        })

    return app


def main(settings: Settings, open_browser: bool = True) -> None:
    app = create_app(settings)
    url = f"http://{settings.host}:{settings.port}/"
    if open_browser:
        Timer(1.5, lambda: webbrowser.open(url)).start()
    logger.info("Serving on %s", url)
    app.run(host=settings.host, port=settings.port, debug=False, threaded=True)
