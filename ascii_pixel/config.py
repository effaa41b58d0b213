#!/usr/bin/env python3
# ascii_pixel/config.py
"""
Config loader/saver and defaults for ascii-pixel.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- Colors validated through ascii_pixel.colors (Pillow).

Usage:
    from ascii_pixel.config import Config, DEFAULT_CONFIG
    cfg = Config.load()                 # ~/.config/ascii_pixel/ascii_pixel.json or OS-specific
    size = cfg["render"]["canvas_size"]
    cfg["render"]["background"] = "#1A1A2E"
    cfg.save()
"""

from __future__ import annotations

import copy
import json
import logging
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ascii_pixel.colors import normalize_color

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "render": {
        "canvas_size": 256,               # square SVG canvas, px
        "background": None,               # hex color or None (transparent)
    },
    "parser": {
        "fill_chars": "#*X@O",
        "strip_carriage_returns": False,  # keep "\r" as a non-fill cell
    },
    "sources": {
        "user_agent": "ascii-pixel/1.0",
        "connect_timeout_s": 5.0,
        "read_timeout_s": 15.0,
        "retries": 3,
    },
    "preview": {
        "enable": False,                  # print grid to terminal after export
        "glyph": "█",                # full block
    },
    "logging": {
        "level": "WARNING",
        "http_debug": False,
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "AsciiPixel")
    # macOS: ~/Library/Application Support/AsciiPixel
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "AsciiPixel")
    # Linux and others: ~/.config/ascii_pixel
    return os.path.join(os.path.expanduser("~/.config"), "ascii_pixel")

def _default_config_path() -> str:
    """Resolve default config path, honoring ASCII_PIXEL_CONFIG env override."""
    env = os.environ.get("ASCII_PIXEL_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "ascii_pixel.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def atomic_write_text(path: str, text: str) -> None:
    """Write text to path via a temp file in the same directory + os.replace."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        # Clean temp on error
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    atomic_write_text(path, json.dumps(data, indent=2, sort_keys=True) + "\n")

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
    except (TypeError, ValueError):
        return float(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    if isinstance(v, bool):
        return int(default)
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

def _coerce_color(v: Any) -> Optional[str]:
    if v is None or v == "":
        return None
    try:
        return normalize_color(str(v))
    except ValueError:
        log.warning("config: ignoring invalid background color %r", v)
        return None

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), copy.deepcopy(cfg or {}))
    for section, defaults in DEFAULT_CONFIG.items():
        if not isinstance(c.get(section), dict):
            c[section] = copy.deepcopy(defaults)

    # render
    r = c["render"]
    r["canvas_size"] = _coerce_int(r.get("canvas_size"), DEFAULT_CONFIG["render"]["canvas_size"], (1, 65536))
    r["background"] = _coerce_color(r.get("background"))

    # parser
    p = c["parser"]
    fills = p.get("fill_chars")
    if isinstance(fills, list):
        fills = "".join(str(ch) for ch in fills)
    if not isinstance(fills, str) or not fills:
        fills = DEFAULT_CONFIG["parser"]["fill_chars"]
    p["fill_chars"] = fills
    p["strip_carriage_returns"] = _coerce_bool(p.get("strip_carriage_returns"),
                                               DEFAULT_CONFIG["parser"]["strip_carriage_returns"])

    # sources
    s = c["sources"]
    s["user_agent"] = str(s.get("user_agent") or DEFAULT_CONFIG["sources"]["user_agent"])
    s["connect_timeout_s"] = _coerce_num(s.get("connect_timeout_s"), 5.0, (0.2, 60.0))
    s["read_timeout_s"]    = _coerce_num(s.get("read_timeout_s"), 15.0, (0.5, 120.0))
    s["retries"]           = _coerce_int(s.get("retries"), 3, (0, 10))

    # preview
    pv = c["preview"]
    pv["enable"] = _coerce_bool(pv.get("enable"), DEFAULT_CONFIG["preview"]["enable"])
    glyph = pv.get("glyph")
    pv["glyph"] = glyph if isinstance(glyph, str) and len(glyph) == 1 else DEFAULT_CONFIG["preview"]["glyph"]

    # logging
    lg = c["logging"]
    level = str(lg.get("level") or "").upper()
    lg["level"] = level if level in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET") \
        else DEFAULT_CONFIG["logging"]["level"]
    lg["http_debug"] = _coerce_bool(lg.get("http_debug"), DEFAULT_CONFIG["logging"]["http_debug"])
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = False) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate({})
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if not isinstance(user_cfg, dict):
                raise ValueError("top-level JSON value must be an object")
        except (OSError, ValueError) as e:
            # Corrupt file. Backup and fall back to defaults.
            log.warning("config: %s is unreadable (%s); using defaults", cfg_path, e)
            backup = cfg_path + ".corrupt.bak"
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError:
                pass
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        full = _validate(self.data)
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    # Convenience getters
    @property
    def fill_chars(self) -> frozenset:
        return frozenset(self.data["parser"]["fill_chars"])

    @property
    def canvas_size(self) -> int:
        return self.data["render"]["canvas_size"]


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "atomic_write_text",
    "_default_config_path",
]
