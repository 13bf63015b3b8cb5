from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict


def _clamped_float(raw: Any, default: float, lo: float, hi: float) -> float:
    try:
        v = float(raw)
    except Exception:
        v = default
    if v != v:  # NaN
        v = default
    return max(lo, min(hi, v))


class ConfigStore:
    """
    Simple JSON config store.

    Default location: ~/.segcut/config.json
    """

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = Path(root_dir)
        self.path = self.root_dir / "config.json"

    @staticmethod
    def default() -> "ConfigStore":
        return ConfigStore(Path.home() / ".segcut")

    def load(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return data
        except FileNotFoundError:
            return self.default_config()
        except Exception:
            # Corrupted file; don't crash the app.
            return self.default_config()
        return self.default_config()

    def save(self, data: Dict[str, Any]) -> None:
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def default_config(self) -> Dict[str, Any]:
        return {
            "fps": 30,
            "new_segment_sec": 10.0,
            "history_limit": 50,
            "media_duration_sec": 120.0,
            "invert_default": False,
        }

    def set_value(self, key: str, value: Any) -> None:
        cfg = self.load()
        cfg[str(key)] = value
        self.save(cfg)

    def fps(self) -> float:
        return _clamped_float(self.load().get("fps", 30), 30.0, 1.0, 240.0)

    def new_segment_sec(self) -> float:
        return _clamped_float(self.load().get("new_segment_sec", 10.0), 10.0, 0.1, 3600.0)

    def history_limit(self) -> int:
        raw = self.load().get("history_limit", 50)
        try:
            v = int(raw)
        except Exception:
            v = 50
        return max(1, min(500, v))

    def media_duration_sec(self) -> float:
        v = _clamped_float(self.load().get("media_duration_sec", 120.0), 120.0, 0.0, 7 * 24 * 3600.0)
        return v if v > 0 else 120.0

    def invert_default(self) -> bool:
        return bool(self.load().get("invert_default", False))
