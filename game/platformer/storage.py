"""
Save-file persistence: gold, lives, upgrades and cosmetics as one JSON
record, plus a separate flag file for the secret unlock.

Any read problem falls back to defaults; write problems are reported and
ignored. With no directory the store keeps everything in memory.
"""

import json
import os
from typing import Any, Dict, Optional

from .state import SaveData

SAVE_FILE = "adventure_void_save_v1.json"
FLAGS_FILE = "flags.json"
SECRET_FLAG = "unlockedCR7"


class SaveStore:
    """Loads and saves progress under `save_dir` (in memory when None)"""

    def __init__(self, save_dir: Optional[str] = None, verbose: int = 0):
        self.save_dir = save_dir
        self.verbose = verbose
        self._memory: Dict[str, Dict[str, Any]] = {}

    def _read(self, name: str) -> Optional[Dict[str, Any]]:
        if self.save_dir is None:
            data = self._memory.get(name)
            return json.loads(json.dumps(data)) if data is not None else None

        path = os.path.join(self.save_dir, name)
        if not os.path.exists(path):
            return None
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not hold a JSON object")
        return data

    def _write(self, name: str, data: Dict[str, Any]):
        if self.save_dir is None:
            self._memory[name] = json.loads(json.dumps(data))
            return

        os.makedirs(self.save_dir, exist_ok=True)
        path = os.path.join(self.save_dir, name)
        tmp_path = path + ".tmp"
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)

    def load(self) -> SaveData:
        """Saved progress merged over the defaults"""
        try:
            raw = self._read(SAVE_FILE)
            if raw is None:
                return SaveData()
            data = SaveData.from_dict(raw)
        except (OSError, ValueError, TypeError) as e:
            print(f"[SaveStore] Failed to load save, using defaults: {e}")
            return SaveData()
        if self.verbose > 0:
            print(f"[SaveStore] Loaded save: gold={data.gold} lives={data.lives}")
        return data

    def save(self, data: SaveData) -> bool:
        try:
            self._write(SAVE_FILE, data.to_dict())
        except (OSError, TypeError) as e:
            print(f"[SaveStore] Failed to save game: {e}")
            return False
        if self.verbose > 1:
            print(f"[SaveStore] Saved: gold={data.gold} lives={data.lives}")
        return True

    def load_secret_unlocked(self) -> bool:
        try:
            flags = self._read(FLAGS_FILE) or {}
        except (OSError, ValueError) as e:
            print(f"[SaveStore] Failed to load flags: {e}")
            return False
        return flags.get(SECRET_FLAG) is True

    def save_secret_unlocked(self, unlocked: bool = True) -> bool:
        try:
            flags = self._read(FLAGS_FILE) or {}
        except (OSError, ValueError):
            flags = {}
        flags[SECRET_FLAG] = unlocked
        try:
            self._write(FLAGS_FILE, flags)
        except OSError as e:
            print(f"[SaveStore] Failed to save flags: {e}")
            return False
        return True
