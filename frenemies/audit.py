import json
from pathlib import Path
from typing import Any, Dict, List

from .utils import ensure_dir, file_lock, lock_path_for, utc_now


def record_event(path: Path, event_type: str, actor: str, data: Dict[str, Any]) -> Dict[str, Any]:
    ensure_dir(path.parent)
    entry = {
        "timestamp": utc_now(),
        "event": event_type,
        "actor": actor,
        "data": data,
    }
    with file_lock(lock_path_for(path)):
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False))
            f.write("\n")
    return entry


def read_events(path: Path, limit: int = 50) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    events: List[Dict[str, Any]] = []
    with file_lock(lock_path_for(path)):
        with path.open(encoding="utf-8") as f:
            for line in f:
                stripped = line.strip()
                if stripped:
                    events.append(json.loads(stripped))
    if limit <= 0:
        return []
    return events[-limit:]
