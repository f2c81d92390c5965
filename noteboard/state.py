from __future__ import annotations
import json
from typing import Any, Dict, List

from .models import NoteProps, Point
from .errors import BoardFileError
from .logging import get_logger

log = get_logger("state")


def note_to_data(props: NoteProps) -> Dict[str, Any]:
    return {
        "id": props.id,
        "title": props.title,
        "content": props.content,
        "color": props.color,
        "x": props.position.x, "y": props.position.y,
        "created_at": props.created_at,
        "updated_at": props.updated_at,
    }


def notes_from_data(data: Any) -> List[NoteProps]:
    """Parse the ``notes`` list of a board document; missing fields get defaults."""
    if not isinstance(data, dict):
        raise BoardFileError("board document must be a JSON object")
    out: List[NoteProps] = []
    for n in data.get("notes", []):
        if not isinstance(n, dict):
            log.warning("skipping malformed note entry %r", n)
            continue
        kw: Dict[str, Any] = {}
        for key in ("id", "title", "content", "color", "created_at", "updated_at"):
            if n.get(key) is not None:
                kw[key] = str(n[key])
        try:
            kw["position"] = Point(float(n.get("x", 0)), float(n.get("y", 0)))
        except (TypeError, ValueError):
            log.warning("note %s has a bad position, placing at origin", n.get("id"))
            kw["position"] = Point()
        out.append(NoteProps(**kw))
    return out


def load_board_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise BoardFileError(e.strerror or str(e), path) from e
    except ValueError as e:
        raise BoardFileError(f"invalid JSON ({e})", path) from e
    if not isinstance(data, dict):
        raise BoardFileError("board document must be a JSON object", path)
    return data


def save_board_file(path: str, data: Dict[str, Any]):
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise BoardFileError(e.strerror or str(e), path) from e


class BoardState:
    def serialize(self, scene) -> Dict:
        rect = scene.sceneRect()
        return {"canvas": {"w": rect.width(), "h": rect.height(), "grid": scene.grid_size},
                "notes": [note_to_data(it.props) for it in scene.notes()]}

    def deserialize(self, scene, data: Dict):
        scene.clear_all_items()
        for props in notes_from_data(data):
            scene.add_note(props)
        scene.update_canvas_size()
