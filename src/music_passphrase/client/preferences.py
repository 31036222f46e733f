import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class Preferences:
    keywords: str = ""
    add_number: bool = True
    add_special_char: bool = True
    include_spaces: bool = True


class PreferencesStore:
    """Last keywords and decoration toggles, kept in a small JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> Preferences:
        if not self.path.exists():
            return Preferences()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("preferences.unreadable path=%s detail=%s", self.path, exc)
            return Preferences()
        if not isinstance(data, dict):
            return Preferences()

        prefs = Preferences()
        for item in fields(Preferences):
            value = data.get(item.name)
            if isinstance(value, type(getattr(prefs, item.name))):
                setattr(prefs, item.name, value)
        return prefs

    def save(self, prefs: Preferences) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(asdict(prefs), ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
