import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

KEY = "lastCity"


class LastCityStore:
    """Remembers the last city searched, as a one-key JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return None
        city = data.get(KEY) if isinstance(data, dict) else None
        return city if isinstance(city, str) and city.strip() else None

    def save(self, city: str) -> None:
        city = city.strip()
        if not city:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({KEY: city}), encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
