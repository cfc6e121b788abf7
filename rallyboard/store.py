import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from rallyboard.state import DEFAULT_STATE, default_record, parse_json

_logger = logging.getLogger(__name__)


# === Persistent Store ===
class ScoreboardStore:
    """The scoreboard record as a single pretty-printed JSON document on disk"""

    def __init__(self, path: Union[str, Path], logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.log = logger or _logger

    def exists(self) -> bool:
        return self.path.is_file()

    def ensure_initialized(self) -> bool:
        """Write the default record on first run. Returns True if it did."""
        if self.exists():
            return False
        self.log.info("No state document at %s, writing defaults", self.path)
        self.save(default_record())
        return True

    def load(self) -> dict:
        """Read the record, falling back to defaults on any failure.

        Missing fields are backfilled and unknown keys are dropped, so the
        result always carries exactly the scoreboard fields.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.log.warning("State document %s is missing. Falling back to defaults.", self.path)
            return default_record()
        except OSError:
            self.log.exception("Failed to read state file %s. Falling back to defaults.", self.path)
            return default_record()

        try:
            parsed = parse_json(raw)
        except ValueError:
            self.log.exception("State file %s is not valid JSON. Falling back to defaults.", self.path)
            return default_record()

        if not isinstance(parsed, dict):
            self.log.error("State file %s does not hold a JSON object. Falling back to defaults.", self.path)
            return default_record()

        record = default_record()
        record.update((key, value) for key, value in parsed.items() if key in DEFAULT_STATE)
        return record

    def save(self, record: dict) -> None:
        """Overwrite the document with the full record."""
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            text = json.dumps(record, indent=2, ensure_ascii=False, allow_nan=False)
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError:
            self.log.exception("Failed to write state file %s", self.path)
        except ValueError:
            # NaN and Infinity have no JSON form, the previous document is kept
            self.log.exception("Refusing to write non-JSON value to %s", self.path)
