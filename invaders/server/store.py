"""JSON-file persistence for leaderboard records."""
import json
import logging
import os
import tempfile
import threading
import time
from datetime import datetime, timezone
from numbers import Number

log = logging.getLogger(__name__)


def _is_record(item):
    score = item.get('score') if isinstance(item, dict) else None
    return isinstance(score, Number) and not isinstance(score, bool)


class LeaderboardStore:
    def __init__(self, path, keep=50):
        self.path = path
        self.keep = keep
        self._lock = threading.Lock()
        self.directory = os.path.dirname(os.path.abspath(path))
        if not os.path.isdir(self.directory):
            os.makedirs(self.directory, exist_ok=True)
            log.info("Created data directory %s", self.directory)

    def load(self):
        """All stored records; an absent or unreadable file counts as empty."""
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            log.error("Error reading leaderboard %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            log.error("Leaderboard %s does not hold a list, ignoring it", self.path)
            return []
        records = [item for item in data if _is_record(item)]
        if len(records) != len(data):
            log.warning("Dropped %d malformed entries from %s", len(data) - len(records), self.path)
        return records

    def add(self, name, score, miss_count=0, level=1, shots_fired=0, duration=0):
        """Store a record and return the updated, sorted, truncated list."""
        now = time.time()
        record = {
            'name': name,
            'score': score,
            'missCount': miss_count,
            'level': level,
            'shotsFired': shots_fired,
            'duration': duration,
            'timestamp': int(now * 1000),
            'date': datetime.fromtimestamp(now, tz=timezone.utc).isoformat(),
        }
        with self._lock:
            records = self.load()
            records.append(record)
            records.sort(key=lambda r: r['score'], reverse=True)
            records = records[:self.keep]
            self._write(records)
        return records

    def _write(self, records):
        # Old file stays untouched until the new one is complete
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix='.leaderboard-', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
