"""Flat-file persistence for cached diet plans."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

from diet_optimizer.domain.diet import CacheEntry, DietPlan
from diet_optimizer.domain.errors import MalformedRecord, PersistenceFailure
from diet_optimizer.services.cache import CacheStore

FIELD_DELIMITER = ";;"
MIN_FIELDS = 9

_TICK_EPOCH = datetime(1, 1, 1, tzinfo=UTC)
_TICKS_PER_MICROSECOND = 10

_logger = logging.getLogger(__name__)


def to_ticks(moment: datetime) -> int:
    """Convert a datetime to 100ns ticks since 0001-01-01 UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    delta = moment - _TICK_EPOCH
    microseconds = (delta.days * 86400 + delta.seconds) * 1_000_000
    return (microseconds + delta.microseconds) * _TICKS_PER_MICROSECOND


def from_ticks(ticks: int) -> datetime:
    """Convert 100ns ticks since 0001-01-01 UTC back to a datetime."""
    return _TICK_EPOCH + timedelta(microseconds=ticks // _TICKS_PER_MICROSECOND)


def format_record(entry: CacheEntry) -> str:
    """Serialize a cache entry as a single ``;;``-delimited line."""
    plan = entry.plan
    foods = ",".join(f"{food_id}:{count}" for food_id, count in plan.foods.items())
    fields = [
        entry.user_id,
        str(to_ticks(entry.generated_at)),
        foods,
        repr(plan.score),
        repr(plan.total_calories),
        repr(plan.carbs),
        repr(plan.fat),
        repr(plan.protein),
        repr(plan.vitamins),
        repr(plan.average_tier),
        repr(plan.average_level),
    ]
    return FIELD_DELIMITER.join(fields)


def parse_record(line: str) -> CacheEntry:
    """Parse one persisted line; trailing optional fields default to 0."""
    parts = line.split(FIELD_DELIMITER)
    if len(parts) < MIN_FIELDS:
        raise MalformedRecord(f"Expected {MIN_FIELDS} fields, got {len(parts)}")
    try:
        generated_at = from_ticks(int(parts[1]))
        foods = _parse_foods(parts[2])
        score, calories, carbs, fat, protein, vitamins = (
            float(value) for value in parts[3:9]
        )
    except (ValueError, OverflowError) as exc:
        raise MalformedRecord(str(exc)) from exc

    plan = DietPlan(
        foods=foods,
        score=score,
        total_calories=calories,
        carbs=carbs,
        fat=fat,
        protein=protein,
        vitamins=vitamins,
        average_tier=_optional_float(parts, 9),
        average_level=_optional_float(parts, 10),
    )
    return CacheEntry(user_id=parts[0], generated_at=generated_at, plan=plan)


def _parse_foods(raw: str) -> dict[str, int]:
    foods: dict[str, int] = {}
    for chunk in raw.split(","):
        food_id, sep, count = chunk.rpartition(":")
        if not sep or not food_id:
            continue
        foods[food_id] = int(count)
        if foods[food_id] < 1:
            raise MalformedRecord(f"Non-positive count for {food_id}: {count}")
    return foods


def _optional_float(parts: list[str], index: int) -> float:
    if len(parts) <= index:
        return 0.0
    try:
        return float(parts[index])
    except ValueError:
        return 0.0


@dataclass
class FileCacheStore(CacheStore):
    """Stores one record per user in a text file, rewritten on every save."""

    path: Path

    def load(self) -> dict[str, CacheEntry]:
        """Read all well-formed records; malformed lines are skipped."""
        if not self.path.exists():
            return {}
        try:
            lines = self.path.read_bytes().splitlines()
        except OSError as exc:
            _logger.warning("Failed to read diet cache %s: %s", self.path, exc)
            return {}
        entries: dict[str, CacheEntry] = {}
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                entry = parse_record(line.decode("utf-8"))
            except (MalformedRecord, UnicodeDecodeError) as exc:
                _logger.debug("Skipping cache line %s: %s", number, exc)
                continue
            entries[entry.user_id] = entry
        return entries

    def save(self, entries: dict[str, CacheEntry]) -> None:
        """Rewrite the file with the given entries."""
        lines = [format_record(entry) for entry in entries.values()]
        content = "\n".join(lines) + ("\n" if lines else "")
        try:
            self.path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise PersistenceFailure(f"Failed to write {self.path}: {exc}") from exc
