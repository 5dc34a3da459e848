"""
Per-step telemetry.
Optimizers emit one row per generation / iteration to each observer; Recorder
is the stock observer that keeps the rows and writes them out as CSV.
"""
import csv
import logging
from dataclasses import asdict, astuple, dataclass, fields
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRow:
    generation: int
    offspring: int
    fundamental: float
    max_fitness: float
    average_fitness: float
    std: float


@dataclass(frozen=True)
class IterationRow:
    iteration: int
    fitness: float
    fundamental: float = 0.0


Row = Union[GenerationRow, IterationRow]


def fundamental_or_zero(fundamental: Optional[float]) -> float:
    """Telemetry records a missing fundamental as 0.0."""
    return 0.0 if fundamental is None else float(fundamental)


class Recorder:
    def __init__(self):
        self.rows: List[Row] = []

    def __call__(self, row: Row) -> None:
        self.rows.append(row)

    def __len__(self) -> int:
        return len(self.rows)

    def as_dicts(self) -> List[dict]:
        return [asdict(row) for row in self.rows]

    def to_csv(self, path: Union[str, Path]) -> Path:
        """Writes a header plus one line per row. Nothing is written when no rows were recorded."""
        path = Path(path)
        if not self.rows:
            logger.warning(f"No rows recorded, skipping {path}")
            return path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow([fd.name for fd in fields(self.rows[0])])
            for row in self.rows:
                writer.writerow(astuple(row))
        logger.info(f"Saved {len(self.rows)} rows: {path}")
        return path
