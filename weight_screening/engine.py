"""
Weight Screening Engine v1.0
============================
Compliance layer for the weight-for-height screening table.

This module:
- Holds the screening table (one row per inch, 58-80) in memory
- Selects the (min, max) standard for a height, age group and gender
- Classifies a weight as under, compliant or over, with the deviation
- Reports out-of-domain inputs as outcomes, never as errors

This module MUST NOT:
- Extrapolate standards above 80 inches or below 58 inches
- Interpolate between rows
- Make referral or medical decisions
"""

import hashlib
import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from weight_screening import table_data

logger = logging.getLogger("weight_screening")


# ============================================================
# ENUMS AND DATA CLASSES
# ============================================================

class Gender(str, Enum):
    """Gender axis of the table. Declaration order is column order."""
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: Union["Gender", str]) -> "Gender":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown gender '{value}', expected 'male' or 'female'") from None


class ComplianceStatus(str, Enum):
    """Outcome of a single evaluation."""
    UNDER = "UNDER"
    OVER = "OVER"
    COMPLIANT = "COMPLIANT"
    DOES_NOT_MEET_MINIMUM_AGE = "DOES_NOT_MEET_MINIMUM_AGE"
    HEIGHT_NOT_WITHIN_BOUNDS = "HEIGHT_NOT_WITHIN_BOUNDS"
    NO_STANDARD_AVAILABLE = "NO_STANDARD_AVAILABLE"


# Outcomes that carry a ComplianceResult
RESOLVED_STATUSES = frozenset([
    ComplianceStatus.UNDER,
    ComplianceStatus.OVER,
    ComplianceStatus.COMPLIANT,
])


@dataclass(frozen=True)
class TableRow:
    """One row of the screening table."""
    height: int
    min_weight: int
    male_max: Tuple[int, ...]
    female_max: Tuple[int, ...]

    @property
    def columns(self) -> Tuple[int, ...]:
        """All eight max-weight cells, male groups 1-4 then female groups 1-4."""
        return tuple(self.male_max) + tuple(self.female_max)

    def max_weight(self, gender: Gender, age_group: int) -> int:
        return self.columns[column_index(gender, age_group)]


@dataclass(frozen=True)
class Standard:
    """Allowed weight bounds for one height/gender/age group."""
    min_weight: int
    max_weight: int


@dataclass(frozen=True)
class ComplianceResult:
    """A weight compared against its standard."""
    standard: Standard
    actual: int
    delta: int


@dataclass(frozen=True)
class Compliance:
    """
    Tagged outcome of an evaluation.

    UNDER, OVER and COMPLIANT carry a ComplianceResult; the other three
    statuses carry nothing.
    """
    status: ComplianceStatus
    result: Optional[ComplianceResult] = None

    def __post_init__(self):
        if (self.status in RESOLVED_STATUSES) != (self.result is not None):
            raise ValueError(f"{self.status.value} outcome has mismatched result payload")

    @classmethod
    def under(cls, result: ComplianceResult) -> "Compliance":
        return cls(ComplianceStatus.UNDER, result)

    @classmethod
    def over(cls, result: ComplianceResult) -> "Compliance":
        return cls(ComplianceStatus.OVER, result)

    @classmethod
    def compliant(cls, result: ComplianceResult) -> "Compliance":
        return cls(ComplianceStatus.COMPLIANT, result)

    @classmethod
    def does_not_meet_minimum_age(cls) -> "Compliance":
        return cls(ComplianceStatus.DOES_NOT_MEET_MINIMUM_AGE)

    @classmethod
    def height_not_within_bounds(cls) -> "Compliance":
        return cls(ComplianceStatus.HEIGHT_NOT_WITHIN_BOUNDS)

    @classmethod
    def no_standard_available(cls) -> "Compliance":
        return cls(ComplianceStatus.NO_STANDARD_AVAILABLE)

    @property
    def is_resolved(self) -> bool:
        """True when the weight was actually compared against a standard."""
        return self.result is not None

    @property
    def is_compliant(self) -> bool:
        return self.status == ComplianceStatus.COMPLIANT

    def to_dict(self) -> Dict[str, Any]:
        if self.result is None:
            return {"status": self.status.value, "standard": None, "actual": None, "delta": None}
        return {
            "status": self.status.value,
            "standard": {
                "min": self.result.standard.min_weight,
                "max": self.result.standard.max_weight,
            },
            "actual": self.result.actual,
            "delta": self.result.delta,
        }


@dataclass
class ScreenedSubject:
    """One roster entry and its outcome."""
    subject_id: str
    gender: Gender
    age: int
    height: int
    weight: int
    compliance: Compliance


@dataclass
class ScreeningReport:
    """Complete result of screening a roster."""
    screened_at: str
    subjects: List[ScreenedSubject]
    summary: Dict[str, int]
    table_version: str
    input_hash: str
    output_hash: str = ""


class StandardsTableError(ValueError):
    """The screening table data is corrupt."""


# ============================================================
# AGE GROUP / COLUMN SELECTION
# ============================================================

def age_group_for(age: int) -> Optional[int]:
    """
    Map an age to its table age group (1-4).

    Returns None for ages below the first group (16 and under).
    """
    for group, lower, upper in table_data.AGE_GROUPS:
        if age >= lower and (upper is None or age <= upper):
            return group
    return None


def column_index(gender: Gender, age_group: int) -> int:
    """Index of the max-weight cell for gender x age group (0-7)."""
    gender_offset = list(Gender).index(gender) * len(table_data.AGE_GROUPS)
    return gender_offset + (age_group - 1)


def whole_number(name: str, value: Any) -> int:
    """
    Coerce a measurement to int.

    Integral floats (60.0) are accepted; fractional values (60.5) and
    non-numbers raise ValueError since the table is indexed by whole units.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    return int(value)


# ============================================================
# STANDARDS TABLE (SINGLETON CACHE))
# ============================================================

class StandardsTable:
    """
    Singleton holder for the screening table.
    Built once from table_data and read-only afterwards.
    """
    _instance = None
    _loaded = False
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if StandardsTable._loaded:
            return
        # Concurrent first callers wait here until the load is committed
        with StandardsTable._lock:
            if not StandardsTable._loaded:
                self._load_data()
                StandardsTable._loaded = True

    @classmethod
    def reset(cls):
        """Reset the singleton for testing purposes."""
        with cls._lock:
            cls._instance = None
            cls._loaded = False

    def _load_data(self, raw_rows: Optional[Iterable[tuple]] = None):
        """Build and validate rows, then swap them in only on success."""
        if raw_rows is None:
            raw_rows = table_data.SCREENING_TABLE

        group_count = len(table_data.AGE_GROUPS)
        rows = []
        for height, min_weight, male_max, female_max in raw_rows:
            if len(male_max) != group_count or len(female_max) != group_count:
                logger.error(f"DATA_ERROR: row {height} has {len(male_max)}/{len(female_max)} max columns, expected {group_count}")
                raise StandardsTableError(f"Row for height {height} must have {group_count} male and {group_count} female columns")
            rows.append(TableRow(
                height=int(height),
                min_weight=int(min_weight),
                male_max=tuple(int(v) for v in male_max),
                female_max=tuple(int(v) for v in female_max),
            ))

        rows = tuple(sorted(rows, key=lambda r: r.height))
        rows_by_height = self._build_indexes(rows)
        self._validate_rows(rows, rows_by_height)

        self._rows = rows
        self._rows_by_height = rows_by_height
        logger.info(f"Loaded screening table v{table_data.TABLE_VERSION} ({len(rows)} rows, heights {rows[0].height}-{rows[-1].height})")

    @staticmethod
    def _build_indexes(rows: Tuple[TableRow, ...]) -> Dict[int, TableRow]:
        """Index rows by exact height."""
        rows_by_height = {}
        for row in rows:
            if row.height in rows_by_height:
                logger.error(f"DATA_ERROR: duplicate row for height {row.height}")
                raise StandardsTableError(f"Duplicate row for height {row.height}")
            rows_by_height[row.height] = row
        return rows_by_height

    @staticmethod
    def _validate_rows(rows: Tuple[TableRow, ...], rows_by_height: Dict[int, TableRow]):
        """Every in-range height needs a row; monotonicity is only reported."""
        missing = [
            h for h in range(table_data.MIN_HEIGHT, table_data.MAX_HEIGHT + 1)
            if h not in rows_by_height
        ]
        if missing:
            logger.error(f"DATA_ERROR: no row for heights {missing}")
            raise StandardsTableError(f"Screening table is missing heights {missing}")

        extra = [h for h in rows_by_height if not table_data.MIN_HEIGHT <= h <= table_data.MAX_HEIGHT]
        if extra:
            logger.error(f"DATA_ERROR: rows outside {table_data.MIN_HEIGHT}-{table_data.MAX_HEIGHT}: {extra}")
            raise StandardsTableError(f"Screening table has rows outside the height range: {extra}")

        previous = None
        for row in rows:
            for label, values in (("male", row.male_max), ("female", row.female_max)):
                published = [v for v in values if v != table_data.NO_DATA]
                if published != sorted(published):
                    logger.warning(f"DATA_WARNING: {label} max weights decrease with age at height {row.height}: {values}")
            if previous is not None:
                for idx, (before, after) in enumerate(zip(previous.columns, row.columns)):
                    if table_data.NO_DATA not in (before, after) and after < before:
                        logger.warning(f"DATA_WARNING: column {idx} decreases from height {previous.height} to {row.height}")
            previous = row

    @property
    def rows(self) -> Tuple[TableRow, ...]:
        return self._rows

    @property
    def heights(self) -> List[int]:
        return [row.height for row in self._rows]

    @property
    def min_height(self) -> int:
        return self._rows[0].height

    @property
    def max_height(self) -> int:
        return self._rows[-1].height

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def table_version(self) -> str:
        return table_data.TABLE_VERSION

    @property
    def source(self) -> str:
        return table_data.TABLE_SOURCE

    def row_for(self, height: int) -> Optional[TableRow]:
        """Row whose height equals the input, or None outside the table."""
        return self._rows_by_height.get(height)


# ============================================================
# COMPLIANCE EVALUATOR
# ============================================================

class ComplianceEvaluator:
    """
    Decision procedure for the screening table.

    Every integer input maps to exactly one ComplianceStatus.
    """

    def __init__(self):
        self.table = StandardsTable()

    def evaluate(self, gender: Union[Gender, str], age: int, height: int, weight: int) -> Compliance:
        """
        Classify a subject's weight against the screening table.

        Args:
            gender: Gender or "male"/"female"
            age: Age in whole years
            height: Height in whole inches
            weight: Weight in whole pounds

        Returns:
            Compliance with one of the six statuses
        """
        gender = Gender.parse(gender)
        age = whole_number("age", age)
        height = whole_number("height", height)
        weight = whole_number("weight", weight)

        # Step 1: height bounds (takes precedence over age)
        if not table_data.MIN_HEIGHT <= height <= table_data.MAX_HEIGHT:
            logger.debug(f"HEIGHT_NOT_WITHIN_BOUNDS: height={height}")
            return Compliance.height_not_within_bounds()

        # Step 2: minimum age
        age_group = age_group_for(age)
        if age_group is None:
            logger.debug(f"DOES_NOT_MEET_MINIMUM_AGE: age={age}")
            return Compliance.does_not_meet_minimum_age()

        # Step 3: row lookup
        row = self.table.row_for(height)
        if row is None:
            # _validate_rows guarantees every in-range height
            raise StandardsTableError(f"No row for height {height}")

        # Step 4: column selection
        min_weight = row.min_weight
        max_weight = row.max_weight(gender, age_group)

        # Step 5: unpublished cell
        if min_weight == table_data.NO_DATA or max_weight == table_data.NO_DATA:
            logger.debug(f"NO_STANDARD_AVAILABLE: {gender.value} height={height} age_group={age_group}")
            return Compliance.no_standard_available()

        # Step 6: range check, bounds inclusive
        standard = Standard(min_weight=min_weight, max_weight=max_weight)
        if weight < min_weight:
            outcome = Compliance.under(ComplianceResult(standard, weight, min_weight - weight))
        elif weight > max_weight:
            outcome = Compliance.over(ComplianceResult(standard, weight, weight - max_weight))
        else:
            outcome = Compliance.compliant(ComplianceResult(standard, weight, 0))

        logger.debug(f"{outcome.status.value}: {gender.value} age={age} height={height} weight={weight} standard={min_weight}-{max_weight}")
        return outcome

    def screen_roster(self, subjects: List[Mapping[str, Any]]) -> ScreeningReport:
        """
        Evaluate a list of subjects.

        Args:
            subjects: List of dicts with keys: gender, age, height, weight
                and optionally subject_id

        Returns:
            ScreeningReport with per-subject outcomes, summary counts and
            determinism hashes
        """
        screened = []
        for position, subject in enumerate(subjects, start=1):
            gender = Gender.parse(subject["gender"])
            age = whole_number("age", subject["age"])
            height = whole_number("height", subject["height"])
            weight = whole_number("weight", subject["weight"])
            screened.append(ScreenedSubject(
                subject_id=str(subject.get("subject_id") or f"subject_{position}"),
                gender=gender,
                age=age,
                height=height,
                weight=weight,
                compliance=self.evaluate(gender, age, height, weight),
            ))

        input_hash = self._compute_hash({
            "subjects": [
                {"subject_id": s.subject_id, "gender": s.gender.value, "age": s.age, "height": s.height, "weight": s.weight}
                for s in screened
            ],
            "table_version": self.table.table_version,
        })

        summary = {"total": len(screened)}
        for status in ComplianceStatus:
            summary[status.value.lower()] = sum(1 for s in screened if s.compliance.status == status)

        report = ScreeningReport(
            screened_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            subjects=screened,
            summary=summary,
            table_version=self.table.table_version,
            input_hash=input_hash,
        )
        report.output_hash = self._compute_report_hash(report)

        logger.info(f"Screened {summary['total']} subjects: {summary['compliant']} compliant, {summary['under']} under, {summary['over']} over")
        return report

    def _compute_report_hash(self, report: ScreeningReport) -> str:
        """Hash of the outcome, excluding the timestamp."""
        hash_data = {
            "subjects": [
                {"subject_id": s.subject_id, **s.compliance.to_dict()}
                for s in report.subjects
            ],
            "summary": report.summary,
            "table_version": report.table_version,
        }
        return self._compute_hash(hash_data)

    def _compute_hash(self, data: Any) -> str:
        """sha256 of the sorted-key JSON form of plain int/str payloads."""
        json_str = json.dumps(data, sort_keys=True, separators=(",", ":"))
        return "sha256:" + hashlib.sha256(json_str.encode("utf-8")).hexdigest()


# ============================================================
# MODULE-LEVEL ACCESSORS
# ============================================================

def get_evaluator() -> ComplianceEvaluator:
    """Get a ComplianceEvaluator instance."""
    return ComplianceEvaluator()


def get_table() -> StandardsTable:
    """Get the singleton screening table."""
    return StandardsTable()


def evaluate(gender: Union[Gender, str], age: int, height: int, weight: int) -> Compliance:
    """Classify one subject against the screening table."""
    return get_evaluator().evaluate(gender, age, height, weight)
