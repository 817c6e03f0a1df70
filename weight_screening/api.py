"""
Weight Screening Engine v1.0 - API Endpoints
============================================
FastAPI endpoints for screening evaluation and table access.
"""

from typing import Dict, List, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field, field_validator

from weight_screening.engine import Compliance, ComplianceStatus, Gender, TableRow
from weight_screening.render import describe

# These will be registered on the main FastAPI app
# Import: from weight_screening.api import register_weight_screening_endpoints

API_PREFIX = "/api/v1/weight-screening"
API_TAGS = ["Weight Screening"]


# ============================================================
# REQUEST/RESPONSE MODELS
# ============================================================

class SubjectInput(BaseModel):
    """A single subject to evaluate."""
    gender: Gender = Field(..., description="'male' or 'female'")
    age: int = Field(..., description="Age in whole years")
    height: int = Field(..., description="Height in whole inches")
    weight: int = Field(..., description="Weight in whole pounds")

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class RosterSubjectInput(SubjectInput):
    """A roster entry, optionally identified."""
    subject_id: Optional[str] = Field(default=None, description="Caller's identifier for the subject")


class ScreenRosterRequest(BaseModel):
    """Request to screen multiple subjects."""
    subjects: List[RosterSubjectInput] = Field(..., description="Subjects to screen")


class StandardResponse(BaseModel):
    min: int
    max: int


class ComplianceResponse(BaseModel):
    """Outcome for a single subject."""
    status: str
    standard: Optional[StandardResponse]
    actual: Optional[int]
    delta: Optional[int]
    is_resolved: bool
    description: str


class EvaluateResponse(ComplianceResponse):
    """Response from evaluating one subject."""
    gender: str
    age: int
    height: int
    weight: int
    age_group: Optional[int]


class ScreenedSubjectResponse(ComplianceResponse):
    subject_id: str
    gender: str
    age: int
    height: int
    weight: int


class ScreenRosterResponse(BaseModel):
    """Response from screening a roster."""
    screened_at: str
    subjects: List[ScreenedSubjectResponse]
    summary: Dict[str, int]
    table_version: str
    input_hash: str
    output_hash: str


class TableRowResponse(BaseModel):
    height: int
    min_weight: int
    male_max: List[int]
    female_max: List[int]


def _compliance_fields(compliance: Compliance) -> dict:
    """Flatten a Compliance into response fields."""
    payload = compliance.to_dict()
    return {
        "status": payload["status"],
        "standard": payload["standard"],
        "actual": payload["actual"],
        "delta": payload["delta"],
        "is_resolved": compliance.is_resolved,
        "description": describe(compliance),
    }


def _row_response(row: TableRow) -> TableRowResponse:
    return TableRowResponse(
        height=row.height,
        min_weight=row.min_weight,
        male_max=list(row.male_max),
        female_max=list(row.female_max),
    )


# ============================================================
# ENDPOINT REGISTRATION
# ============================================================

def register_weight_screening_endpoints(app):
    """
    Register all weight screening endpoints on a FastAPI app.

    Usage:
        from weight_screening.api import register_weight_screening_endpoints
        register_weight_screening_endpoints(app)
    """
    from weight_screening import table_data
    from weight_screening.engine import age_group_for, get_evaluator, get_table

    # ---------------------------------------------------------
    # GET /api/v1/weight-screening/table
    # ---------------------------------------------------------
    @app.get(f"{API_PREFIX}/table", tags=API_TAGS)
    def get_screening_table():
        """
        Full weight-for-height screening table.

        Each row holds the minimum weight and the maximum weight for each
        gender and age group. A max of 0 means no published standard.
        """
        table = get_table()
        return {
            "version": table.table_version,
            "source": table.source,
            "min_height": table.min_height,
            "max_height": table.max_height,
            "row_count": table.row_count,
            "rows": [_row_response(row) for row in table.rows],
        }

    # ---------------------------------------------------------
    # GET /api/v1/weight-screening/table/{height}
    # ---------------------------------------------------------
    @app.get(f"{API_PREFIX}/table/{{height}}", tags=API_TAGS, response_model=TableRowResponse)
    def get_screening_row(height: int):
        """Single table row by height in inches."""
        table = get_table()
        row = table.row_for(height)
        if row is None:
            raise HTTPException(
                status_code=404,
                detail=f"No screening row for height {height}; table covers {table.min_height}-{table.max_height} inches",
            )
        return _row_response(row)

    # ---------------------------------------------------------
    # GET /api/v1/weight-screening/age-groups
    # ---------------------------------------------------------
    @app.get(f"{API_PREFIX}/age-groups", tags=API_TAGS)
    def list_age_groups():
        """Age groups used to select the max-weight column."""
        return {
            "minimum_age": table_data.MINIMUM_AGE,
            "age_groups": [
                {"group": group, "min_age": lower, "max_age": upper}
                for group, lower, upper in table_data.AGE_GROUPS
            ],
        }

    # ---------------------------------------------------------
    # POST /api/v1/weight-screening/evaluate
    # ---------------------------------------------------------
    @app.post(f"{API_PREFIX}/evaluate", tags=API_TAGS, response_model=EvaluateResponse)
    def evaluate_subject(request: SubjectInput):
        """
        Evaluate one subject against the screening table.

        Outcomes:
        - UNDER / OVER / COMPLIANT: weight compared against (min, max)
        - HEIGHT_NOT_WITHIN_BOUNDS: height outside 58-80 inches
        - DOES_NOT_MEET_MINIMUM_AGE: age 16 or under
        - NO_STANDARD_AVAILABLE: no published standard for the cell
        """
        compliance = get_evaluator().evaluate(request.gender, request.age, request.height, request.weight)
        return EvaluateResponse(
            gender=request.gender.value,
            age=request.age,
            height=request.height,
            weight=request.weight,
            age_group=age_group_for(request.age),
            **_compliance_fields(compliance),
        )

    # ---------------------------------------------------------
    # POST /api/v1/weight-screening/screen
    # ---------------------------------------------------------
    @app.post(f"{API_PREFIX}/screen", tags=API_TAGS, response_model=ScreenRosterResponse)
    def screen_roster(request: ScreenRosterRequest):
        """
        Screen a roster of subjects.

        Returns per-subject outcomes, counts per outcome and input/output
        hashes. Identical rosters produce identical hashes.
        """
        report = get_evaluator().screen_roster([s.model_dump(mode="json") for s in request.subjects])
        return ScreenRosterResponse(
            screened_at=report.screened_at,
            subjects=[
                ScreenedSubjectResponse(
                    subject_id=s.subject_id,
                    gender=s.gender.value,
                    age=s.age,
                    height=s.height,
                    weight=s.weight,
                    **_compliance_fields(s.compliance),
                )
                for s in report.subjects
            ],
            summary=report.summary,
            table_version=report.table_version,
            input_hash=report.input_hash,
            output_hash=report.output_hash,
        )

    # ---------------------------------------------------------
    # GET /api/v1/weight-screening/status
    # ---------------------------------------------------------
    @app.get(f"{API_PREFIX}/status", tags=API_TAGS)
    def weight_screening_status():
        """Engine status and loaded table details."""
        table = get_table()
        return {
            "engine_version": "1.0",
            "status": "operational",
            "table": {
                "version": table.table_version,
                "source": table.source,
                "row_count": table.row_count,
                "min_height": table.min_height,
                "max_height": table.max_height,
                "loaded": True,
            },
            "outcomes": [status.value for status in ComplianceStatus],
        }

    return app
