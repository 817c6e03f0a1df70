"""
Weight Screening API Server Entry Point v1.0
Serves the weight-for-height screening engine.

Deployment:
  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weight_screening import __version__, get_table
from weight_screening.api import register_weight_screening_endpoints

# ============================================
# Configuration
# ============================================
LOG_LEVEL = os.getenv("WEIGHT_SCREENING_LOG_LEVEL", "INFO").upper()
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="Weight Screening API",
    description="Weight-for-height compliance against the AR 600-9 screening table",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# ===== WEIGHT SCREENING ENGINE =====
register_weight_screening_endpoints(app)
get_table()
logger.info("Weight Screening endpoints registered")


@app.get("/health", tags=["Health"])
def health():
    """Liveness check; also confirms the screening table is loaded."""
    table = get_table()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "api_version": __version__,
        "table_version": table.table_version,
        "table_rows": table.row_count,
    }


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=True)
