"""Load and validate reference datasets from JSON files."""

from __future__ import annotations

import json
from pathlib import Path

from practice_analytics.models.reference import ReferenceData
from practice_analytics.reference.fallback import FALLBACK_REFERENCE_DATA
from practice_analytics.reference.schema import ReferencePayload


def load_reference_data(file_path: Path) -> ReferenceData:
    """Load and validate a reference dataset from a JSON file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Reference dataset not found: {file_path}")

    with open(file_path, "r") as f:
        raw = json.load(f)

    return ReferencePayload.model_validate(raw).to_reference_data()


def get_default_reference_data() -> ReferenceData:
    """Return the bundled fallback dataset."""
    return FALLBACK_REFERENCE_DATA
