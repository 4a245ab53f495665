"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the two workflows exposed by main.py:
- structure: discipline-matrix CSV -> structure-builder XML
- multicollections: reporting-year handle CSVs -> multi-collection mapping CSV
"""

from application.multicollections import (
    MultiCollectionsResult,
    load_membership_table,
    make_resolver,
    render_mapping_csv,
    run_multicollections,
)
from application.structure import build_structure, log_structure_summary, run_structure

__all__ = [
    # Main workflows
    "run_structure",
    "run_multicollections",
    # Building blocks
    "build_structure",
    "log_structure_summary",
    "load_membership_table",
    "make_resolver",
    "render_mapping_csv",
    "MultiCollectionsResult",
]
