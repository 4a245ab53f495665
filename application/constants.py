"""Application-level constants."""

# Stage names shown in log lines
STAGE_STRUCTURE = "structure"
STAGE_MULTICOLLECTIONS = "multicollections"
