from pathlib import Path

# Repo-root conventional directories/files (overrideable on the command line or via .env)
CONFIG_DIR = Path("configs")
STRUCTURE_FILE = CONFIG_DIR / "structure.yaml"
CLASSIFICATION_FILE = CONFIG_DIR / "classification.yaml"
MEMBERSHIP_FILE = CONFIG_DIR / "membership.yaml"

# Environment variables read by main.py
ENV_STRUCTURE_FILE = "TAXONOMY_STRUCTURE_CONFIG"
ENV_MEMBERSHIP_FILE = "TAXONOMY_MEMBERSHIP_CONFIG"
ENV_LOG_LEVEL = "TAXONOMY_LOG_LEVEL"
