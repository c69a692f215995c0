import os
from pathlib import Path
from typing import Optional

# Base directory for the package
BASE_DIR = Path(__file__).resolve().parent

# Policy documents
POLICY_DIR = BASE_DIR / "policies"
DEFAULT_POLICY_FILE = POLICY_DIR / "default.yaml"

# Audit
AUDIT_LOG_FILE = BASE_DIR / "audit.log"
AUDIT_LOG_ENV = "FRENEMIES_AUDIT_LOG"
AUDIT_DEFAULT_LIMIT = 50

# Policy document keys
WILDCARD = "*"


def audit_log_from_env() -> Optional[Path]:
    raw = os.environ.get(AUDIT_LOG_ENV)
    if not raw:
        return None
    return Path(raw).expanduser()
