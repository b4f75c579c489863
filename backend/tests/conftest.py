import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT,):
    str_path = str(path)
    if str_path not in sys.path:
        sys.path.insert(0, str_path)

from datetime import datetime, timezone

import pytest


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 15, 18, 0, tzinfo=timezone.utc)
