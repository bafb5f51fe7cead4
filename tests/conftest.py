"""Root conftest: isolates env vars BEFORE any zoneclock module is imported.

settings.load_settings() reads ZONECLOCK_* variables and .env files, so
real values must not leak into tests.
"""

import os
import tempfile

for _key in ("ZONECLOCK_PRIMARY_ZONE", "ZONECLOCK_COMPARISON_ZONE", "ZONECLOCK_LONGITUDE"):
    os.environ.pop(_key, None)

# Force-set (not setdefault) so a real config dir is never read
os.environ["ZONECLOCK_DIR"] = tempfile.mkdtemp(prefix="zoneclock-test-")
