"""Global configuration for QuorumSecret."""

import os

# ---------- Finite-field prime ----------
# 256-bit prime (the secp256k1 base field).  All arithmetic is mod PRIME
# unless a caller builds its own PrimeField.
_DEFAULT_PRIME = 2**256 - 2**32 - 977
PRIME = int(os.environ.get("QUORUMSECRET_PRIME", str(_DEFAULT_PRIME)))

# ---------- Shamir parameters ----------
DEFAULT_NUM_SHARES = 4   # N
DEFAULT_THRESHOLD = 2    # K  (need >= K shares to reconstruct)

# ---------- Test-case runner ----------
TESTCASE_FILES = ["testcase1.json", "testcase2.json"]

# ---------- Reconstruction service ----------
COORDINATOR_URL = os.environ.get("QUORUMSECRET_COORDINATOR_URL", "http://localhost:8000")
