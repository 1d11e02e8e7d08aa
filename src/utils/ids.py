"""Identifier generation.

Every id goes through the module-level ``uuid`` reference so tests can swap it
for a deterministic double (see ``tests/mocks.py``).
"""

import uuid


def new_request_id() -> str:
    """Random (v4) id used to correlate a single request."""
    return str(uuid.uuid4())


def new_time_based_id() -> str:
    """Time-ordered (v1) id."""
    return str(uuid.uuid1())
