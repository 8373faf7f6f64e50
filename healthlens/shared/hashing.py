"""
HealthLens Canonical Hashing
Deterministic fingerprints for questionnaire inputs, used as assignment provenance.
"""

import hashlib
import json
from typing import Any


def canonicalize(obj: Any) -> str:
    """
    Convert object to canonical JSON string.
    Deterministic: same input always produces same output.
    """
    def _clean(o: Any) -> Any:
        if isinstance(o, dict):
            return {str(k): _clean(v) for k, v in sorted(o.items())}
        elif isinstance(o, (list, tuple)):
            return [_clean(i) for i in o]
        elif isinstance(o, str):
            return o.strip()
        return o

    return json.dumps(_clean(obj), sort_keys=True, separators=(',', ':'), ensure_ascii=True)


def canonicalize_and_hash(obj: Any) -> str:
    """
    Returns: "sha256:<64-char-hex>"
    """
    digest = hashlib.sha256(canonicalize(obj).encode('utf-8')).hexdigest()
    return f"sha256:{digest}"
