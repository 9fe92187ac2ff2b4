from __future__ import annotations

import json
from collections.abc import Mapping

CREDENTIAL_PARAMS = frozenset({"apikey", "api_key"})


def strip_credentials(params: Mapping[str, str]) -> dict[str, str]:
    return {name: value for name, value in params.items() if name.lower() not in CREDENTIAL_PARAMS}


def derive_key(resource_path: str, params: Mapping[str, str]) -> str:
    """Build the cache key for an upstream resource.

    Parameters are serialized with sorted names so that callers listing the
    same parameters in a different order share one entry. Credentials are
    dropped before serialization and never reach the key.
    """
    payload = json.dumps(strip_credentials(params), sort_keys=True, separators=(",", ":"))
    return f"{resource_path}?{payload}"
