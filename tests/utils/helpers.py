"""Test helper functions."""

import json
from typing import Dict, Any


def create_request(
    method: str = "POST",
    path: str = "/api/estimates/closing_costs",
    body: Any = None,
    query: Dict[str, str] = None,
    headers: Dict[str, str] = None
) -> Dict[str, Any]:
    """Create a serverless request object for testing."""
    if headers is None:
        headers = {
            "content-type": "application/json"
        }

    return {
        "method": method,
        "path": path,
        "headers": headers,
        "body": json.dumps(body) if isinstance(body, (dict, list)) else body,
        "query": query or {}
    }
