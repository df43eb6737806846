"""Helpers shared by the JSON endpoints."""

import json


def read_json(request) -> dict | None:
    """Parse the request body as a JSON object.

    Returns None when the body is not valid JSON or not an object.
    """
    try:
        data = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None
