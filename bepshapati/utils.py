import os
import json
from datetime import datetime, timezone
from decimal import Decimal

from bepshapati.errors import ApiError, InvalidBody


# ---------------------------
# Utils: Decimal cleanup
# ---------------------------
def clean_decimals(obj):
    if isinstance(obj, list):
        return [clean_decimals(i) for i in obj]
    if isinstance(obj, dict):
        return {k: clean_decimals(v) for k, v in obj.items()}
    if isinstance(obj, Decimal):
        # whole numbers come back as int, the rest as float
        return int(obj) if obj % 1 == 0 else float(obj)
    return obj


def now_iso():
    return datetime.now(timezone.utc).isoformat()


# ---------------------------
# Utils: API Gateway responses
# ---------------------------
def response(status, body):
    body = clean_decimals(body)
    return {
        "statusCode": status,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": os.environ.get("ALLOWED_ORIGIN", "*"),
            "Access-Control-Allow-Headers": (
                "Content-Type,X-Amz-Date,Authorization,X-Api-Key,"
                "X-Amz-Security-Token"
            ),
            "Access-Control-Allow-Methods": "OPTIONS,GET,POST,PUT",
            "Access-Control-Allow-Credentials": "true",
        },
        "body": json.dumps(body, default=str)
    }


def error_response(exc):
    """
    Boundary mapping for every handler: known API errors keep their status
    and message, anything else becomes a generic 500.
    """
    if isinstance(exc, ApiError):
        return response(exc.status, {"error": exc.message})
    print(f"Unexpected error: {exc!r}")
    return response(500, {"error": "Internal server error"})


# ---------------------------
# Utils: request parsing
# ---------------------------
def _reject_constant(name):
    # NaN and Infinity are not JSON and DynamoDB can't store them
    raise InvalidBody()


def parse_body(event):
    """Parses the JSON object body, floats as Decimal so DynamoDB accepts them."""
    raw = event.get("body") or "{}"
    try:
        body = json.loads(raw, parse_float=Decimal, parse_constant=_reject_constant)
    except json.JSONDecodeError:
        raise InvalidBody()
    if not isinstance(body, dict):
        raise InvalidBody()
    return body


def path_param(event, name):
    return (event.get("pathParameters") or {}).get(name)
