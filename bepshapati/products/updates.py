from enum import Enum
from decimal import Decimal

from bepshapati.errors import InvalidUpdateField, MissingRatingOrComment

REVIEWERS = ("nifar", "afia", "sijil", "naim")
RATINGS_PREFIX = "ratings."

# Top-level product fields a ratings update may also carry
UPDATABLE_FIELDS = {"name", "imageUrls", "comment"}


class UpdateMode(Enum):
    COMMENT_ONLY = "comment_only"
    RATINGS = "ratings"
    INVALID = "invalid"


def is_ratings_field(field):
    return field.startswith(RATINGS_PREFIX)


def classify(updates):
    """
    Picks the update mode. A comment counts as comment-only only when no
    ratings.* key is present, so a payload carrying both is a ratings update.
    """
    has_ratings = any(is_ratings_field(k) for k in updates)
    if "comment" in updates and not has_ratings:
        return UpdateMode.COMMENT_ONLY
    if has_ratings:
        return UpdateMode.RATINGS
    return UpdateMode.INVALID


def rating_value(field, value, error=InvalidUpdateField):
    """
    Returns the score as a DynamoDB-storable number. Floats become Decimal;
    booleans and non-finite values are refused.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise error(f"{field} must be a number")
    if isinstance(value, float):
        value = Decimal(str(value))
    if isinstance(value, Decimal) and not value.is_finite():
        raise error(f"{field} must be a finite number")
    return value


def check_comment(value, error=InvalidUpdateField):
    if not isinstance(value, str):
        raise error("comment must be a string")


def check_image_urls(value, error=InvalidUpdateField):
    if not isinstance(value, list) or not all(isinstance(u, str) for u in value):
        raise error("imageUrls must be a list of strings")


def _check_field(field, value):
    """Validates one field of a ratings update and returns the value to store."""
    if is_ratings_field(field):
        reviewer = field[len(RATINGS_PREFIX):]
        if reviewer not in REVIEWERS:
            raise InvalidUpdateField(f"Unknown reviewer in field: {field}")
        return rating_value(field, value)
    if field == "comment":
        check_comment(value)
    elif field == "name":
        if not isinstance(value, str) or not value:
            raise InvalidUpdateField("name must be a non-empty string")
    elif field == "imageUrls":
        check_image_urls(value)
    else:
        raise InvalidUpdateField(f"Field cannot be updated: {field}")
    return value


def plan_update(updates, now):
    """
    Validates an update payload and returns (mode, fields), where fields is
    the exact SET document to apply, lastModifiedAt included.
    """
    mode = classify(updates)

    if mode is UpdateMode.COMMENT_ONLY:
        check_comment(updates["comment"])
        return mode, {"comment": updates["comment"], "lastModifiedAt": now}

    if mode is UpdateMode.RATINGS:
        fields = {}
        for field, value in updates.items():
            # server owns the modification time
            if field == "lastModifiedAt":
                continue
            fields[field] = _check_field(field, value)
        fields["lastModifiedAt"] = now
        return mode, fields

    raise MissingRatingOrComment()
