import re
import secrets

# 12 random bytes, hex encoded
PRODUCT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_product_id():
    return secrets.token_hex(12)


def is_valid_product_id(value):
    return isinstance(value, str) and PRODUCT_ID_PATTERN.match(value) is not None
