import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from bepshapati.store import Store

PRODUCT_ID = "507f1f77bcf86cd799439011"
FIXED_NOW = "2026-01-01T00:00:00+00:00"


def client_error(code, message="boom", operation="UpdateItem"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def make_event(body=None, product_id=None):
    event = {"pathParameters": None, "body": None}
    if product_id is not None:
        event["pathParameters"] = {"product_id": product_id}
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    return event


def body_of(result):
    return json.loads(result["body"])


@pytest.fixture
def products_table():
    table = MagicMock()
    table.update_item.return_value = {}
    table.put_item.return_value = {}
    return table


@pytest.fixture
def users_table():
    return MagicMock()


@pytest.fixture
def store(products_table, users_table):
    return Store(products_table=products_table, users_table=users_table).open()
