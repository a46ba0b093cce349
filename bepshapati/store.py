import os
import atexit
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from bepshapati.errors import DuplicateProduct, NotFound, StorageFailure

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _storage_failure(exc):
    if isinstance(exc, ClientError):
        return StorageFailure(exc.response.get("Error", {}).get("Message") or str(exc))
    return StorageFailure(str(exc))


def _is_conditional_failure(exc):
    return exc.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


def build_update_expression(fields):
    """
    Turns a field-level document such as {"ratings.nifar": 5, "comment": "ok"}
    into a DynamoDB SET expression. Every path segment goes through a name
    placeholder so reserved words and dotted paths are addressed correctly.
    """
    names = {}
    values = {}
    clauses = []
    for i, (field, value) in enumerate(fields.items()):
        segments = []
        for j, part in enumerate(field.split(".")):
            placeholder = f"#f{i}_{j}"
            names[placeholder] = part
            segments.append(placeholder)
        values[f":v{i}"] = value
        clauses.append(f"{'.'.join(segments)} = :v{i}")
    return "SET " + ", ".join(clauses), names, values


class Store:
    """
    Document store client over the products and users DynamoDB tables.

    Tables can be injected directly; otherwise open() builds them from a
    boto3 resource and close() releases the underlying connection pool.
    """

    def __init__(self, products_table=None, users_table=None,
                 products_table_name="Products", users_table_name="Users",
                 endpoint_url=None):
        self.products_table_name = products_table_name
        self.users_table_name = users_table_name
        self.endpoint_url = endpoint_url
        self.products = products_table
        self.users = users_table
        self._resource = None

    @classmethod
    def from_env(cls):
        return cls(
            products_table_name=os.environ.get("PRODUCTS_TABLE", "Products"),
            users_table_name=os.environ.get("USERS_TABLE", "Users"),
            endpoint_url=os.environ.get("DYNAMODB_ENDPOINT_URL") or None,
        )

    def open(self):
        if self.products is None or self.users is None:
            self._resource = boto3.resource("dynamodb", endpoint_url=self.endpoint_url)
            if self.products is None:
                self.products = self._resource.Table(self.products_table_name)
            if self.users is None:
                self.users = self._resource.Table(self.users_table_name)
        return self

    def close(self):
        if self._resource is not None:
            self._resource.meta.client.close()
            self._resource = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ---------------------------
    # Products
    # ---------------------------
    def list_products(self):
        return self._scan(self.products)

    def get_product(self, product_id):
        try:
            resp = self.products.get_item(Key={"product_id": product_id})
        except (ClientError, BotoCoreError) as e:
            raise _storage_failure(e)
        return resp.get("Item")

    def insert_product(self, item):
        try:
            self.products.put_item(
                Item=item,
                ConditionExpression="attribute_not_exists(#pk)",
                ExpressionAttributeNames={"#pk": "product_id"},
            )
        except ClientError as e:
            if _is_conditional_failure(e):
                raise DuplicateProduct()
            raise _storage_failure(e)
        except BotoCoreError as e:
            raise _storage_failure(e)
        return item

    def update_product(self, product_id, fields):
        """
        Applies a field-level SET to an existing product in a single
        UpdateItem call. A missing product fails the condition and raises
        NotFound; nothing is created.
        """
        expression, names, values = build_update_expression(fields)
        names["#pk"] = "product_id"
        try:
            self.products.update_item(
                Key={"product_id": product_id},
                UpdateExpression=expression,
                ConditionExpression="attribute_exists(#pk)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="NONE",
            )
        except ClientError as e:
            if _is_conditional_failure(e):
                raise NotFound()
            raise _storage_failure(e)
        except BotoCoreError as e:
            raise _storage_failure(e)
        return fields

    # ---------------------------
    # Users
    # ---------------------------
    def list_users(self):
        return self._scan(self.users)

    def get_user(self, username):
        try:
            resp = self.users.get_item(Key={"user_id": username})
        except (ClientError, BotoCoreError) as e:
            raise _storage_failure(e)
        return resp.get("Item")

    def _scan(self, table):
        items = []
        kwargs = {}
        try:
            while True:
                resp = table.scan(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise _storage_failure(e)


@lru_cache(maxsize=None)
def default_store():
    """Process-wide store, opened on the first request of a cold start."""
    store = Store.from_env().open()
    atexit.register(store.close)
    return store
