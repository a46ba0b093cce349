from decimal import Decimal

import boto3
import pytest
from botocore.stub import Stubber

from bepshapati.errors import InvalidUpdateField, NotFound
from bepshapati.products.CreateProduct import build_product
from bepshapati.products.UpdateProduct import UpdateProductHandler
from bepshapati.store import Store

from conftest import FIXED_NOW, PRODUCT_ID, body_of, make_event


@pytest.fixture
def dynamodb(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")
    return boto3.resource("dynamodb", region_name="us-east-1")


@pytest.fixture
def real_store(dynamodb):
    return Store(products_table=dynamodb.Table("Products"), users_table=dynamodb.Table("Users")).open()


@pytest.fixture
def stubber(real_store):
    with Stubber(real_store.products.meta.client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def handler(real_store):
    return UpdateProductHandler(real_store, clock=lambda: FIXED_NOW)


def expected_update(expression, names, values):
    return {
        "TableName": "Products",
        "Key": {"product_id": PRODUCT_ID},
        "UpdateExpression": expression,
        "ConditionExpression": "attribute_exists(#pk)",
        "ExpressionAttributeNames": dict(names, **{"#pk": "product_id"}),
        "ExpressionAttributeValues": values,
        "ReturnValues": "NONE",
    }


class TestRatingUpdateSerialization:
    def test_float_rating_is_stored_as_decimal(self, handler, stubber):
        stubber.add_response("update_item", {}, expected_update(
            "SET #f0_0.#f0_1 = :v0, #f1_0 = :v1",
            {"#f0_0": "ratings", "#f0_1": "nifar", "#f1_0": "lastModifiedAt"},
            {":v0": Decimal("4.5"), ":v1": FIXED_NOW},
        ))

        result = handler.update(PRODUCT_ID, {"ratings.nifar": 4.5})

        assert result["product"]["ratings.nifar"] == Decimal("4.5")

    def test_ratings_event_round_trips_through_boto3(self, handler, stubber):
        stubber.add_response("update_item", {}, expected_update(
            "SET #f0_0.#f0_1 = :v0, #f1_0 = :v1, #f2_0 = :v2",
            {"#f0_0": "ratings", "#f0_1": "afia", "#f1_0": "comment", "#f2_0": "lastModifiedAt"},
            {":v0": 5, ":v1": "ok", ":v2": FIXED_NOW},
        ))

        result = handler(make_event({"ratings.afia": 5, "comment": "ok"}, PRODUCT_ID), None)

        assert result["statusCode"] == 200
        assert body_of(result)["product"] == {"ratings.afia": 5, "comment": "ok", "lastModifiedAt": FIXED_NOW}

    def test_missing_product(self, handler, stubber):
        stubber.add_client_error(
            "update_item",
            service_error_code="ConditionalCheckFailedException",
            http_status_code=400,
        )

        with pytest.raises(NotFound):
            handler.update(PRODUCT_ID, {"comment": "great"})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN"), "five", None])
    def test_bad_scores_never_reach_the_store(self, handler, stubber, value):
        with pytest.raises(InvalidUpdateField):
            handler.update(PRODUCT_ID, {"ratings.nifar": value})

    def test_nan_body_is_rejected_before_the_store(self, handler, stubber):
        result = handler(make_event('{"ratings.nifar": NaN}', PRODUCT_ID), None)

        assert result["statusCode"] == 400
        assert body_of(result) == {"error": "Invalid JSON body"}


class TestInsertSerialization:
    def test_float_rating_on_create(self, real_store, stubber):
        item = build_product(
            {"name": "Tea", "imageUrls": ["http://img"], "ratings": {"sijil": 3.5}},
            PRODUCT_ID, FIXED_NOW,
        )
        stubber.add_response("put_item", {}, {
            "TableName": "Products",
            "Item": item,
            "ConditionExpression": "attribute_not_exists(#pk)",
            "ExpressionAttributeNames": {"#pk": "product_id"},
        })

        assert real_store.insert_product(item)["ratings"]["sijil"] == Decimal("3.5")
