from bepshapati.errors import InvalidIdentifier
from bepshapati.products.ids import is_valid_product_id
from bepshapati.products.updates import UpdateMode, plan_update
from bepshapati.store import default_store
from bepshapati.utils import error_response, now_iso, parse_body, path_param, response

MESSAGES = {
    UpdateMode.COMMENT_ONLY: "Comment updated successfully",
    UpdateMode.RATINGS: "Product updated successfully",
}


class UpdateProductHandler:
    """
    Applies a partial update to one product: either a comment-only update
    or a ratings update, never both modes in one call.
    """

    def __init__(self, store, clock=now_iso):
        self.store = store
        self.clock = clock

    def update(self, product_id, updates):
        if not is_valid_product_id(product_id):
            raise InvalidIdentifier()
        mode, fields = plan_update(updates, self.clock())
        self.store.update_product(product_id, fields)
        return {"message": MESSAGES[mode], "product": fields}

    def __call__(self, event, context):
        product_id = path_param(event, "product_id")
        print(f"Update product request: {product_id}")
        try:
            # a malformed id is reported even when the body is malformed too
            if not is_valid_product_id(product_id):
                raise InvalidIdentifier()
            result = self.update(product_id, parse_body(event))
        except Exception as e:
            return error_response(e)
        return response(200, result)


def lambda_handler(event, context):
    return UpdateProductHandler(default_store())(event, context)
