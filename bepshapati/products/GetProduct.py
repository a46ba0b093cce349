from bepshapati.errors import InvalidIdentifier, NotFound
from bepshapati.products.ids import is_valid_product_id
from bepshapati.store import default_store
from bepshapati.utils import error_response, path_param, response


class GetProductHandler:
    def __init__(self, store):
        self.store = store

    def get(self, product_id):
        if not is_valid_product_id(product_id):
            raise InvalidIdentifier()
        item = self.store.get_product(product_id)
        if not item:
            raise NotFound()
        return item

    def __call__(self, event, context):
        product_id = path_param(event, "product_id")
        print(f"Get product request: {product_id}")
        try:
            item = self.get(product_id)
        except Exception as e:
            return error_response(e)
        return response(200, item)


def lambda_handler(event, context):
    return GetProductHandler(default_store())(event, context)
