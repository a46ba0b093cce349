from bepshapati.store import default_store
from bepshapati.utils import error_response, response


class ListProductsHandler:
    def __init__(self, store):
        self.store = store

    def __call__(self, event, context):
        print("List products request")
        try:
            items = self.store.list_products()
        except Exception as e:
            return error_response(e)
        return response(200, items)


def lambda_handler(event, context):
    return ListProductsHandler(default_store())(event, context)
