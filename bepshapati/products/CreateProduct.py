from bepshapati.errors import InvalidProduct
from bepshapati.products.ids import new_product_id
from bepshapati.products.updates import REVIEWERS, check_comment, check_image_urls, rating_value
from bepshapati.store import default_store
from bepshapati.utils import error_response, now_iso, parse_body, response


def build_product(body, product_id, created_at):
    name = body.get("name")
    image_urls = body.get("imageUrls")
    if not isinstance(name, str) or not name or not isinstance(image_urls, list):
        raise InvalidProduct()
    check_image_urls(image_urls, error=InvalidProduct)

    # only the known reviewers make it into the ratings map, missing ones start at 0
    supplied = body.get("ratings")
    if not isinstance(supplied, dict):
        supplied = {}
    ratings = {}
    for reviewer in REVIEWERS:
        score = supplied.get(reviewer)
        ratings[reviewer] = 0 if score is None else rating_value(f"ratings.{reviewer}", score, error=InvalidProduct)

    comment = body.get("comment")
    if comment is None:
        comment = ""
    check_comment(comment, error=InvalidProduct)

    return {
        "product_id": product_id,
        "name": name,
        "imageUrls": image_urls,
        "ratings": ratings,
        "comment": comment,
        "createdAt": created_at,
    }


class CreateProductHandler:
    def __init__(self, store, clock=now_iso, id_factory=new_product_id):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def create(self, body):
        item = build_product(body, self.id_factory(), self.clock())
        return self.store.insert_product(item)

    def __call__(self, event, context):
        print("Create product request")
        try:
            item = self.create(parse_body(event))
        except Exception as e:
            return error_response(e)
        return response(201, item)


def lambda_handler(event, context):
    return CreateProductHandler(default_store())(event, context)
