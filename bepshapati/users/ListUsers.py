from bepshapati.store import default_store
from bepshapati.users.Login import public_user
from bepshapati.utils import error_response, response


class ListUsersHandler:
    def __init__(self, store):
        self.store = store

    def __call__(self, event, context):
        print("List users request")
        try:
            users = [public_user(u) for u in self.store.list_users()]
        except Exception as e:
            return error_response(e)
        return response(200, users)


def lambda_handler(event, context):
    return ListUsersHandler(default_store())(event, context)
