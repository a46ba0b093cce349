from bepshapati.errors import InvalidCredentials, MissingCredentials
from bepshapati.store import default_store
from bepshapati.users.passwords import dummy_hash, verify_password
from bepshapati.utils import error_response, parse_body, response


def public_user(item):
    return {
        "username": item.get("user_id"),
        "name": item.get("name"),
        "role": item.get("role"),
    }


class LoginHandler:
    def __init__(self, store):
        self.store = store

    def login(self, username, password):
        if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
            raise MissingCredentials()
        user = self.store.get_user(username)
        # unknown users still pay for a hash check, same answer as a wrong password
        hashed = user.get("password_hash") if user else dummy_hash()
        if not verify_password(password, hashed) or not user:
            raise InvalidCredentials()
        return {"message": "Login successful", "user": public_user(user)}

    def __call__(self, event, context):
        # body carries the password, keep it out of the logs
        print("Login request")
        try:
            body = parse_body(event)
            result = self.login(body.get("username"), body.get("password"))
        except Exception as e:
            return error_response(e)
        return response(200, result)


def lambda_handler(event, context):
    return LoginHandler(default_store())(event, context)
