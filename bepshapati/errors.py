class ApiError(Exception):
    """Error that terminates a request with a known HTTP status."""

    status = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidBody(ApiError):
    status = 400
    default_message = "Invalid JSON body"


class InvalidIdentifier(ApiError):
    status = 400
    default_message = "Invalid product ID format"


class MissingRatingOrComment(ApiError):
    status = 400
    default_message = "Rating or comment is required for product updates"


class InvalidUpdateField(ApiError):
    status = 400
    default_message = "Invalid update field"


class InvalidProduct(ApiError):
    status = 400
    default_message = "Missing required fields: name and imageUrls"


class MissingCredentials(ApiError):
    status = 400
    default_message = "username and password required"


class InvalidCredentials(ApiError):
    status = 401
    default_message = "Invalid credentials"


class NotFound(ApiError):
    status = 404
    default_message = "Product not found"


class DuplicateProduct(ApiError):
    status = 409
    default_message = "Product with this ID already exists"


class StorageFailure(ApiError):
    status = 500
    default_message = "Storage operation failed"
