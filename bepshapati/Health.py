from bepshapati.utils import response


def lambda_handler(event, context):
    return response(200, {"message": "Bepshapati API is running!"})
