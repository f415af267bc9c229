from fastapi import Request

from crud_gateway.db.storage import Storage


def get_storage(request: Request) -> Storage:
    # Returns the storage collaborator installed on the app (see main.create_app)
    return request.app.state.storage
