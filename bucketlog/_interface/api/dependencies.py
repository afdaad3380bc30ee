from typing import Annotated

from fastapi import Depends, Request

from bucketlog.storage import ObjectStorageInterface


def get_storage(request: Request) -> ObjectStorageInterface:
    return request.app.state.storage


StorageDependency = Annotated[ObjectStorageInterface, Depends(get_storage)]
