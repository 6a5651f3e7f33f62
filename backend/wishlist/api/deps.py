"""
API Dependencies

The application service is built by ``create_app`` and stored on
``app.state``; routes receive it through these dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from wishlist.application.services import WishlistApplicationService


def get_wishlist_service(request: Request) -> WishlistApplicationService:
    return request.app.state.wishlist_service


WishlistServiceDep = Annotated[
    WishlistApplicationService, Depends(get_wishlist_service)
]
