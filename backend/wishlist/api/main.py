from fastapi import APIRouter

from wishlist.api.routes import wishlists

api_router = APIRouter()
api_router.include_router(wishlists.router)
