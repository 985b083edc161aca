"""API routers for the recipeclub application."""

from recipeclub.routers.grocery import router as grocery_router

__all__ = [
    "grocery_router",
]
