from fastapi import APIRouter
from src.api.v1.flashcards import router as flashcards_router
from src.api.v1.tags import router as tags_router


def build_api_router(prefix: str = "/api") -> APIRouter:
    """Main API router with every resource router mounted under prefix"""
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(flashcards_router)
    api_router.include_router(tags_router)
    return api_router
