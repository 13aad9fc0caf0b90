from fastapi import APIRouter

from docnum.api.v1.endpoints import documents, health, numbers

api_router = APIRouter()

# Routes techniques
api_router.include_router(health.router, tags=["health"])

# Routes métier
api_router.include_router(numbers.router, tags=["numbers"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
