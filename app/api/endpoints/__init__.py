from .eightk import router as eightk_router

__all__ = [
    "eightk_router",
]
