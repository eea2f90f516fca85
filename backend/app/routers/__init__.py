from . import health, products, questions

__all__ = [
    "health",
    "products",
    "questions",
]
