from .repo_catalogo import CatalogoRepository

__all__ = [
    "CatalogoRepository",
]
