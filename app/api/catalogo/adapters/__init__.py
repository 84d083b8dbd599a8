from .catalogo_adapter import CatalogoAdapter

__all__ = [
    "CatalogoAdapter",
]
