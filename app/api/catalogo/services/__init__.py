from .service_catalogo import CatalogoService

__all__ = [
    "CatalogoService",
]
