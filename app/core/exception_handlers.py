"""
Exception handlers globais para capturar e logar erros da API.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import traceback
import json

from app.api.shared.exceptions import PedidoError
from app.utils.logger import logger


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler para erros de validação (422) do FastAPI/Pydantic.
    Registra os erros detalhados nos logs.
    """
    errors = exc.errors()
    error_details = []

    for error in errors:
        field = ".".join(str(loc) for loc in error.get("loc", []))
        error_details.append({
            "field": field,
            "type": error.get("type", "unknown"),
            "message": error.get("msg", "Erro de validação"),
            "input": error.get("input"),
        })

    logger.error(
        f"[VALIDATION ERROR 422] {request.method} {request.url.path} - "
        f"Erros de validação detectados:\n{json.dumps(error_details, indent=2, ensure_ascii=False, default=str)}"
    )

    query_params = dict(request.query_params)
    if query_params:
        logger.error(f"[VALIDATION ERROR 422] Query params: {json.dumps(query_params, ensure_ascii=False)}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": jsonable_encoder(error_details),
            "message": "Erro de validação nos dados fornecidos",
        }
    )


async def http_exception_handler(request: Request, exc):
    """
    Handler para HTTPExceptions.
    Registra erros HTTP nos logs com detalhes.
    """
    status_code = exc.status_code

    log_message = (
        f"[HTTP ERROR {status_code}] {request.method} {request.url.path} - "
        f"Detalhes: {exc.detail}"
    )
    if status_code >= 500:
        logger.error(log_message)
    elif status_code >= 400:
        logger.warning(log_message)

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": str(exc.detail),
            "status_code": status_code
        }
    )


async def pedido_exception_handler(request: Request, exc: PedidoError):
    """
    Handler para erros de domínio (catálogo, pedidos, carrinho).
    O status HTTP vem da própria exceção.
    """
    log_message = (
        f"[{exc.codigo_erro.upper()} {exc.status_code}] {request.method} {request.url.path} - "
        f"{exc.mensagem} {exc.detalhes or ''}"
    )
    if exc.status_code >= 500:
        logger.error(log_message)
    else:
        logger.warning(log_message)

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handler para exceções não tratadas.
    Registra erros críticos nos logs.
    """
    error_traceback = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.error(
        f"[UNHANDLED EXCEPTION] {request.method} {request.url.path} - "
        f"{type(exc).__name__}: {str(exc)}"
    )
    logger.error(f"[UNHANDLED EXCEPTION] Traceback completo:\n{error_traceback}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Erro interno do servidor",
            "error_type": type(exc).__name__,
            "message": str(exc)
        }
    )
