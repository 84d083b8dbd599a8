"""
Módulo de métricas Prometheus para monitoramento da aplicação.
"""
import re
from time import time
from typing import Callable

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Métricas de requisições HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total de requisições HTTP',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'Duração das requisições HTTP em segundos',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0]
)

http_errors_total = Counter(
    'http_errors_total',
    'Total de erros HTTP',
    ['method', 'endpoint', 'status_code']
)

# Métricas de logs
log_messages_total = Counter(
    'log_messages_total',
    'Total de mensagens de log',
    ['level']
)

# Métricas de pedidos
pedidos_finalizados_total = Counter(
    'pedidos_finalizados_total',
    'Total de pedidos gravados',
    ['operacao']
)

pedidos_falhas_persistencia_total = Counter(
    'pedidos_falhas_persistencia_total',
    'Total de falhas ao gravar pedidos',
    ['etapa']
)

reconstrucao_itens_descartados_total = Counter(
    'reconstrucao_itens_descartados_total',
    'Itens descartados ou degradados na reconstrução de carrinhos',
    ['tipo']
)

# Códigos de carrinho com cara de ID (6 caracteres A-Z0-9 com ao menos um dígito)
_CODIGO_CARRINHO_RE = re.compile(r'/(?=[A-Z0-9]*\d)[A-Z0-9]{6}(?=/|$)')
_HEX_RE = re.compile(r'/[0-9a-f]{32}(?=/|$)')


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware para coletar métricas Prometheus das requisições HTTP."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Ignora o endpoint de métricas para evitar loop
        if request.url.path.endswith("/metrics"):
            return await call_next(request)

        method = request.method
        normalized_endpoint = self._normalize_endpoint(request.url.path)

        start_time = time()
        try:
            response = await call_next(request)
        except Exception:
            http_requests_total.labels(method=method, endpoint=normalized_endpoint, status_code=500).inc()
            http_errors_total.labels(method=method, endpoint=normalized_endpoint, status_code=500).inc()
            raise

        status_code = response.status_code
        http_requests_total.labels(
            method=method,
            endpoint=normalized_endpoint,
            status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(
            method=method,
            endpoint=normalized_endpoint
        ).observe(time() - start_time)

        # Registra erros (4xx e 5xx)
        if status_code >= 400:
            http_errors_total.labels(
                method=method,
                endpoint=normalized_endpoint,
                status_code=status_code
            ).inc()

        return response

    def _normalize_endpoint(self, endpoint: str) -> str:
        """
        Normaliza endpoints removendo IDs para evitar alta cardinalidade.
        Ex: /api/carrinho/client/sessoes/<hex> -> /api/carrinho/client/sessoes/{sessao}
        """
        endpoint = _HEX_RE.sub('/{sessao}', endpoint)
        endpoint = _CODIGO_CARRINHO_RE.sub('/{codigo}', endpoint)
        return endpoint


def get_metrics():
    """Retorna as métricas no formato Prometheus."""
    return generate_latest()


def record_log(level: str):
    """Registra uma mensagem de log nas métricas."""
    log_messages_total.labels(level=level).inc()


__all__ = [
    "CONTENT_TYPE_LATEST",
    "PrometheusMiddleware",
    "get_metrics",
    "record_log",
    "pedidos_finalizados_total",
    "pedidos_falhas_persistencia_total",
    "reconstrucao_itens_descartados_total",
]
