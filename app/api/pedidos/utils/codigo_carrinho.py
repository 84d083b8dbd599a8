import re
import secrets
import string

ALFABETO_CODIGO = string.ascii_uppercase + string.digits
TAMANHO_CODIGO = 6

_CODIGO_RE = re.compile(rf"^[A-Z0-9]{{{TAMANHO_CODIGO}}}$")


def gerar_codigo_carrinho() -> str:
    """Código curto do pedido: 6 caracteres sorteados de forma uniforme em A-Z0-9."""
    return "".join(secrets.choice(ALFABETO_CODIGO) for _ in range(TAMANHO_CODIGO))


def normalizar_codigo_carrinho(codigo: str) -> str:
    """Aceita "#abc123", " abc123 " etc. e devolve "ABC123"."""
    return (codigo or "").strip().lstrip("#").upper()


def codigo_valido(codigo: str) -> bool:
    return bool(_CODIGO_RE.match(codigo or ""))
