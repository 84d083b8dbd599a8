import re
from typing import Optional


def somente_digitos(valor: Optional[str]) -> str:
    return re.sub(r"[^\d]", "", str(valor or ""))


def normalizar_telefone(telefone: Optional[str]) -> Optional[str]:
    """
    Remove a máscara do telefone (espaços, parênteses, hífen, '+').

    - Remove prefixo internacional "00" (ex: 0055...).
    - NÃO adiciona código do país nem o "9" de celular: o número é gravado
      exatamente como o cliente digitou, só que sem máscara.
    """
    if telefone is None:
        return None

    telefone_limpo = somente_digitos(telefone)
    if telefone_limpo.startswith("00"):
        telefone_limpo = telefone_limpo[2:]
    return telefone_limpo


def numero_whatsapp(telefone: Optional[str]) -> str:
    """
    Número no formato aceito pelo wa.me (somente dígitos, com país).
    Números BR sem código do país (DDD + número) recebem "55".
    """
    digitos = normalizar_telefone(telefone) or ""
    if digitos and not digitos.startswith("55") and len(digitos) in (10, 11):
        return "55" + digitos
    return digitos


def normalizar_cep(cep: Optional[str]) -> Optional[str]:
    """CEP com 8 dígitos, sem hífen. Valores fora do padrão são devolvidos sem máscara."""
    if cep is None:
        return None
    return somente_digitos(cep)
