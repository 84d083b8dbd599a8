from datetime import datetime
from zoneinfo import ZoneInfo

TZ_SP = ZoneInfo('America/Sao_Paulo')


def now_trimmed():
    """Retorna datetime atual em timezone de São Paulo, sem microsegundos"""
    return datetime.now(TZ_SP).replace(microsecond=0)


def formatar_data_br(valor: datetime | None) -> str:
    """Data no formato dd/mm/aaaa (horário de São Paulo quando o valor tem timezone)."""
    if valor is None:
        return ""
    if valor.tzinfo is not None:
        valor = valor.astimezone(TZ_SP)
    return valor.strftime("%d/%m/%Y")
