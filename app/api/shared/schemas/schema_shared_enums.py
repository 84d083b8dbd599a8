from enum import Enum


class TipoCondimentoEnum(str, Enum):
    BORDAS = "Bordas"  # escolha única (ex.: tipo de borda)
    ADICIONAIS = "Adicionais"  # escolha livre


class AprovacaoEnum(str, Enum):
    NAO_DEFINIDO = ""
    APROVADO = "sim"
    REJEITADO = "não"


class TipoPagamentoEnum(str, Enum):
    CREDITO = "Cartão de Crédito"
    DEBITO = "Cartão de Débito"
    DINHEIRO = "Dinheiro"
    PIX = "PIX"
