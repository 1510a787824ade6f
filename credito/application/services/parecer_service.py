# credito/application/services/parecer_service.py
"""Parecer CRM em linha unica. Funcao pura, zero IO.

Formato (campos separados por " - "):
[DECISAO] dd/MM/yyyy - TIPO - MM/yyyy|N/D - SIM|NÃO - RESTRICOES - CREDITO - SCORE|N/D - K SÓCIOS - M PART
"""
from __future__ import annotations

from datetime import date
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from credito.domain.analise.entities import Analise
from credito.domain.cliente.entities import Cliente
from credito.domain.pedido.entities import Pedido
from credito.domain.pedido.value_objects import TipoWorkflow

_NAO_DISPONIVEL = "N/D"
_EM_ANALISE = "EM ANÁLISE"
_MIL = Decimal("1000")
_MILHAO = Decimal("1000000")


def extrair_tipo(razao_social: str | None) -> str:
    """Tipo societario por substring, em ordem de prioridade. Diferencia caixa:
    "Padaria Meireles" e OUTROS."""
    if razao_social is None:
        return _NAO_DISPONIVEL
    if "LTDA" in razao_social:
        return "LTDA"
    if "MEI" in razao_social:
        return "MEI"
    if "EIRELI" in razao_social:
        return "EIRELI"
    if "S/A" in razao_social or " SA" in razao_social:
        return "S/A"
    return "OUTROS"


def formatar_credito(valor: Decimal | None) -> str:
    """None/0 -> N/D; <1000 -> R$int; <1M -> R$nK; senao R$n.nM."""
    if valor is None or valor == 0:
        return _NAO_DISPONIVEL
    if valor < _MIL:
        return f"R${valor.to_integral_value(rounding=ROUND_DOWN)}"
    if valor < _MILHAO:
        milhares = (valor / _MIL).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"R${milhares}K"
    milhoes = (valor / _MILHAO).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"R${milhoes}M"


def gerar_parecer_crm(
    analise: Analise,
    pedido: Pedido,
    cliente: Cliente,
    referencia: date,
) -> str | None:
    """Funcao pura. None para workflow BASE_PRAZO."""
    if pedido.workflow != TipoWorkflow.CLIENTE_NOVO:
        return None

    decisao = analise.decisao.value if analise.decisao else _EM_ANALISE
    data = analise.data_fim.date() if analise.data_fim else referencia
    fundacao = cliente.data_fundacao.strftime("%m/%Y") if cliente.data_fundacao else _NAO_DISPONIVEL
    score = str(cliente.score_boa_vista) if cliente.score_boa_vista is not None else _NAO_DISPONIVEL

    campos = [
        f"[{decisao}] {data.strftime('%d/%m/%Y')}",
        extrair_tipo(cliente.razao_social.valor),
        fundacao,
        "SIM" if cliente.simei else "NÃO",
        str(cliente.total_restricoes),
        formatar_credito(analise.limite_sugerido),
        score,
        f"{len(cliente.socios)} SÓCIOS",
        f"{len(cliente.participacoes)} PART",
    ]
    return " - ".join(campos)
