# credito/application/services/alerta_service.py
"""Avaliacao de alertas de risco do pedido. Funcao pura, zero IO.

ADR: Alertas e Limite sugerido sao dimensoes INDEPENDENTES.
Este modulo NUNCA deve importar o servico de scoring.
"""
from __future__ import annotations

from credito.domain.cliente.entities import Cliente
from credito.domain.configuracao.entities import Configuracao
from credito.domain.grupo.entities import CarteiraGrupo
from credito.domain.pedido.entities import Pedido

ALERTA_SIMEI = "SIMEI > LIMITE"
ALERTA_PEDIDO = "PEDIDO > LIMITE"
ALERTA_TOTAL = "TOTAL > LIMITE"
ALERTA_SCORE_BAIXO = "SCORE BAIXO"


def alerta_grupo_simeis(max_simeis: int) -> str:
    return f"GRUPO > {max_simeis} SIMEIS"


def alerta_restricoes(total: int) -> str:
    return f"RESTRIÇÕES ({total})"


def calcular_alertas(
    pedido: Pedido,
    cliente: Cliente,
    carteira: CarteiraGrupo,
    config: Configuracao,
) -> list[str]:
    """Funcao pura. Mesma entrada = mesma saida. Zero IO.

    Ordem fixa dos rotulos. TOTAL > LIMITE soma TODOS os pedidos do grupo,
    abertos ou nao (diferente do total usado na aprovacao do gestor).
    """
    alertas: list[str] = []
    limite_grupo = carteira.grupo.limite_aprovado

    if cliente.simei and pedido.valor > config.limite_simei:
        alertas.append(ALERTA_SIMEI)

    if len(carteira.simeis_com_pedido()) > config.max_simeis_por_grupo:
        alertas.append(alerta_grupo_simeis(config.max_simeis_por_grupo))

    if pedido.valor > limite_grupo:
        alertas.append(ALERTA_PEDIDO)

    if carteira.total_pedidos() > limite_grupo:
        alertas.append(ALERTA_TOTAL)

    if cliente.total_restricoes > 0:
        alertas.append(alerta_restricoes(cliente.total_restricoes))

    if config.score_baixo(cliente.score_boa_vista):
        alertas.append(ALERTA_SCORE_BAIXO)

    return alertas
