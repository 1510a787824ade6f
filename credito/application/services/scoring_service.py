# credito/application/services/scoring_service.py
"""Calculo do limite sugerido de credito. Funcao pura, zero IO.

ADR: Limite e Alertas sao dimensoes INDEPENDENTES.
Este modulo NUNCA deve importar o servico de alertas.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from credito.domain.configuracao.entities import Configuracao
from credito.domain.grupo.entities import CarteiraGrupo, DadosBI

# Quantas colecoes recentes entram no calculo.
_COLECOES_CONSIDERADAS = 2


def calcular_limite_sugerido(
    dados_bi: Sequence[DadosBI],
    carteira: CarteiraGrupo,
    config: Configuracao,
) -> Decimal:
    """Funcao pura. Mesma entrada = mesma saida. Zero IO.

    1. Duas colecoes mais recentes (colecao desc). Sem snapshots -> 0.
    2. Base = maior credito entre elas.
    3. Score = o da colecao mais recente (pode ser None).
    4. limite = base * multiplicador da faixa, sem arredondar. Centavos
       ficam por conta da coluna DECIMAL(18,2) ao persistir.
    5. Teto SIMEI se o grupo tiver cliente SIMEI com pedido.
    """
    recentes = sorted(dados_bi, key=lambda d: d.colecao, reverse=True)[:_COLECOES_CONSIDERADAS]
    if not recentes:
        return Decimal("0")

    base = max(d.credito for d in recentes)
    score = recentes[0].score
    limite = base * config.multiplicador_por_score(score)

    if carteira.tem_simei_com_pedido() and limite > config.limite_simei:
        limite = config.limite_simei

    return max(limite, Decimal("0"))


def score_mais_recente(dados_bi: Sequence[DadosBI]) -> int | None:
    if not dados_bi:
        return None
    return max(dados_bi, key=lambda d: d.colecao).score
