# credito/domain/configuracao/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

_THRESHOLDS = (
    "limite_simei",
    "max_simeis_por_grupo",
    "score_baixo_threshold",
    "valor_aprovacao_gestor",
    "total_grupo_aprovacao_gestor",
    "restricoes_aprovacao_gestor",
    "protesto_threshold_antecipado",
    "restricao_threshold_antecipado",
    "meses_fundacao_threshold",
    "meses_loja_threshold",
)

_MULTIPLICADORES = (
    "score_alto_multiplicador",
    "score_medio_multiplicador",
    "score_normal_multiplicador",
    "score_baixo_multiplicador",
)

SCORE_ALTO = 800
SCORE_MEDIO = 600
SCORE_NORMAL = 400


@dataclass(frozen=True)
class Configuracao:
    """Parametros de negocio. Exatamente um valor ativo por vez (singleton no repo).

    Invariantes verificadas na construcao: thresholds >= 0, multiplicadores > 0
    com no maximo 2 casas decimais.
    """

    limite_simei: Decimal = Decimal("35000")
    max_simeis_por_grupo: int = 2
    score_baixo_threshold: int = 300
    score_alto_multiplicador: Decimal = Decimal("1.5")
    score_medio_multiplicador: Decimal = Decimal("1.2")
    score_normal_multiplicador: Decimal = Decimal("1.0")
    score_baixo_multiplicador: Decimal = Decimal("0.7")
    valor_aprovacao_gestor: Decimal = Decimal("100000")
    total_grupo_aprovacao_gestor: Decimal = Decimal("200000")
    restricoes_aprovacao_gestor: int = 5
    cnaes_permitidos: tuple[str, ...] = field(default=())
    protesto_threshold_antecipado: Decimal = Decimal("1000")
    restricao_threshold_antecipado: Decimal = Decimal("1000")
    meses_fundacao_threshold: int = 12
    meses_loja_threshold: int = 10

    def __post_init__(self) -> None:
        for nome in _THRESHOLDS:
            if getattr(self, nome) < 0:
                raise ValueError(f"{nome} nao pode ser negativo")
        for nome in _MULTIPLICADORES:
            valor: Decimal = getattr(self, nome)
            if valor <= 0:
                raise ValueError(f"{nome} deve ser positivo")
            if valor.as_tuple().exponent < -2:  # type: ignore[operator]
                raise ValueError(f"{nome} aceita no maximo 2 casas decimais")
        normalizados = tuple(c.strip() for c in self.cnaes_permitidos if c.strip())
        object.__setattr__(self, "cnaes_permitidos", normalizados)

    def multiplicador_por_score(self, score: int | None) -> Decimal:
        """Faixas com limite inferior inclusivo. Sem score = faixa normal."""
        if score is None:
            return self.score_normal_multiplicador
        if score >= SCORE_ALTO:
            return self.score_alto_multiplicador
        if score >= SCORE_MEDIO:
            return self.score_medio_multiplicador
        if score >= SCORE_NORMAL:
            return self.score_normal_multiplicador
        return self.score_baixo_multiplicador

    def score_baixo(self, score: int | None) -> bool:
        return score is not None and score < self.score_baixo_threshold

    def cnae_permitido(self, cnae: str | None) -> bool:
        """Lista vazia libera qualquer CNAE. Com lista, CNAE ausente e rejeitado."""
        if not self.cnaes_permitidos:
            return True
        if cnae is None or not cnae.strip():
            return False
        return cnae.strip() in self.cnaes_permitidos
