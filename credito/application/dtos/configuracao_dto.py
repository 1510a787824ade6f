# credito/application/dtos/configuracao_dto.py
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from credito.domain.configuracao.entities import Configuracao


class ConfiguracaoDTO(BaseModel):
    limite_simei: Decimal = Field(ge=0)
    max_simeis_por_grupo: int = Field(ge=0)
    score_baixo_threshold: int = Field(ge=0)
    score_alto_multiplicador: Decimal = Field(gt=0, decimal_places=2)
    score_medio_multiplicador: Decimal = Field(gt=0, decimal_places=2)
    score_normal_multiplicador: Decimal = Field(gt=0, decimal_places=2)
    score_baixo_multiplicador: Decimal = Field(gt=0, decimal_places=2)
    valor_aprovacao_gestor: Decimal = Field(ge=0)
    total_grupo_aprovacao_gestor: Decimal = Field(ge=0)
    restricoes_aprovacao_gestor: int = Field(ge=0)
    cnaes_permitidos: list[str] = []
    protesto_threshold_antecipado: Decimal = Field(ge=0)
    restricao_threshold_antecipado: Decimal = Field(ge=0)
    meses_fundacao_threshold: int = Field(ge=0)
    meses_loja_threshold: int = Field(ge=0)

    @classmethod
    def from_domain(cls, config: Configuracao) -> ConfiguracaoDTO:
        return cls(
            limite_simei=config.limite_simei,
            max_simeis_por_grupo=config.max_simeis_por_grupo,
            score_baixo_threshold=config.score_baixo_threshold,
            score_alto_multiplicador=config.score_alto_multiplicador,
            score_medio_multiplicador=config.score_medio_multiplicador,
            score_normal_multiplicador=config.score_normal_multiplicador,
            score_baixo_multiplicador=config.score_baixo_multiplicador,
            valor_aprovacao_gestor=config.valor_aprovacao_gestor,
            total_grupo_aprovacao_gestor=config.total_grupo_aprovacao_gestor,
            restricoes_aprovacao_gestor=config.restricoes_aprovacao_gestor,
            cnaes_permitidos=list(config.cnaes_permitidos),
            protesto_threshold_antecipado=config.protesto_threshold_antecipado,
            restricao_threshold_antecipado=config.restricao_threshold_antecipado,
            meses_fundacao_threshold=config.meses_fundacao_threshold,
            meses_loja_threshold=config.meses_loja_threshold,
        )

    def to_domain(self) -> Configuracao:
        dados = self.model_dump()
        dados["cnaes_permitidos"] = tuple(self.cnaes_permitidos)
        return Configuracao(**dados)
