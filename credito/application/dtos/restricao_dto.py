# credito/application/dtos/restricao_dto.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from credito.domain.cliente.entities import (
    AcaoJudicial,
    Cheque,
    Pefin,
    Protesto,
    Restricao,
    tipo_da_restricao,
)
from credito.domain.cliente.value_objects import TipoRestricao
from credito.domain.exceptions import ValidacaoFalhou


def _obrigatorio(valor: str | None, campo: str) -> str:
    if valor is None or not valor.strip():
        raise ValidacaoFalhou(f"{campo} é obrigatório")
    return valor.strip()


class RestricaoRequest(BaseModel):
    """Campos da aba Restricoes. Cada tipo usa os seus:
    PEFIN origem; PROTESTO cartorio; ACAO_JUDICIAL tipo e vara; CHEQUE banco e agencia."""

    valor: Decimal | None = Field(default=None, ge=0)
    data: date | None = None
    origem: str | None = None
    cartorio: str | None = None
    tipo: str | None = None
    vara: str | None = None
    banco: str | None = None
    agencia: str | None = None

    def registro(self, tipo_restricao: TipoRestricao) -> Restricao:
        if tipo_restricao == TipoRestricao.ACAO_JUDICIAL:
            # valor da acao e opcional
            return AcaoJudicial(
                valor=self.valor if self.valor is not None else Decimal("0"),
                data_distribuicao=self.data,
                tipo=_obrigatorio(self.tipo, "Tipo"),
                vara=self.vara,
            )
        if self.valor is None:
            raise ValidacaoFalhou("Valor é obrigatório")
        if tipo_restricao == TipoRestricao.PEFIN:
            return Pefin(self.valor, self.data, _obrigatorio(self.origem, "Origem"))
        if tipo_restricao == TipoRestricao.PROTESTO:
            return Protesto(self.valor, self.data, _obrigatorio(self.cartorio, "Cartório"))
        return Cheque(self.valor, self.data, _obrigatorio(self.banco, "Banco"), self.agencia)


class RestricaoDTO(BaseModel):
    id: int | None
    tipo: str
    valor: str
    data: str | None
    detalhe: str | None

    @classmethod
    def from_domain(cls, registro: Restricao) -> RestricaoDTO:
        if isinstance(registro, Pefin):
            data, detalhe = registro.data_ocorrencia, registro.origem
        elif isinstance(registro, Protesto):
            data, detalhe = registro.data_protesto, registro.cartorio
        elif isinstance(registro, AcaoJudicial):
            data = registro.data_distribuicao
            detalhe = " - ".join(p for p in (registro.tipo, registro.vara) if p) or None
        else:
            data = registro.data_ocorrencia
            detalhe = " ".join(p for p in (registro.banco, registro.agencia) if p) or None
        return cls(
            id=registro.id,
            tipo=tipo_da_restricao(registro).value,
            valor=str(registro.valor),
            data=data.isoformat() if data else None,
            detalhe=detalhe,
        )
