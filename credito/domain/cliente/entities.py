# credito/domain/cliente/entities.py
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from .value_objects import CNPJ, RazaoSocial, TipoCliente, TipoRestricao


def _valor_nao_negativo(valor: Decimal, registro: str) -> None:
    if valor < Decimal("0"):
        raise ValueError(f"{registro}: valor nao pode ser negativo")


@dataclass(frozen=True)
class Pefin:
    valor: Decimal
    data_ocorrencia: date | None = None
    origem: str | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        _valor_nao_negativo(self.valor, "Pefin")


@dataclass(frozen=True)
class Protesto:
    valor: Decimal
    data_protesto: date | None = None
    cartorio: str | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        _valor_nao_negativo(self.valor, "Protesto")


@dataclass(frozen=True)
class AcaoJudicial:
    valor: Decimal
    data_distribuicao: date | None = None
    tipo: str | None = None
    vara: str | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        _valor_nao_negativo(self.valor, "AcaoJudicial")


@dataclass(frozen=True)
class Cheque:
    valor: Decimal
    data_ocorrencia: date | None = None
    banco: str | None = None
    agencia: str | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        _valor_nao_negativo(self.valor, "Cheque")


Restricao = Pefin | Protesto | AcaoJudicial | Cheque

_CAMPO_POR_TIPO: dict[TipoRestricao, str] = {
    TipoRestricao.PEFIN: "pefins",
    TipoRestricao.PROTESTO: "protestos",
    TipoRestricao.ACAO_JUDICIAL: "acoes_judiciais",
    TipoRestricao.CHEQUE: "cheques",
}

_TIPO_POR_REGISTRO: dict[type, TipoRestricao] = {
    Pefin: TipoRestricao.PEFIN,
    Protesto: TipoRestricao.PROTESTO,
    AcaoJudicial: TipoRestricao.ACAO_JUDICIAL,
    Cheque: TipoRestricao.CHEQUE,
}


def tipo_da_restricao(registro: Restricao) -> TipoRestricao:
    return _TIPO_POR_REGISTRO[type(registro)]


@dataclass(frozen=True)
class Socio:
    nome: str
    cpf: str | None = None
    participacao: Decimal | None = None  # percentual


@dataclass(frozen=True)
class Participacao:
    """Participacao do cliente em outra empresa."""
    cnpj_participada: str
    razao_social: str | None = None
    participacao: Decimal | None = None


@dataclass(frozen=True)
class Cliente:
    """Snapshot hidratado do cliente: dados cadastrais, consultas e restricoes.

    Imutavel. Mudancas (consulta atualizada, reclassificacao para ANTECIPADO)
    produzem um novo valor via dataclasses.replace e sao persistidas pelo shell.
    """
    id: int
    grupo_economico_id: int
    cnpj: CNPJ
    razao_social: RazaoSocial
    tipo_cliente: TipoCliente = TipoCliente.BASE_PRAZO
    simei: bool = False
    score_boa_vista: int | None = None
    status_receita: str | None = None
    sintegra: str | None = None
    status_simples: str | None = None
    cnae: str | None = None
    data_fundacao: date | None = None
    data_abertura_loja: date | None = None
    pefins: tuple[Pefin, ...] = ()
    protestos: tuple[Protesto, ...] = ()
    acoes_judiciais: tuple[AcaoJudicial, ...] = ()
    cheques: tuple[Cheque, ...] = ()
    socios: tuple[Socio, ...] = ()
    participacoes: tuple[Participacao, ...] = ()

    @property
    def total_restricoes(self) -> int:
        """Quantidade de registros nas quatro categorias de restricao."""
        return (
            len(self.pefins)
            + len(self.protestos)
            + len(self.acoes_judiciais)
            + len(self.cheques)
        )

    @property
    def total_valor_pefin_protesto(self) -> Decimal:
        """Soma dos valores de pefin + protesto (acoes e cheques nao entram)."""
        return sum((p.valor for p in self.pefins), Decimal("0")) + sum(
            (p.valor for p in self.protestos), Decimal("0")
        )

    @property
    def total_valor_restricoes(self) -> Decimal:
        todos = (*self.pefins, *self.protestos, *self.acoes_judiciais, *self.cheques)
        return sum((r.valor for r in todos), Decimal("0"))

    @property
    def tem_dados_consulta(self) -> bool:
        return bool(
            self.status_receita and self.status_receita.strip()
            and self.sintegra and self.sintegra.strip()
        )

    def restricoes_do_tipo(self, tipo: TipoRestricao) -> tuple[Restricao, ...]:
        return getattr(self, _CAMPO_POR_TIPO[tipo])

    def com_restricao(self, registro: Restricao) -> Cliente:
        campo = _CAMPO_POR_TIPO[tipo_da_restricao(registro)]
        return replace(self, **{campo: (*getattr(self, campo), registro)})

    def sem_restricao(self, tipo: TipoRestricao, restricao_id: int) -> Cliente:
        """Remove pelo id. Id inexistente devolve o mesmo valor."""
        campo = _CAMPO_POR_TIPO[tipo]
        restantes = tuple(r for r in getattr(self, campo) if r.id != restricao_id)
        return replace(self, **{campo: restantes})


@dataclass(frozen=True)
class DadosConsulta:
    """Dados informados pelo analista durante o pipeline de cliente novo.
    Campos None nao alteram o cliente."""
    status_receita: str | None = None
    sintegra: str | None = None
    status_simples: str | None = None
    cnae: str | None = None
    data_abertura_loja: date | None = None

    def aplicar(self, cliente: Cliente) -> Cliente:
        alteracoes = {
            campo: valor
            for campo, valor in (
                ("status_receita", self.status_receita),
                ("sintegra", self.sintegra),
                ("status_simples", self.status_simples),
                ("cnae", self.cnae),
                ("data_abertura_loja", self.data_abertura_loja),
            )
            if valor is not None
        }
        return replace(cliente, **alteracoes) if alteracoes else cliente
