# credito/application/dtos/ficha_dto.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from credito.domain.analise.entities import Analise
from credito.domain.analise.value_objects import StatusWorkflow
from credito.domain.cliente.entities import Cliente
from credito.domain.cliente.value_objects import TipoRestricao
from credito.domain.grupo.entities import CarteiraGrupo, DadosBI
from credito.domain.pedido.entities import Pedido

from .analise_dto import AnaliseDTO
from .restricao_dto import RestricaoDTO


class PedidoDTO(BaseModel):
    id: int
    numero: str
    valor: str
    workflow: str
    bloqueio: str | None
    data: str | None
    marca: str | None

    @classmethod
    def from_domain(cls, pedido: Pedido) -> PedidoDTO:
        return cls(
            id=pedido.id,
            numero=pedido.numero,
            valor=str(pedido.valor),
            workflow=pedido.workflow.value,
            bloqueio=pedido.bloqueio,
            data=pedido.data.isoformat() if pedido.data else None,
            marca=pedido.marca,
        )


class RestricoesDTO(BaseModel):
    quantidade: int
    qtd_pefin: int
    qtd_protesto: int
    qtd_acao_judicial: int
    qtd_cheque: int
    valor_total: str
    valor_pefin_protesto: str
    itens: list[RestricaoDTO]


class ClienteResumoDTO(BaseModel):
    id: int
    cnpj: str
    razao_social: str
    tipo_cliente: str
    simei: bool
    score_boa_vista: int | None
    status_receita: str | None
    sintegra: str | None
    cnae: str | None
    data_fundacao: str | None
    data_abertura_loja: str | None
    qtd_socios: int
    qtd_participacoes: int
    restricoes: RestricoesDTO

    @classmethod
    def from_domain(cls, cliente: Cliente) -> ClienteResumoDTO:
        return cls(
            id=cliente.id,
            cnpj=cliente.cnpj.formatado,
            razao_social=cliente.razao_social.valor,
            tipo_cliente=cliente.tipo_cliente.value,
            simei=cliente.simei,
            score_boa_vista=cliente.score_boa_vista,
            status_receita=cliente.status_receita,
            sintegra=cliente.sintegra,
            cnae=cliente.cnae,
            data_fundacao=cliente.data_fundacao.isoformat() if cliente.data_fundacao else None,
            data_abertura_loja=(
                cliente.data_abertura_loja.isoformat() if cliente.data_abertura_loja else None
            ),
            qtd_socios=len(cliente.socios),
            qtd_participacoes=len(cliente.participacoes),
            restricoes=RestricoesDTO(
                quantidade=cliente.total_restricoes,
                qtd_pefin=len(cliente.pefins),
                qtd_protesto=len(cliente.protestos),
                qtd_acao_judicial=len(cliente.acoes_judiciais),
                qtd_cheque=len(cliente.cheques),
                valor_total=str(cliente.total_valor_restricoes),
                valor_pefin_protesto=str(cliente.total_valor_pefin_protesto),
                itens=[
                    RestricaoDTO.from_domain(r)
                    for tipo in TipoRestricao
                    for r in cliente.restricoes_do_tipo(tipo)
                ],
            ),
        )


class DadosBIDTO(BaseModel):
    colecao: str
    credito: str
    score: int | None


class GrupoResumoDTO(BaseModel):
    id: int
    codigo: str
    nome: str
    grupo_real: bool
    limite_aprovado: str
    limite_disponivel: str
    total_pedidos: str
    total_pedidos_abertos: str
    qtd_clientes: int

    @classmethod
    def from_domain(cls, carteira: CarteiraGrupo) -> GrupoResumoDTO:
        grupo = carteira.grupo
        return cls(
            id=grupo.id,
            codigo=grupo.codigo,
            nome=grupo.nome,
            grupo_real=carteira.grupo_real,
            limite_aprovado=str(grupo.limite_aprovado),
            limite_disponivel=str(grupo.limite_disponivel),
            total_pedidos=str(carteira.total_pedidos()),
            total_pedidos_abertos=str(carteira.total_pedidos_abertos()),
            qtd_clientes=len(carteira.clientes),
        )


class FichaAnaliseDTO(BaseModel):
    analise: AnaliseDTO
    duracao_horas: int | None
    pedido: PedidoDTO
    cliente: ClienteResumoDTO
    grupo: GrupoResumoDTO
    dados_bi: list[DadosBIDTO]
    alertas: list[str]
    limite_sugerido: str
    requer_aprovacao_gestor: bool
    parecer_crm: str | None
    status_permitidos: list[str]

    @classmethod
    def from_domain(
        cls,
        analise: Analise,
        pedido: Pedido,
        cliente: Cliente,
        carteira: CarteiraGrupo,
        dados_bi: list[DadosBI],
        alertas: list[str],
        limite_sugerido: Decimal,
        requer_aprovacao_gestor: bool,
        parecer_crm: str | None,
        status_permitidos: frozenset[StatusWorkflow],
        referencia: datetime,
    ) -> FichaAnaliseDTO:
        return cls(
            analise=AnaliseDTO.from_domain(analise),
            duracao_horas=analise.duracao_horas(referencia),
            pedido=PedidoDTO.from_domain(pedido),
            cliente=ClienteResumoDTO.from_domain(cliente),
            grupo=GrupoResumoDTO.from_domain(carteira),
            dados_bi=[
                DadosBIDTO(colecao=d.colecao_formatada, credito=str(d.credito), score=d.score)
                for d in dados_bi
            ],
            alertas=alertas,
            limite_sugerido=str(limite_sugerido),
            requer_aprovacao_gestor=requer_aprovacao_gestor,
            parecer_crm=parecer_crm,
            status_permitidos=sorted(s.value for s in status_permitidos),
        )


class AlertasPedidoDTO(BaseModel):
    pedido_id: int
    alertas: list[str]


class LimiteSugeridoDTO(BaseModel):
    grupo_id: int
    limite_sugerido: str
