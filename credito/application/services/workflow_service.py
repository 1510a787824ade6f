# credito/application/services/workflow_service.py
"""Motor de transicoes da Analise.

`requer_aprovacao_gestor` e funcao pura. `WorkflowService` e o Imperative
Shell: carrega agregados, valida por completo, monta os novos valores
imutaveis e so entao persiste.

ADR: limites do grupo sao gravados com compare-and-swap sobre
GrupoEconomico.versao. Duas finalizacoes simultaneas no mesmo grupo nao se
sobrescrevem em silencio: a perdedora recarrega a carteira e tenta de novo.
A Analise encerrada e gravada antes do grupo, entao a carteira recarregada
ja ve como encerrados os pedidos finalizados em paralelo. Se o CAS esgota as
tentativas, a Analise anterior e regravada e o conflito sobe.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from credito.domain.analise.entities import Analise
from credito.domain.analise.repository import AnaliseRepository
from credito.domain.analise.transicoes import status_permitidos, transicao_valida
from credito.domain.analise.value_objects import (
    INICIO_ANALISE,
    PARECERES,
    Decisao,
    StatusWorkflow,
)
from credito.domain.cliente.entities import Cliente, DadosConsulta
from credito.domain.cliente.repository import ClienteRepository
from credito.domain.cliente.value_objects import TipoCliente
from credito.domain.configuracao.entities import Configuracao
from credito.domain.configuracao.repository import ConfiguracaoRepository
from credito.domain.exceptions import (
    ConflitoConcorrencia,
    TransicaoInvalida,
    ValidacaoFalhou,
)
from credito.domain.grupo.entities import CarteiraGrupo, GrupoEconomico
from credito.domain.grupo.repository import GrupoRepository
from credito.domain.pedido.entities import Pedido
from credito.domain.pedido.repository import PedidoRepository
from credito.domain.pedido.value_objects import TipoWorkflow
from credito.infrastructure.log import log

from .carregamento import CarregadorAgregados
from .cliente_novo_service import Gate, ResultadoEtapa, avancar_etapa, gates_da_etapa
from .parecer_service import gerar_parecer_crm
from .scoring_service import calcular_limite_sugerido, score_mais_recente

ANALISTA_SISTEMA = "SISTEMA"


def requer_aprovacao_gestor(
    pedido: Pedido,
    cliente: Cliente,
    carteira: CarteiraGrupo,
    config: Configuracao,
) -> bool:
    """Funcao pura. Qualquer condicao basta:
    valor do pedido > limite de valor, total ABERTO do grupo > limite de
    total, ou quantidade de restricoes >= limite de restricoes."""
    return (
        pedido.valor > config.valor_aprovacao_gestor
        or carteira.total_pedidos_abertos() > config.total_grupo_aprovacao_gestor
        or cliente.total_restricoes >= config.restricoes_aprovacao_gestor
    )


def _encerrar(analise: Analise, agora: datetime) -> Analise:
    if analise.data_fim is not None:
        return analise
    return replace(analise, data_fim=agora)


class WorkflowService(CarregadorAgregados):
    """Imperative Shell: orquestra IO (repos) e chama Pure Core (gates, limite, parecer)."""

    def __init__(
        self,
        analise_repo: AnaliseRepository,
        pedido_repo: PedidoRepository,
        cliente_repo: ClienteRepository,
        grupo_repo: GrupoRepository,
        configuracao_repo: ConfiguracaoRepository,
        relogio: Callable[[], datetime] = datetime.now,
        max_tentativas: int = 3,
    ) -> None:
        if max_tentativas < 1:
            raise ValueError("max_tentativas deve ser >= 1")
        super().__init__(analise_repo, pedido_repo, cliente_repo, grupo_repo, configuracao_repo)
        self._relogio = relogio
        self._max_tentativas = max_tentativas

    # ---------- consultas ----------

    def status_permitidos(self, analise_id: int) -> frozenset[StatusWorkflow]:
        analise = self._analise(analise_id)
        pedido = self._pedido(analise.pedido_id)
        return status_permitidos(analise.status_workflow, pedido.workflow)

    def requer_aprovacao_gestor(self, analise_id: int) -> bool:
        config = self._config()
        analise = self._analise(analise_id)
        pedido = self._pedido(analise.pedido_id)
        cliente = self._cliente(analise.cliente_id)
        carteira = self._carteira(analise.grupo_economico_id)
        return requer_aprovacao_gestor(pedido, cliente, carteira, config)

    # ---------- transicao ----------

    def transicionar(
        self,
        analise_id: int,
        novo_status: StatusWorkflow,
        analista: str | None = None,
    ) -> Analise:
        config = self._config()
        analise = self._analise(analise_id)
        pedido = self._pedido(analise.pedido_id)
        return self._transicionar(analise, pedido, novo_status, analista or ANALISTA_SISTEMA, config)

    def _transicionar(
        self,
        analise: Analise,
        pedido: Pedido,
        destino: StatusWorkflow,
        analista: str,
        config: Configuracao,
        cliente: Cliente | None = None,
    ) -> Analise:
        atual = analise.status_workflow
        if not transicao_valida(atual, destino, pedido.workflow):
            raise TransicaoInvalida(atual, destino, pedido.workflow)

        agora = self._relogio()
        nova = replace(analise, status_workflow=destino, analista_responsavel=analista)

        if destino in INICIO_ANALISE:
            if nova.data_inicio is None:
                nova = replace(nova, data_inicio=agora)

        elif destino in PARECERES:
            cliente = cliente or self._cliente(analise.cliente_id)
            carteira = self._carteira(analise.grupo_economico_id)
            if requer_aprovacao_gestor(pedido, cliente, carteira, config):
                nova = replace(nova, requer_aprovacao_gestor=True)

        elif destino == StatusWorkflow.SOLICITAR_CANCELAMENTO:
            nova = _encerrar(nova, agora)

        elif destino == StatusWorkflow.ENCAMINHADO_ANTECIPADO:
            nova = _encerrar(nova, agora)
            cliente = cliente or self._cliente(analise.cliente_id)
            self._cliente_repo.salvar(replace(cliente, tipo_cliente=TipoCliente.ANTECIPADO))
            log(f"Cliente {cliente.id} reclassificado como {TipoCliente.ANTECIPADO}")

        elif destino == StatusWorkflow.FINALIZADO:
            nova = _encerrar(nova, agora)
            if nova.limite_aprovado is not None and nova.limite_aprovado > 0:
                # analise encerrada e gravada antes do CAS do grupo
                self._analise_repo.salvar(nova)
                try:
                    self._gravar_limite_grupo(nova)
                except ConflitoConcorrencia:
                    self._analise_repo.salvar(analise)
                    log(f"Analise {analise.id}: finalizacao desfeita, limite do grupo nao gravado")
                    raise
                log(f"Analise {nova.id}: {atual} -> {destino} por {analista} ({pedido.workflow})")
                return nova

        self._analise_repo.salvar(nova)
        log(f"Analise {nova.id}: {atual} -> {destino} por {analista} ({pedido.workflow})")
        return nova

    def _gravar_limite_grupo(self, analise: Analise) -> GrupoEconomico:
        """Grava limite aprovado e disponivel no grupo via compare-and-swap.

        A cada tentativa a carteira e recarregada: o total aberto pode ter
        mudado com a escrita concorrente que causou o conflito.
        """
        aprovado = analise.limite_aprovado or Decimal("0")
        for tentativa in range(1, self._max_tentativas + 1):
            carteira = self._carteira(analise.grupo_economico_id)
            abertos = carteira.total_pedidos_abertos(encerrados=(analise.pedido_id,))
            disponivel = max(Decimal("0"), aprovado - abertos)
            try:
                grupo = self._grupo_repo.salvar(
                    carteira.com_limites(aprovado, disponivel),
                    versao_esperada=carteira.grupo.versao,
                )
            except ConflitoConcorrencia:
                log(
                    f"Conflito de versao no grupo {analise.grupo_economico_id} "
                    f"(tentativa {tentativa}/{self._max_tentativas})"
                )
                continue
            log(
                f"Grupo {grupo.id}: limite aprovado {aprovado}, disponivel {disponivel} "
                f"(versao {grupo.versao})"
            )
            return grupo
        raise ConflitoConcorrencia(
            f"Grupo {analise.grupo_economico_id}: limite nao gravado apos "
            f"{self._max_tentativas} tentativas"
        )

    # ---------- pipeline de cliente novo ----------

    def executar_gate(
        self,
        analise_id: int,
        gate: Gate,
        analista: str | None = None,
        dados: DadosConsulta | None = None,
    ) -> tuple[Analise, ResultadoEtapa]:
        """Roda a etapa corrente ate `gate`, inclusive. Os gates anteriores da
        etapa rodam antes e a primeira falha encerra."""
        return self._rodar_gates(analise_id, analista, dados, gate)

    def avancar_pipeline(
        self,
        analise_id: int,
        analista: str | None = None,
        dados: DadosConsulta | None = None,
    ) -> tuple[Analise, ResultadoEtapa]:
        """Roda em cascata todos os gates da etapa corrente."""
        return self._rodar_gates(analise_id, analista, dados, None)

    def _rodar_gates(
        self,
        analise_id: int,
        analista: str | None,
        dados: DadosConsulta | None,
        gate: Gate | None,
    ) -> tuple[Analise, ResultadoEtapa]:
        config = self._config()
        analise = self._analise(analise_id)
        pedido = self._pedido(analise.pedido_id)
        etapa = gates_da_etapa(analise.status_workflow)
        if pedido.workflow != TipoWorkflow.CLIENTE_NOVO or not etapa:
            raise TransicaoInvalida(analise.status_workflow, gate or "pipeline", pedido.workflow)
        if gate is not None:
            if gate not in etapa:
                raise TransicaoInvalida(analise.status_workflow, gate, pedido.workflow)
            # gates anteriores da etapa rodam antes, na ordem fixa
            etapa = etapa[: etapa.index(gate) + 1]

        cliente = self._cliente(analise.cliente_id)
        if dados is not None:
            atualizado = dados.aplicar(cliente)
            if atualizado != cliente:
                self._cliente_repo.salvar(atualizado)
                cliente = atualizado

        resultado = avancar_etapa(
            analise.status_workflow,
            cliente,
            config,
            self._relogio().date(),
            gates=etapa,
        )
        for r in resultado.resultados:
            log(f"Analise {analise.id}: gate {r.gate} {'aprovado' if r.aprovado else 'reprovado'}")

        if resultado.status_destino is None:
            return analise, resultado

        if resultado.motivo is not None:
            analise = replace(analise, motivo_desvio=resultado.motivo)
        nova = self._transicionar(
            analise,
            pedido,
            resultado.status_destino,
            analista or ANALISTA_SISTEMA,
            config,
            cliente=cliente,
        )
        return nova, resultado

    # ---------- conclusao e limite sugerido ----------

    def concluir_analise(
        self,
        analise_id: int,
        decisao: Decisao | None,
        justificativa: str | None,
        analista: str | None = None,
        limite_aprovado: Decimal | None = None,
    ) -> Analise:
        """Registra a decisao do analista e move para o parecer correspondente.
        Valida tudo antes de alterar qualquer dado."""
        if decisao is None:
            raise ValidacaoFalhou("Decisão é obrigatória")
        if decisao == Decisao.LIMITADO and (limite_aprovado is None or limite_aprovado <= 0):
            raise ValidacaoFalhou("Limite aprovado é obrigatório quando decisão é LIMITADO")
        if justificativa is None or not justificativa.strip():
            raise ValidacaoFalhou("Justificativa é obrigatória")

        config = self._config()
        analise = self._analise(analise_id)
        pedido = self._pedido(analise.pedido_id)
        destino = (
            StatusWorkflow.PARECER_REPROVADO
            if decisao == Decisao.REPROVADO
            else StatusWorkflow.PARECER_APROVADO
        )
        if not transicao_valida(analise.status_workflow, destino, pedido.workflow):
            raise TransicaoInvalida(analise.status_workflow, destino, pedido.workflow)

        cliente = self._cliente(analise.cliente_id)
        if analise.limite_sugerido is None:
            analise = self._com_limite_sugerido(analise, config)

        if decisao == Decisao.APROVADO:
            aprovado = analise.limite_sugerido or Decimal("0")
        elif decisao == Decisao.LIMITADO:
            aprovado = limite_aprovado  # type: ignore[assignment]
        else:
            aprovado = Decimal("0")

        analise = replace(
            analise,
            decisao=decisao,
            justificativa=justificativa.strip(),
            limite_aprovado=aprovado,
        )
        parecer = gerar_parecer_crm(analise, pedido, cliente, self._relogio().date())
        if parecer is not None:
            analise = replace(analise, parecer_crm=parecer)

        return self._transicionar(
            analise, pedido, destino, analista or ANALISTA_SISTEMA, config, cliente=cliente
        )

    def atualizar_limite_sugerido(self, analise_id: int) -> Analise:
        config = self._config()
        analise = self._com_limite_sugerido(self._analise(analise_id), config)
        self._analise_repo.salvar(analise)
        log(f"Analise {analise.id}: limite sugerido {analise.limite_sugerido}")
        return analise

    def _com_limite_sugerido(self, analise: Analise, config: Configuracao) -> Analise:
        carteira = self._carteira(analise.grupo_economico_id)
        dados_bi = self._grupo_repo.listar_dados_bi(analise.grupo_economico_id)
        return replace(
            analise,
            limite_sugerido=calcular_limite_sugerido(dados_bi, carteira, config),
            score_no_momento=score_mais_recente(dados_bi),
        )
