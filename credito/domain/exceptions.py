# credito/domain/exceptions.py
from __future__ import annotations


class CreditoError(Exception):
    """Base de todos os erros do motor de credito."""


class ConfiguracaoAusente(CreditoError):
    """Nenhuma Configuracao ativa. Fatal: nenhuma operacao de negocio prossegue."""

    def __init__(self) -> None:
        super().__init__("Configuracao de credito nao encontrada")


class ReferenciaNaoEncontrada(CreditoError):
    """Entidade referenciada nao existe (analise, pedido, cliente, grupo)."""

    def __init__(self, entidade: str, identificador: object) -> None:
        self.entidade = entidade
        self.identificador = identificador
        super().__init__(f"{entidade} nao encontrado(a): {identificador}")


class TransicaoInvalida(CreditoError):
    """Transicao fora da tabela do workflow. Nada e alterado."""

    def __init__(self, atual: object, destino: object, workflow: object) -> None:
        self.atual = atual
        self.destino = destino
        self.workflow = workflow
        super().__init__(
            f"Transicao invalida de {atual} para {destino} no workflow {workflow}"
        )


class ValidacaoFalhou(CreditoError):
    """Dados de entrada rejeitados antes de qualquer mutacao. Recuperavel."""


class ConflitoConcorrencia(CreditoError):
    """OCC: a versao gravada do grupo mudou entre a leitura e a escrita."""
