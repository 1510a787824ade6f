# credito/infrastructure/log.py
#
# Logger do motor de credito: uma linha por evento, com data e hora.
# Usado pelos shells (transicoes, gates, CAS do grupo) e pelo startup da API.
# O Pure Core nunca chama log().
from __future__ import annotations

import sys
from datetime import datetime


def log(message: str) -> None:
    """Escreve a linha em stdout e faz flush."""
    agora = datetime.now().isoformat(sep=" ", timespec="seconds")
    sys.stdout.write(f"[credito {agora}] {message}\n")
    sys.stdout.flush()
