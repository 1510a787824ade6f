# credito/infrastructure/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    duckdb_path: str
    debug: bool
    cas_tentativas: int  # tentativas de gravar limites do grupo antes de desistir


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        duckdb_path=os.environ.get("DUCKDB_PATH", ":memory:"),
        debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        cas_tentativas=int(os.environ.get("CREDITO_CAS_TENTATIVAS", "3")),
    )
