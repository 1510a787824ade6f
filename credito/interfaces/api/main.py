# credito/interfaces/api/main.py
from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from credito.domain.exceptions import (
    ConfiguracaoAusente,
    ConflitoConcorrencia,
    CreditoError,
    ReferenciaNaoEncontrada,
    TransicaoInvalida,
    ValidacaoFalhou,
)
from credito.infrastructure.log import log


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    from credito.infrastructure.duckdb_connection import get_connection
    from credito.infrastructure.repositories.duckdb_configuracao_repo import (
        DuckDBConfiguracaoRepo,
    )
    if DuckDBConfiguracaoRepo(get_connection()).instalar_padrao():
        log("Configuracao padrao instalada")
    yield


app = FastAPI(
    title="Motor de Credito API",
    debug=False,  # NUNCA True em producao
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None,
)

_STATUS_POR_ERRO: dict[type[CreditoError], int] = {
    ReferenciaNaoEncontrada: 404,
    TransicaoInvalida: 409,
    ConflitoConcorrencia: 409,
    ValidacaoFalhou: 422,
    ConfiguracaoAusente: 503,
}


@app.exception_handler(CreditoError)
async def erro_de_credito(request: Request, exc: CreditoError) -> JSONResponse:
    status = next(
        (codigo for tipo, codigo in _STATUS_POR_ERRO.items() if isinstance(exc, tipo)),
        400,
    )
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@app.middleware("http")
async def add_security_headers(request: Request, call_next: object) -> Response:
    response = await call_next(request)  # type: ignore[misc]
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response  # type: ignore[return-value]


app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

from credito.interfaces.api.routes.analise_routes import router as analise_router  # noqa: E402
from credito.interfaces.api.routes.cliente_novo_routes import router as cliente_novo_router  # noqa: E402
from credito.interfaces.api.routes.configuracao_routes import router as configuracao_router  # noqa: E402
from credito.interfaces.api.routes.grupo_routes import router as grupo_router  # noqa: E402
from credito.interfaces.api.routes.pedido_routes import router as pedido_router  # noqa: E402
from credito.interfaces.api.routes.restricao_routes import router as restricao_router  # noqa: E402

app.include_router(analise_router, prefix="/api")
app.include_router(cliente_novo_router, prefix="/api")
app.include_router(restricao_router, prefix="/api")
app.include_router(pedido_router, prefix="/api")
app.include_router(grupo_router, prefix="/api")
app.include_router(configuracao_router, prefix="/api")
