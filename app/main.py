"""
API principal do microserviço de análise de comentários.

Recebe lotes de comentários de usuários, delega a análise a um modelo
generativo externo (Gemini) em duas etapas e retorna um relatório
estruturado de sentimento e insights.

Endpoints:
    POST /analyze: Relatório premium de sentimento/insights de um lote de comentários

Características:
    - Chunks de 100 comentários analisados em paralelo
    - Síntese premium com percentuais calculados localmente
    - Cliente do modelo criado no startup e injetado via dependência
    - Logs estruturados com X-Request-ID
    - Métricas Prometheus (opcionalmente expostas em METRICS_PORT)
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import start_http_server

from app.config.logging_config import setup_logging, get_logger
from app.config.settings import load_settings
from app.errors import ConfigurationError
from app.metrics.collectors import record_api_error
from app.models.schemas_analyze import ErrorResponse
from app.routers import analyze
from llm.gemini_client import GeminiClient


# ============================================================================
# CONFIGURAÇÃO
# ============================================================================

settings = load_settings()

# Inicializa logging imediatamente (importante para testes)
setup_logging(log_level=settings.log_level, log_dir=settings.log_dir, console_output=True)
logger = get_logger(__name__)


# ============================================================================
# LIFESPAN EVENTS (startup/shutdown)
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ciclo de vida da aplicação.

    No startup cria o cliente do modelo. Sem GEMINI_API_KEY a inicialização
    falha com ConfigurationError e o servidor encerra antes de aceitar
    conexões. Um cliente já presente em app.state (ex: testes) é reaproveitado.
    """
    logger.info("🚀 Iniciando microserviço de análise de comentários...")

    if getattr(app.state, "llm_client", None) is None:
        try:
            app.state.llm_client = GeminiClient()
        except ConfigurationError as e:
            logger.critical(f"❌ Configuração inválida, encerrando: {e}")
            raise
        logger.info(f"🤖 Cliente do modelo configurado | {app.state.llm_client.get_model_info()}")

    if settings.metrics_port:
        start_http_server(settings.metrics_port)
        logger.info(f"📈 Métricas Prometheus em :{settings.metrics_port}/metrics")

    logger.info("✅ Pronto para receber requisições")

    yield

    logger.info("🛑 Encerrando microserviço...")


# ============================================================================
# INICIALIZAÇÃO DA APLICAÇÃO
# ============================================================================

# Único endpoint público: docs e OpenAPI desabilitados
app = FastAPI(
    title="Comment Insights API",
    description=(
        "Análise de sentimento e insights de comentários de audiência "
        "em duas etapas (chunks + síntese premium) usando Gemini"
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# MIDDLEWARE PARA REQUEST_ID
# ============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """
    Adiciona um X-Request-ID a cada requisição para correlação de logs.

    Se o cliente já enviar o header, ele é preservado; caso contrário,
    um novo UUID4 é gerado.
    """
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
    ) -> JSONResponse:
    """
    Corpo inválido (JSON malformado ou `comments` com tipo errado) → 422.
    """
    request_id = getattr(request.state, "request_id", "-")

    errors = [
        {
            "loc": list(error.get("loc", [])),
            "msg": str(error.get("msg", "")),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]

    logger.warning(f"[{request_id}] Validation error | errors={errors}")
    record_api_error("validation_error", status.HTTP_422_UNPROCESSABLE_ENTITY)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(error="Invalid request body", details=errors).model_dump(),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
    ) -> JSONResponse:
    """
    Qualquer exceção não tratada → 500 com a mensagem do erro.

    Esta resposta é montada fora do middleware de request_id, então o
    header X-Request-ID é definido aqui.
    """
    request_id = getattr(request.state, "request_id", None) or request.headers.get(
        "X-Request-ID", str(uuid.uuid4())
    )

    logger.error(
        f"[{request_id}] Unhandled exception | "
        f"type={type(exc).__name__} | "
        f"error={str(exc)[:200]}"
    )
    record_api_error(type(exc).__name__, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True),
        headers={"X-Request-ID": request_id},
    )


# ============================================================================
# ROTAS
# ============================================================================

app.include_router(analyze.router)


# ============================================================================
# ENTRYPOINT (para desenvolvimento)
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    # Para produção, use: uvicorn app.main:app --host 0.0.0.0 --port 3000
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
    )
