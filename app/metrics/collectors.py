"""
Coletores de Métricas Prometheus para o serviço de análise de comentários.

Métricas organizadas por categoria, seguindo as convenções de nomenclatura
do Prometheus:
- Modelo (Gemini): requisições, erros, tokens, custo estimado
- Pipeline: falhas de parse por etapa, comentários e chunks por requisição, duração
- API: erros retornados ao cliente

As métricas ficam no registry padrão do prometheus_client. Quando METRICS_PORT
está definido, app.main expõe esse registry com start_http_server.

Uso:
    from app.metrics.collectors import record_llm_request, record_chunk_parse_failure

    record_llm_request(model="gemini-2.5-flash", status="success")
    record_chunk_parse_failure()
"""

from prometheus_client import Counter, Histogram
from typing import Dict

DEFAULT_MODEL = "gemini-2.5-flash"

# =============================================================================
# MÉTRICAS DO MODELO EXTERNO
# =============================================================================

llm_requests_total = Counter(
    'llm_requests_total',
    'Total de chamadas feitas ao modelo generativo',
    ['model', 'status']  # status: success, error
)

llm_errors_total = Counter(
    'llm_errors_total',
    'Total de erros na chamada ao modelo (rede, quota, autenticação)',
    ['error_type']  # APITimeoutError, RateLimitError, AuthenticationError...
)

llm_tokens_total = Counter(
    'llm_tokens_total',
    'Contagem total de tokens processados pelo modelo',
    ['type']  # prompt, completion, total
)

llm_estimated_cost_usd = Counter(
    'llm_estimated_cost_usd',
    'Custo total estimado em USD baseado no uso de tokens',
    ['model']
)

# =============================================================================
# MÉTRICAS DO PIPELINE
# =============================================================================

chunk_parse_failures_total = Counter(
    'chunk_parse_failures_total',
    'Chunks cuja resposta não era JSON válido (substituídos pelo registro zerado)'
)

synthesis_parse_failures_total = Counter(
    'synthesis_parse_failures_total',
    'Sínteses premium cuja resposta não era JSON válido (requisição abortada)'
)

comments_per_request = Histogram(
    'comments_per_request',
    'Distribuição da quantidade de comentários recebidos por requisição',
    buckets=[10, 50, 100, 250, 500, 1000, 2500, 5000, float("inf")]
)

chunks_per_request = Histogram(
    'chunks_per_request',
    'Distribuição da quantidade de chunks despachados por requisição',
    buckets=[1, 2, 3, 5, 10, 25, 50, float("inf")]
)

analysis_duration_seconds = Histogram(
    'analysis_duration_seconds',
    'Distribuição da duração do pipeline completo (chunks + síntese)',
    buckets=[1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0, float("inf")]
)

# =============================================================================
# MÉTRICAS DA API
# =============================================================================

api_errors_total = Counter(
    'api_errors_total',
    'Total de erros retornados pela API (400, 422, 500)',
    ['error_type', 'status_code']
)

# =============================================================================
# CÁLCULO DE CUSTOS
# =============================================================================

# Preços por 1M de tokens (USD)
GEMINI_PRICING: Dict[str, Dict[str, float]] = {
    "gemini-2.5-flash": {"input": 0.30, "output": 2.50},
    "gemini-2.5-pro": {"input": 1.25, "output": 10.00},
    "gemini-2.0-flash": {"input": 0.10, "output": 0.40},
}


def calculate_llm_cost(
    model: str,
    prompt_tokens: int,
    completion_tokens: int
    ) -> float:
    """
    Calcula o custo estimado de uma chamada ao Gemini.

    Modelos desconhecidos usam a tabela do gemini-2.5-flash.

    Args:
        model: Nome do modelo (ex: "gemini-2.5-flash")
        prompt_tokens: Tokens de entrada
        completion_tokens: Tokens de saída

    Returns:
        float: Custo estimado em USD
    """
    model_pricing = GEMINI_PRICING.get(model, GEMINI_PRICING[DEFAULT_MODEL])

    input_cost = (prompt_tokens / 1_000_000) * model_pricing["input"]
    output_cost = (completion_tokens / 1_000_000) * model_pricing["output"]

    return input_cost + output_cost


# =============================================================================
# FUNÇÕES DE CONVENIÊNCIA PARA INSTRUMENTAÇÃO
# =============================================================================

def record_llm_request(model: str, status: str) -> None:
    """Registra uma chamada ao modelo."""
    llm_requests_total.labels(model=model, status=status).inc()

def record_llm_error(error_type: str) -> None:
    """Registra um erro na chamada ao modelo."""
    llm_errors_total.labels(error_type=error_type).inc()

def record_llm_tokens(
    model: str,
    prompt_tokens: int,
    completion_tokens: int,
    total_tokens: int
) -> None:
    """Registra tokens consumidos e o custo estimado."""
    llm_tokens_total.labels(type="prompt").inc(prompt_tokens)
    llm_tokens_total.labels(type="completion").inc(completion_tokens)
    llm_tokens_total.labels(type="total").inc(total_tokens)

    cost = calculate_llm_cost(model, prompt_tokens, completion_tokens)
    llm_estimated_cost_usd.labels(model=model).inc(cost)

def record_chunk_parse_failure() -> None:
    chunk_parse_failures_total.inc()

def record_synthesis_parse_failure() -> None:
    synthesis_parse_failures_total.inc()

def record_request_shape(comment_count: int, chunk_count: int) -> None:
    """Registra o volume de uma requisição (comentários e chunks)."""
    comments_per_request.observe(comment_count)
    chunks_per_request.observe(chunk_count)

def record_analysis_duration(duration: float) -> None:
    analysis_duration_seconds.observe(duration)

def record_api_error(error_type: str, status_code: int) -> None:
    """Registra erro retornado pela API (400, 422, 500)."""
    api_errors_total.labels(error_type=error_type, status_code=str(status_code)).inc()
