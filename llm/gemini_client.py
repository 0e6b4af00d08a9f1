"""
Cliente do modelo generativo (Google Gemini) via LangChain.

O Gemini expõe um endpoint compatível com a API da OpenAI, então o cliente
usa o ChatOpenAI do LangChain apontado para esse endpoint. A instância é
criada explicitamente na inicialização da aplicação e injetada no pipeline;
não existe singleton de módulo.

Qualquer objeto com `async generate(prompt, request_id="-") -> str` pode
substituir este cliente (ex: dublês nos testes).

Uso:
    >>> from llm.gemini_client import GeminiClient
    >>> client = GeminiClient()
    >>> text = await client.generate("Diga olá em JSON")
"""

import os
import time
import logging
from typing import Optional, Protocol
from dotenv import load_dotenv
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI

from app.errors import ConfigurationError
from app.metrics.collectors import DEFAULT_MODEL, record_llm_request, record_llm_error
from utils.common import extract_and_record_token_usage, message_text

# Carrega variáveis de ambiente
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class LLMClient(Protocol):
    """Contrato mínimo do colaborador externo: um prompt, uma resposta de texto."""

    async def generate(self, prompt: str, request_id: str = "-") -> str:
        ...


class GeminiClient:
    """
    Wrapper do Gemini para chamadas single-turn sem streaming.

    Attributes:
        api_key (str): Chave de API do Gemini.
        model (str): Modelo usado (ex: gemini-2.5-flash).
        base_url (str): Endpoint compatível com OpenAI.
        timeout (Optional[float]): Timeout por chamada em segundos. None usa o
            padrão do cliente HTTP subjacente.

    Example:
        >>> client = GeminiClient(api_key="minha-chave")
        >>> client.get_model_info()["model"]
        'gemini-2.5-flash'
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Inicializa o cliente a partir de parâmetros ou variáveis de ambiente.

        Args:
            api_key (Optional[str]): Chave de API. Se None, lê GEMINI_API_KEY.
            model (Optional[str]): Modelo. Se None, lê GEMINI_MODEL.
            base_url (Optional[str]): Endpoint. Se None, lê GEMINI_BASE_URL.
            timeout (Optional[float]): Timeout. Se None, lê LLM_TIMEOUT_SECONDS
                (ausente = sem timeout explícito).

        Raises:
            ConfigurationError: Se GEMINI_API_KEY não estiver configurada ou
                LLM_TIMEOUT_SECONDS não for numérico.
        """
        # Prioridade: parâmetro > env var
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY não configurada. "
                "Configure a variável de ambiente ou passe como parâmetro."
            )

        self.model = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self.base_url = base_url or os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL)
        self.timeout = timeout if timeout is not None else self._timeout_from_env()

        # Instância do LLM criada sob demanda
        self._llm: Optional[ChatOpenAI] = None

    @staticmethod
    def _timeout_from_env() -> Optional[float]:
        value = os.getenv("LLM_TIMEOUT_SECONDS")
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(
                f"LLM_TIMEOUT_SECONDS deve ser numérico, recebido: {value!r}"
            )

    def get_llm(self) -> ChatOpenAI:
        """
        Retorna a instância do ChatOpenAI, criando-a na primeira chamada.

        max_retries=0: cada chunk tem exatamente uma tentativa.
        """
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self.model,
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
                temperature=0.0,
            )
        return self._llm

    async def generate(self, prompt: str, request_id: str = "-") -> str:
        """
        Envia um prompt single-turn e retorna o texto bruto da resposta.

        Args:
            prompt: Texto completo do prompt
            request_id: ID de correlação para logs

        Returns:
            str: Texto retornado pelo modelo (sem nenhum tratamento)

        Raises:
            openai.APIError: Falhas de rede, quota ou autenticação (propagadas)
        """
        llm = self.get_llm()
        start = time.time()

        try:
            response = await llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error(
                f"[LLM] [{request_id}] ❌ Falha na chamada ao modelo | "
                f"model={self.model} | "
                f"duration={time.time() - start:.2f}s | "
                f"error_type={type(e).__name__} | "
                f"error_msg={str(e)[:200]}"
            )
            record_llm_request(self.model, "error")
            record_llm_error(type(e).__name__)
            raise

        record_llm_request(self.model, "success")
        extract_and_record_token_usage(response, self.model, request_id)

        text = message_text(response)
        logger.debug(
            f"[LLM] [{request_id}] ✅ Modelo respondeu | "
            f"duration={time.time() - start:.2f}s | "
            f"prompt_chars={len(prompt)} | "
            f"response_chars={len(text)}"
        )
        return text

    def get_model_info(self) -> dict:
        """Configuração atual, sem expor a chave completa (para logs)."""
        return {
            "model": self.model,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "api_key_configured": bool(self.api_key),
            "api_key_prefix": self.api_key[:6] + "..." if self.api_key else None
        }
