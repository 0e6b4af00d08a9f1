"""
Configuração da aplicação via variáveis de ambiente.

As variáveis são carregadas do arquivo .env (se existir) com python-dotenv
e lidas com os.getenv. A credencial do modelo (GEMINI_API_KEY) é validada
pelo próprio cliente em llm.gemini_client, não aqui.

Uso:
    >>> from app.config.settings import load_settings
    >>> settings = load_settings()
    >>> settings.cors_allow_origins
    ['*']
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

# Carrega variáveis de ambiente
load_dotenv()


@dataclass(frozen=True)
class Settings:
    """
    Configurações operacionais do serviço (não incluem a credencial do modelo).

    Attributes:
        log_level (str): Nível de log do console.
        log_dir (str): Diretório dos arquivos de log rotativos.
        cors_allow_origins (List[str]): Origens liberadas no CORS.
        metrics_port (Optional[int]): Porta do servidor Prometheus (None = desligado).
        host (str): Host do entrypoint de desenvolvimento.
        port (int): Porta do entrypoint de desenvolvimento.
    """
    log_level: str = "INFO"
    log_dir: str = "logs"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    metrics_port: Optional[int] = None
    host: str = "0.0.0.0"
    port: int = 3000


def _parse_origins(value: str) -> List[str]:
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins or ["*"]


def _parse_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} deve ser um inteiro, recebido: {value!r}")


def load_settings() -> Settings:
    """
    Monta as configurações a partir do ambiente.

    Returns:
        Settings: Configurações com defaults aplicados.

    Raises:
        ValueError: Se METRICS_PORT ou PORT não forem inteiros.
    """
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        cors_allow_origins=_parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
        metrics_port=_parse_optional_int("METRICS_PORT"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_parse_optional_int("PORT") or 3000,
    )
