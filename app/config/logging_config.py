"""
Configuração centralizada de logging para o serviço de análise de comentários.

Três arquivos rotativos + console:
- debug.log: tudo (DEBUG+), inclusive respostas brutas do modelo
- info.log: apenas marcos do pipeline (INFO)
- error.log: avisos e erros (WARNING+), com arquivo:linha

Uso:
    >>> from app.config.logging_config import setup_logging, get_logger
    >>> setup_logging(log_level="INFO")
    >>> logger = get_logger(__name__)
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ERROR_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LevelFilter(logging.Filter):
    """Deixa passar apenas registros de um nível exato."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == self.level


def _rotating_handler(
    path: Path,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int,
    only_level: Optional[int] = None,
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    if only_level is not None:
        handler.addFilter(LevelFilter(only_level))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_dir: str = "logs",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    console_output: bool = True
) -> None:
    """
    Configura o logger raiz com os handlers de arquivo e, opcionalmente, console.

    Pode ser chamada mais de uma vez: os handlers anteriores são removidos.

    Args:
        log_level (str): Nível do console (os arquivos têm níveis fixos).
        log_dir (str): Diretório dos arquivos de log (criado se não existir).
        max_bytes (int): Tamanho máximo de cada arquivo antes da rotação.
        backup_count (int): Quantidade de arquivos rotacionados mantidos.
        console_output (bool): Se True, adiciona um StreamHandler.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    log_format = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    error_format = logging.Formatter(fmt=ERROR_FORMAT, datefmt=DATE_FORMAT)

    # Raiz em DEBUG: a filtragem fica a cargo de cada handler
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(_rotating_handler(
        log_path / "debug.log", logging.DEBUG, log_format, max_bytes, backup_count
    ))
    root_logger.addHandler(_rotating_handler(
        log_path / "info.log", logging.INFO, log_format, max_bytes, backup_count,
        only_level=logging.INFO,
    ))
    root_logger.addHandler(_rotating_handler(
        log_path / "error.log", logging.WARNING, error_format, max_bytes, backup_count
    ))

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        console_handler.setFormatter(log_format)
        root_logger.addHandler(console_handler)

    # Bibliotecas HTTP são verbosas em DEBUG
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configurado | console_level={log_level.upper()} | log_dir={log_path}"
    )


def get_logger(name: str) -> logging.Logger:
    """Retorna o logger do módulo (use __name__)."""
    return logging.getLogger(name)
