"""
Exceções de domínio do microserviço de análise de comentários.

Hierarquia:
- ConfigurationError: credencial obrigatória ausente na inicialização (fatal)
- ModelOutputParseError: resposta do modelo não é um objeto JSON válido
- SynthesisParseError: falha de parse na etapa premium (fatal para a requisição)

Falhas de parse em chunks usam ModelOutputParseError e são recuperadas
localmente pelo Chunk Analyzer. Erros de comunicação com o modelo
(openai.APIError e afins) não são encapsulados: propagam como estão.
"""


class ConfigurationError(ValueError):
    """Configuração obrigatória ausente ou inválida (ex: GEMINI_API_KEY)."""


class ModelOutputParseError(ValueError):
    """
    A resposta do modelo não pôde ser interpretada como objeto JSON.

    Attributes:
        raw_output (str): Texto bruto retornado pelo modelo (para diagnóstico).
    """

    def __init__(self, message: str, raw_output: str = ""):
        super().__init__(message)
        self.raw_output = raw_output


class SynthesisParseError(ModelOutputParseError):
    """Falha de parse na síntese premium. Não há fallback: aborta a requisição."""
