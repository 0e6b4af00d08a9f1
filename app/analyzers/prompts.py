"""
Templates de prompt das duas etapas do pipeline.

- CHUNK_PROMPT: extração rápida por chunk (percentuais + listas curtas)
- PREMIUM_PROMPT: síntese final profunda a partir do agregado

Os templates são fixos e determinísticos: o mesmo chunk (ou agregado)
sempre gera o mesmo texto. Chaves literais do JSON de exemplo aparecem
duplicadas ({{ }}) por causa da sintaxe f-string do PromptTemplate.
"""

from typing import List

from langchain_core.prompts import PromptTemplate

from app.models.schemas_common import Aggregate


CHUNK_PROMPT = PromptTemplate.from_template(
    """
Analyze these YouTube comments and return STRICT JSON:

{{
 "pos": number,
 "neg": number,
 "neu": number,
 "praise": ["string"],
 "pain": ["string"],
 "themes": ["string"]
}}

Extract:
- estimated positive %
- estimated negative %
- estimated neutral %
- 5 short praise bullets
- 5 short pain bullets
- 5 short audience themes

COMMENTS:
{comment_block}
"""
)


PREMIUM_PROMPT = PromptTemplate.from_template(
    """
You are a YouTube audience intelligence engine.

Analyze the provided aggregated comment summaries and return valid JSON only.
Do not use markdown or backticks.

Output premium, insight-dense analysis with clear audience patterns and strategic value.

Required JSON fields:
- positivePercentage (number)
- negativePercentage (number)
- neutralPercentage (number)

- sentimentSummary_premium (5–7 sentences)
- topPraise_premium (6–10 items)
- topPainPoints_premium (6–10 items)

- strategicOpportunity (4–6 sentences)
- audienceDeepProfile (4–6 sentences)
- contentIdeas (3–6 short items)
- engagementPatterns (3–6 short items)

Guidelines:
- Focus on real audience behavior and intent.
- Be concise but deep.
- Prioritize clarity and usefulness over verbosity.
- Assume this is a paid, professional report.

Return a single, complete JSON object matching the schema exactly.


{{
  "positivePercentage": number,
  "negativePercentage": number,
  "neutralPercentage": number,

  "sentimentSummary_premium": "string",
  "actionableInsight_premium": "string",

  "topPraise_premium": ["string"],
  "topPainPoints_premium": ["string"],

  "strategicOpportunity": "string",
  "audienceDeepProfile": "string",
  "contentIdeas": ["string"],
  "engagementPatterns": ["string"]
}}

### COMMENTS:
{aggregate_json}
"""
)


def format_comment_block(chunk: List[str]) -> str:
    """Numera os comentários a partir de 1, um por linha."""
    return "\n".join(f"{index}. {comment}" for index, comment in enumerate(chunk, start=1))


def build_chunk_prompt(chunk: List[str]) -> str:
    return CHUNK_PROMPT.format(comment_block=format_comment_block(chunk))


def build_premium_prompt(aggregate: Aggregate) -> str:
    return PREMIUM_PROMPT.format(aggregate_json=aggregate.to_prompt_json())
