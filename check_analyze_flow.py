"""
Script manual para verificar o fluxo completo e o logging da API.

Envia um lote de comentários ao endpoint /analyze de uma instância local
(com chave real do Gemini) e mostra o relatório e o X-Request-ID para
correlacionar com os logs.

Uso:
    1. Inicie a API: python -m app.main  (ou uvicorn app.main:app --port 3000)
    2. Em outro terminal: python check_analyze_flow.py [quantidade]
    3. Verifique os logs em: logs/info.log, logs/debug.log e logs/error.log
"""

import sys
import asyncio
import json
from datetime import datetime

import httpx


BASE_URL = "http://localhost:3000"

SAMPLE_COMMENTS = [
    "This tutorial finally made rigging click for me, thank you!",
    "Audio is way too quiet compared to the intro music.",
    "Can you do a follow-up on weight painting?",
    "First!",
    "The pacing in the middle section drags a bit.",
    "Subscribed, your explanations are so clear.",
    "Please add timestamps, hard to find the part about shape keys.",
    "Meh, I expected more advanced techniques.",
]


async def run_analyze_flow(total: int) -> None:
    comments = [SAMPLE_COMMENTS[i % len(SAMPLE_COMMENTS)] for i in range(total)]

    print("\n" + "=" * 80)
    print("🧪 FLUXO COMPLETO DE ANÁLISE")
    print("=" * 80)
    print(f"⏰ Timestamp: {datetime.now().isoformat()}")
    print(f"📍 Endpoint: POST {BASE_URL}/analyze")
    print(f"📝 Comentários: {len(comments)} (chunks esperados: {(len(comments) + 99) // 100})")

    async with httpx.AsyncClient(timeout=None) as client:
        try:
            response = await client.post(f"{BASE_URL}/analyze", json={"comments": comments})
        except httpx.ConnectError:
            print(f"\n[ERROR] API não está rodando em {BASE_URL}")
            print("[TIP] Inicie a API com: python -m app.main")
            return

    print(f"\n✅ Status: {response.status_code}")
    print(f"🔗 X-Request-ID: {response.headers.get('X-Request-ID')}")
    print(json.dumps(response.json(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 150
    asyncio.run(run_analyze_flow(count))
