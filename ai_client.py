"""
Cliente de IA generativa
========================
Envoltorio mínimo sobre la API de OpenAI. Una sola llamada por petición,
con timeout acotado y sin reintentos; cualquier fallo se convierte en
UpstreamError para que el llamador use su respaldo determinístico.
"""

import os
import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from errors import UpstreamError

logger = logging.getLogger(__name__)

USE_OPENAI = os.environ.get("USE_OPENAI", "1") == "1"
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT_SECONDS = int(os.environ.get("OPENAI_TIMEOUT_SECONDS", "15"))


def is_ai_available() -> bool:
    """Verifica si la API está habilitada y hay una clave configurada."""
    if not USE_OPENAI:
        return False
    key = os.environ.get("OPENAI_API_KEY", "").strip()
    return len(key) > 10


def generate_text(prompt: str, system_prompt: Optional[str] = None,
                  temperature: float = 0.7, max_tokens: int = 1500) -> str:
    if not is_ai_available():
        logger.warning("OPENAI_DISABLED | USE_OPENAI=0 or no API key")
        raise UpstreamError("Servicio de IA no configurado")

    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})

    try:
        client = OpenAI(timeout=OPENAI_TIMEOUT_SECONDS, max_retries=0)
        response = client.chat.completions.create(
            model=OPENAI_MODEL,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
    except OpenAIError as e:
        logger.error(f"OPENAI_API_ERROR | error={str(e)}")
        raise UpstreamError("Error al consultar el servicio de IA")

    content = response.choices[0].message.content if response.choices else None
    if not content or not content.strip():
        logger.error("OPENAI_EMPTY_RESPONSE")
        raise UpstreamError("El servicio de IA no devolvió contenido")

    logger.info(f"OPENAI_OK | model={OPENAI_MODEL} | chars={len(content)}")
    return content.strip()
