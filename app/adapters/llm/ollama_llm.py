import httpx
import json
import logging
from typing import Dict, Any, Optional, AsyncGenerator
from ...core.ports.llm_service import LLMService
from ...core.domain.exceptions import LLMServiceError

logger = logging.getLogger(__name__)


class OllamaLLMService(LLMService):
    """Ollama implementation of LLM service using the chat endpoint"""

    def __init__(
            self,
            base_url: str = "http://localhost:11434",
            model_name: str = "llama3.2:3b",
            timeout: int = 120,
            client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.model_name = model_name
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self._model_info = None

    def _build_payload(
            self,
            prompt: str,
            system_prompt: Optional[str],
            max_tokens: int,
            temperature: float,
            stream: bool,
    ) -> Dict[str, Any]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        return {
            "model": self.model_name,
            "messages": messages,
            "options": {
                "num_predict": max_tokens,
                "temperature": temperature,
                "top_p": 0.9,
            },
            "stream": stream,
        }

    async def generate_response(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            max_tokens: int = 1000,
            temperature: float = 0.7
    ) -> str:
        """Generate a response using the LLM"""
        url = f"{self.base_url}/api/chat"
        payload = self._build_payload(prompt, system_prompt, max_tokens, temperature, stream=False)

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPError as e:
            raise LLMServiceError(f"HTTP error generating response: {str(e)}") from e
        except ValueError as e:
            raise LLMServiceError(f"Malformed LLM response: {str(e)}") from e

        return result.get("message", {}).get("content", "").strip()

    async def generate_streaming_response(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            max_tokens: int = 1000,
            temperature: float = 0.7
    ) -> AsyncGenerator[str, None]:
        """Generate a streaming response using the LLM"""
        url = f"{self.base_url}/api/chat"
        payload = self._build_payload(prompt, system_prompt, max_tokens, temperature, stream=True)

        try:
            async with self.client.stream("POST", url, json=payload) as response:
                response.raise_for_status()

                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    try:
                        chunk = json.loads(line)
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping malformed stream line: {line[:80]}")
                        continue

                    content = chunk.get("message", {}).get("content")
                    if content:
                        yield content

                    if chunk.get("done", False):
                        break

        except httpx.HTTPError as e:
            raise LLMServiceError(f"HTTP error generating streaming response: {str(e)}") from e

    def get_model_info(self) -> Dict[str, Any]:
        """Return information about the LLM model"""
        if self._model_info is None:
            self._model_info = {
                "model_name": self.model_name,
                "provider": "ollama",
                "base_url": self.base_url,
                "capabilities": ["text_generation", "streaming"]
            }

        return self._model_info

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
