from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, AsyncGenerator


class LLMService(ABC):
    """Port for Large Language Model services"""

    @abstractmethod
    async def generate_response(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            max_tokens: int = 1000,
            temperature: float = 0.7
    ) -> str:
        """
        Generate a complete response using the LLM.

        Args:
            prompt: User message
            system_prompt: Instructions for the model
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            Generated response
        """
        pass

    @abstractmethod
    async def generate_streaming_response(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            max_tokens: int = 1000,
            temperature: float = 0.7
    ) -> AsyncGenerator[str, None]:
        """
        Generate a streaming response using the LLM.

        Yields:
            Response chunks as they're generated
        """
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, Any]:
        """Return information about the LLM model"""
        pass
