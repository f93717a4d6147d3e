"""
LLM factory for creating completion clients based on configuration.

Provides a unified interface for the generative-completion provider
regardless of backend (custom OpenAI-compatible endpoint or HuggingFace).
"""

from typing import Protocol


class LLMProtocol(Protocol):
    """Protocol that all LLM clients must implement."""

    def invoke(self, prompt: str) -> str:
        """Call the LLM with a prompt and return the response."""
        ...


def create_llm(
    model: str | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> LLMProtocol:
    """
    Create an LLM client based on configuration settings.

    Args:
        model: Model identifier. If None, uses settings.llm_model
        max_tokens: Output token budget. If None, uses settings.llm_max_tokens
        temperature: Optional temperature override. If None, uses settings.llm_temperature

    Returns:
        LLM client that implements the LLMProtocol

    The function checks settings in this order:
        1. use_custom_endpoint → CustomEndpointLLM
        2. default → HuggingFaceEndpoint
    """
    from ragcore.config import settings

    model = model or settings.llm_model
    tokens = max_tokens if max_tokens is not None else settings.llm_max_tokens
    temp = temperature if temperature is not None else settings.llm_temperature

    if settings.use_custom_endpoint:
        from ragcore.llm.custom_endpoint import CustomEndpointLLM

        return CustomEndpointLLM(
            endpoint_url=settings.llm_endpoint_url,
            model=model,
            api_key=settings.llm_api_key_value,
            temperature=temp,
            max_tokens=tokens,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
        )

    # Use HuggingFace Inference API
    from langchain_huggingface import HuggingFaceEndpoint

    return HuggingFaceEndpoint(
        repo_id=model,
        huggingfacehub_api_token=settings.hf_api_key_value,
        temperature=temp,
        max_new_tokens=tokens,
    )
