"""Completion provider clients for ragcore."""

from ragcore.llm.custom_endpoint import CustomEndpointLLM
from ragcore.llm.factory import LLMProtocol, create_llm

__all__ = ["CustomEndpointLLM", "LLMProtocol", "create_llm"]
