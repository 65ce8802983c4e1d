from .router import LLMRouter, get_default_config, DEFAULT_MODELS

__all__ = ["LLMRouter", "get_default_config", "DEFAULT_MODELS"]
