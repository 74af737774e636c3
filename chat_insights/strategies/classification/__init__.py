from .keyword_strategy import KeywordClassifierStrategy
from .llm_strategy import LLMClassifierStrategy

__all__ = ['KeywordClassifierStrategy', 'LLMClassifierStrategy']
