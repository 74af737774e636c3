"""
Strategy pattern implementations for conversation classification.
"""

from typing import Dict, Type, Any
from .base import ClassifierStrategy

# Import strategy implementations
from .classification import KeywordClassifierStrategy, LLMClassifierStrategy

# Registry of available strategies
CLASSIFIER_STRATEGIES: Dict[str, Type[ClassifierStrategy]] = {
    "keyword": KeywordClassifierStrategy,
    "llm": LLMClassifierStrategy,
}


def register_classifier_strategy(name: str, strategy_cls: Type[ClassifierStrategy]):
    """Register a classifier strategy."""
    CLASSIFIER_STRATEGIES[name] = strategy_cls


def create_classifier_strategy(strategy_name: str, config: Any) -> ClassifierStrategy:
    """Factory function to create a classifier strategy."""
    if strategy_name not in CLASSIFIER_STRATEGIES:
        raise ValueError(f"Unknown classifier strategy: {strategy_name}")
    return CLASSIFIER_STRATEGIES[strategy_name](config)
