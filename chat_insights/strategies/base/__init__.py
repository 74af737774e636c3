"""Base classes for strategy implementations."""

from .classifier_strategy import ClassifierStrategy

__all__ = ['ClassifierStrategy']
