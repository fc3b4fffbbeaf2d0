"""
Text normalization package for cleaning-task matching.

Provides tokenization of item names and task descriptions into the
normalized word sets compared against chemical ``usedFor`` keywords.
"""

from .tokenizer import TaskTokenizer, get_tokens, TOKENIZATION_VERSION

__all__ = [
    'TaskTokenizer',
    'get_tokens',
    'TOKENIZATION_VERSION',
]
