"""
Task text tokenization for chemical matching.

Turns free-text item names and cleaning task descriptions into sets of
normalized tokens that can be compared against a chemical's ``usedFor``
keywords.
"""

import re
from typing import Optional, Set

# Versioned tokenization: increment when rules change
TOKENIZATION_VERSION = 1


class TaskTokenizer:
    """
    Tokenizes cleaning-task text into matchable words.

    Handles:
    - Case folding
    - Punctuation removal (anything outside a-z, 0-9 and whitespace)
    - Short-word removal (length <= 2)
    - Stop words (articles, prepositions, generic cleaning verbs,
      frequency words and generic nouns)
    - Naive plural stemming: a word ending in 's' also contributes the
      word without its final 's'

    "glass" yields both "glass" and "glas".
    """

    STOP_WORDS = frozenset({
        # Articles, conjunctions, prepositions
        'a', 'an', 'the', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for',
        'with', 'by', 'of', 'from', 'as', 'is', 'are', 'be', 'it', 'its',
        # Generic cleaning verbs
        'clean', 'wipe', 'scrub', 'sanitize', 'disinfect', 'wash', 'rinse',
        'polish', 'remove', 'check', 'ensure', 'using', 'mention',
        # Frequencies
        'daily', 'weekly', 'monthly', 'needed',
        # Generic nouns and fillers
        'deep', 'all', 'buildup', 'grease', 'stains', 'down', 'surfaces',
        'equipment', 'tools', 'solution', 'machine', 'interior', 'exterior',
        'parts', 'components', 'detailed', 'specific',
    })

    MIN_TOKEN_LENGTH = 3

    _NON_ALNUM = re.compile(r'[^a-z0-9\s]')
    _WHITESPACE = re.compile(r'\s+')

    def tokenize(self, text: Optional[str]) -> Set[str]:
        """
        Convert text into a set of matchable tokens.

        Args:
            text: Arbitrary text (None and empty strings are allowed)

        Returns:
            Set of lowercase alphanumeric tokens (possibly empty)

        Examples:
            >>> tokenizer = TaskTokenizer()
            >>> sorted(tokenizer.tokenize("Degrease the Fryer Baskets"))
            ['basket', 'baskets', 'degrease', 'fryer']
            >>> tokenizer.tokenize("N/A")
            set()
        """
        if not text or not isinstance(text, str):
            return set()

        cleaned = self._NON_ALNUM.sub('', text.lower())

        tokens: Set[str] = set()
        for word in self._WHITESPACE.split(cleaned):
            if not self._is_content_word(word):
                continue
            tokens.add(word)
            singular = self._naive_singular(word)
            if singular:
                tokens.add(singular)

        return tokens

    def _is_content_word(self, word: str) -> bool:
        """Check length and stop-word membership."""
        return len(word) >= self.MIN_TOKEN_LENGTH and word not in self.STOP_WORDS

    def _naive_singular(self, word: str) -> Optional[str]:
        """
        Strip a trailing 's' from words longer than three characters.

        Args:
            word: Retained content word

        Returns:
            Word without trailing 's', or None if the rule does not apply
        """
        if word.endswith('s') and len(word) > 3:
            return word[:-1]
        return None


# Module-level singleton for convenience function
_tokenizer_instance = None


def _get_tokenizer() -> TaskTokenizer:
    """Get or create the module-level TaskTokenizer singleton."""
    global _tokenizer_instance
    if _tokenizer_instance is None:
        _tokenizer_instance = TaskTokenizer()
    return _tokenizer_instance


def get_tokens(text: Optional[str]) -> Set[str]:
    """
    Convenience function for task text tokenization.

    Args:
        text: Item name or task description

    Returns:
        Set of normalized tokens
    """
    return _get_tokenizer().tokenize(text)
