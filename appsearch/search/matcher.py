"""Title matcher: locale-aware folding and multi-token word-prefix matching.

A title matches a query when every whitespace-delimited query token is found in
the folded title. Folding is NFKD + case-fold with combining marks removed, so
"É", "é" and "e" compare equal. Under WORD_PREFIX a token must start at a word
boundary; under SUBSTRING it may start anywhere.
"""

import logging
import unicodedata
from dataclasses import dataclass
from functools import lru_cache

from appsearch.contracts.app_search_v1 import EmptyQueryPolicy, MatchPolicy
from appsearch.search.constants import (
    DOTTED_I_LANGUAGES,
    LETTER_CATEGORIES,
    NUMBER_CATEGORIES,
    SEPARATOR_CATEGORIES,
    SIMPLE_SEARCH_LANGUAGES,
    SYMBOL_CATEGORIES,
)

logger = logging.getLogger(__name__)


def fold(text: str) -> str:
    """Primary-strength comparison key: no case, no accents."""
    decomposed = unicodedata.normalize("NFKD", text).casefold()
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def language_of(locale: str) -> str:
    """'tr_TR', 'tr-TR' and 'tr' all map to 'tr'."""
    return (locale or "").replace("-", "_").split("_")[0].lower()


def is_word_boundary(this_category: str, prev_category: str | None) -> bool:
    """Whether a character of `this_category` starts a word.

    Case-blind: upper and lower case letters are treated alike, so the same
    title in any casing has the same boundaries.
    """
    if prev_category is None or prev_category in SEPARATOR_CATEGORIES:
        return True
    if this_category in LETTER_CATEGORIES:
        return prev_category not in LETTER_CATEGORIES
    if this_category in NUMBER_CATEGORIES:
        return prev_category not in NUMBER_CATEGORIES
    return this_category in SYMBOL_CATEGORIES


@dataclass(frozen=True)
class NormalizedQuery:
    """A query lowered once and split into folded tokens."""

    text: str
    tokens: tuple[str, ...]


@dataclass(frozen=True)
class PreparedTitle:
    folded: str
    boundaries: tuple[int, ...]  # offsets into `folded` where words start


class StringMatcher:
    """Decides whether a title matches a normalized query.

    Construct once and share; per-title preparation is kept in a bounded LRU
    cache owned by the instance, which is safe to call from several threads.
    """

    def __init__(
        self,
        policy: MatchPolicy = MatchPolicy.WORD_PREFIX,
        empty_query_policy: EmptyQueryPolicy = EmptyQueryPolicy.MATCH_ALL,
        locale: str = "en",
        cache_size: int = 1024,
    ) -> None:
        self._language = language_of(locale)
        self._empty_query_policy = EmptyQueryPolicy(empty_query_policy)
        policy = MatchPolicy(policy)
        if self._language in SIMPLE_SEARCH_LANGUAGES and policy != MatchPolicy.SUBSTRING:
            logger.debug(
                "Matcher: locale %s has no word breaks, using substring matching",
                locale,
            )
            policy = MatchPolicy.SUBSTRING
        self._policy = policy
        self._prepare = lru_cache(maxsize=max(0, cache_size))(self._prepare_title)

    @classmethod
    def from_config(cls, cfg=None) -> "StringMatcher":
        if cfg is None:
            from appsearch.core.config import config as cfg
        return cls(
            policy=cfg.match_policy,
            empty_query_policy=cfg.empty_query_policy,
            locale=cfg.locale,
            cache_size=cfg.matcher_cache_size,
        )

    @property
    def policy(self) -> MatchPolicy:
        return self._policy

    @property
    def empty_query_policy(self) -> EmptyQueryPolicy:
        return self._empty_query_policy

    def lower(self, text: str) -> str:
        if self._language in DOTTED_I_LANGUAGES:
            text = text.replace("I", "ı").replace("İ", "i")
        else:
            # "ı".upper() is "I", so dotless i must fold with i to stay case-blind
            text = text.replace("ı", "i")
        return text.lower()

    def normalize_query(self, query: str) -> NormalizedQuery:
        text = self.lower(query)
        tokens = tuple(t for t in (fold(raw) for raw in text.split()) if t)
        return NormalizedQuery(text=text, tokens=tokens)

    def _prepare_title(self, title: str) -> PreparedTitle:
        parts: list[str] = []
        boundaries: list[int] = []
        offset = 0
        prev_category: str | None = None
        for ch in title:
            piece = fold(self.lower(ch))
            if not piece:
                # Combining marks vanish when folded and do not split words
                continue
            category = unicodedata.category(ch)
            if is_word_boundary(category, prev_category):
                boundaries.append(offset)
            parts.append(piece)
            offset += len(piece)
            prev_category = category
        return PreparedTitle(folded="".join(parts), boundaries=tuple(boundaries))

    def prepare(self, title: str) -> PreparedTitle:
        return self._prepare(title)

    def _token_matches(self, prepared: PreparedTitle, token: str) -> bool:
        if self._policy == MatchPolicy.SUBSTRING:
            return token in prepared.folded
        return any(prepared.folded.startswith(token, b) for b in prepared.boundaries)

    def matches(self, title: str, query: NormalizedQuery | str) -> bool:
        """True when every query token is found in `title`."""
        if isinstance(query, str):
            query = self.normalize_query(query)
        if not query.tokens:
            return self._empty_query_policy == EmptyQueryPolicy.MATCH_ALL
        if not title:
            return False
        prepared = self._prepare(title)
        return all(self._token_matches(prepared, token) for token in query.tokens)
