"""Shared constants for app search matching and result assembly."""

# Default cap on app rows in one result list
MAX_RESULTS_COUNT = 5

# String id of the header label for the apps section
SEARCH_CORPUS_APPS = "search_corpus_apps"

DEFAULT_STRINGS: dict[str, str] = {
    SEARCH_CORPUS_APPS: "Apps",
}

# Languages without whitespace word breaks: tokens match anywhere in the title
SIMPLE_SEARCH_LANGUAGES = frozenset({"zh", "ja", "ko"})

# Languages with dotted/dotless i casing rules
DOTTED_I_LANGUAGES = frozenset({"tr", "az"})

# Unicode general categories used by the word-boundary rule
LETTER_CATEGORIES = frozenset({"Lu", "Ll", "Lt", "Lm", "Lo"})
NUMBER_CATEGORIES = frozenset({"Nd", "Nl", "No"})
SEPARATOR_CATEGORIES = frozenset({"Zs", "Zl", "Zp", "Cn"})
SYMBOL_CATEGORIES = frozenset({"Sm", "Sc", "Po", "Pd"})
