"""Assign categories to candidate transactions."""

import re
from typing import Iterable, Optional

from ledgerkit.domain.entities import CandidateTransaction, CategoryStructure
from ledgerkit.domain.lexicon import DEFAULT_LEXICON, DEFAULT_TAXONOMY, Lexicon, MerchantRule
from ledgerkit.utils.text import fold


def _keyword_pattern(keyword: str) -> re.Pattern:
    # Keywords must stand alone: "ORA" should not match inside "MORATALAZ".
    return re.compile(r"(?<!\w)" + re.escape(fold(keyword)) + r"(?!\w)")


class Categorizer:
    """Category assignment with a fixed precedence.

    1. A mapped category column, translated to the taxonomy's names.
    2. Without a category column, merchant keywords in the description
       (the result is flagged as auto-detected).
    3. The lexicon's default category.

    Subcategories come from a mapped subcategory column, else from
    description keywords scoped to the chosen category.
    """

    def __init__(
        self,
        taxonomy: Iterable[CategoryStructure] = DEFAULT_TAXONOMY,
        lexicon: Lexicon = DEFAULT_LEXICON,
    ):
        self.taxonomy = {fold(c.name): c for c in taxonomy}
        self.lexicon = lexicon
        self._rules: list[tuple[MerchantRule, list[re.Pattern]]] = [
            (rule, [_keyword_pattern(k) for k in rule.keywords]) for rule in lexicon.merchant_rules
        ]

    def _canonical(self, name: str) -> Optional[CategoryStructure]:
        key = fold(name.strip())
        if key in self.taxonomy:
            return self.taxonomy[key]
        alias = self.lexicon.category_aliases.get(key)
        if alias is not None:
            return self.taxonomy.get(fold(alias))
        return None

    def _owner_of_subcategory(self, name: str) -> Optional[tuple[CategoryStructure, str]]:
        key = fold(name.strip())
        for structure in self.taxonomy.values():
            for sub in structure.subcategories:
                if fold(sub) == key:
                    return structure, sub
        return None

    def match_rule(self, description: str) -> Optional[MerchantRule]:
        """Return the first merchant rule whose keyword appears in ``description``."""
        folded = fold(description)
        for rule, patterns in self._rules:
            if any(p.search(folded) for p in patterns):
                return rule
        return None

    def map_category(self, value: str) -> tuple[str, Optional[str]]:
        """Translate a category-column value into (category, subcategory)."""
        structure = self._canonical(value)
        if structure is not None:
            return structure.name, None
        owner = self._owner_of_subcategory(value)
        if owner is not None:
            return owner[0].name, owner[1]
        return self.lexicon.default_category, None

    def detect_subcategory(self, description: str, category: str) -> Optional[str]:
        """Find a subcategory of ``category`` mentioned by the description."""
        folded = fold(description)
        for rule, patterns in self._rules:
            if rule.subcategory and fold(rule.category) == fold(category):
                if any(p.search(folded) for p in patterns):
                    return rule.subcategory

        structure = self.taxonomy.get(fold(category))
        if structure is not None:
            for sub in structure.subcategories:
                if _keyword_pattern(sub).search(folded):
                    return sub
        return None

    def categorize(self, candidate: CandidateTransaction) -> CandidateTransaction:
        category = self.lexicon.default_category
        subcategory = None
        auto_detected = False

        if candidate.raw_category:
            category, subcategory = self.map_category(candidate.raw_category)
        else:
            rule = self.match_rule(candidate.description)
            if rule is not None:
                category = rule.category
                subcategory = rule.subcategory
                auto_detected = True

        if candidate.raw_subcategory:
            subcategory = candidate.raw_subcategory
        if not subcategory:
            subcategory = self.detect_subcategory(candidate.description, category)

        candidate.category = category
        candidate.subcategory = subcategory
        candidate.auto_detected = auto_detected
        return candidate
