"""
Search over function names for the function column.
"""

import re
from typing import Final, List, Optional, Sequence, Tuple

SEARCH_TYPES: Final[Tuple[str, ...]] = ('fuzzy', 'text', 'regex', 'wildcard')

MIN_FUZZY_SCORE: Final[int] = 5
MATCH_SCORE: Final[int] = 16
CONSECUTIVE_BONUS: Final[int] = 8
BOUNDARY_BONUS: Final[int] = 8
WORD_SEPARATORS: Final[str] = '_.:@$ '


class SearchResult:
    """A matching function row and how well it matched."""

    def __init__(self, row: int, name: str, score: int):
        self.row = row
        self.name = name
        self.score = score


def fuzzy_score(name: str, query: str) -> Optional[int]:
    """
    Score a name against a query whose characters must appear in order.

    Consecutive matches and matches at the start of a word score higher, and
    every skipped character costs a point.

    Args:
        name (str): Function name
        query (str): Typed query

    Returns:
        Optional[int]: The score, or None if the query is not a subsequence
    """

    name_lower = name.lower()
    score = 0
    last = -1

    for char in query.lower():
        pos = name_lower.find(char, last + 1)
        if pos < 0:
            return None

        score += MATCH_SCORE
        if pos == last + 1 and last >= 0:
            score += CONSECUTIVE_BONUS
        if pos == 0 or name[pos - 1] in WORD_SEPARATORS:
            score += BOUNDARY_BONUS

        score -= pos - last - 1
        last = pos

    return score


def wildcard_to_regex(pattern: str) -> str:
    """Translate * and ? wildcards into a regular expression."""

    regex_pattern = ""
    for c in pattern:
        if c == '*':
            regex_pattern += ".*"
            continue

        if c == '?':
            regex_pattern += "."
            continue

        regex_pattern += re.escape(c)

    return regex_pattern


class FunctionSearch:
    """Finds functions by name using one of several match types."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        self.last_search: Optional[Tuple[str, str, bool]] = None

    def match(self, name: str, query: str, search_type: str = 'fuzzy',
              case_sensitive: bool = False) -> Optional[int]:
        """
        Match one name.

        Returns:
            Optional[int]: A score (higher is better) or None if it does not match
        """

        if search_type == 'fuzzy':
            score = fuzzy_score(name, query)
            if score is None or score <= MIN_FUZZY_SCORE:
                return None
            return score

        if search_type == 'text':
            if case_sensitive:
                return len(query) if query in name else None
            return len(query) if query.lower() in name.lower() else None

        flags = 0 if case_sensitive else re.IGNORECASE
        pattern = query if search_type == 'regex' else wildcard_to_regex(query)

        try:
            found = re.search(pattern, name, flags)
        except re.error:
            return None

        return len(found.group(0)) if found else None

    def find_all(self, query: str, search_type: str = 'fuzzy',
                 case_sensitive: bool = False) -> List[SearchResult]:
        """
        Find every matching function, in catalog order.

        Args:
            query (str): The text to search for
            search_type (str): One of 'fuzzy', 'text', 'regex' or 'wildcard'
            case_sensitive (bool): Ignored by fuzzy matching

        Returns:
            List[SearchResult]: All matches
        """

        if not query:
            return []

        self.last_search = (query, search_type, case_sensitive)

        results = []
        for row, name in enumerate(self.names):
            score = self.match(name, query, search_type, case_sensitive)
            if score is not None:
                results.append(SearchResult(row, name, score))

        return results

    def find_next(self, query: str, start_row: int, search_type: str = 'fuzzy',
                  case_sensitive: bool = False) -> Optional[SearchResult]:
        """Find the first match after start_row, wrapping around to the top."""

        results = self.find_all(query, search_type, case_sensitive)
        if not results:
            return None

        for result in results:
            if result.row > start_row:
                return result

        return results[0]

    def find_previous(self, start_row: int) -> Optional[SearchResult]:
        """Find the last match before start_row for the previous search, wrapping around."""

        if not self.last_search:
            return None

        query, search_type, case_sensitive = self.last_search
        results = self.find_all(query, search_type, case_sensitive)
        if not results:
            return None

        for result in reversed(results):
            if result.row < start_row:
                return result

        return results[-1]
