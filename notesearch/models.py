"""Value types shared by the search engine and its hosts"""

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

MatchType = Literal["name", "content"]


@dataclass(frozen=True)
class SourceDocument:
    """A note as supplied by the host document store"""
    id: str
    name: str
    content: str


@dataclass
class SearchResult:
    """One ranked hit, recomputed on every query"""
    id: str
    name: str
    score: float
    match_type: MatchType
    snippet: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "match_type": self.match_type,
        }
        if self.snippet is not None:
            result["snippet"] = self.snippet
        return result
