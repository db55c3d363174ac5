from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DirectoryApp:
    app_id: int
    name: str


@dataclass
class EnrichmentMetadata:
    source_id: int
    name: str = ""
    description: str = ""
    developers: List[str] = field(default_factory=list)
    publishers: List[str] = field(default_factory=list)
    release_date: str = ""
    header_image: str = ""
    screenshots: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    critic_score: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceId": self.source_id,
            "name": self.name,
            "description": self.description,
            "developers": list(self.developers),
            "publishers": list(self.publishers),
            "releaseDate": self.release_date,
            "headerImage": self.header_image,
            "screenshots": list(self.screenshots),
            "genres": list(self.genres),
            "categories": list(self.categories),
            "criticScore": self.critic_score,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "EnrichmentMetadata":
        if not isinstance(data, dict) or "sourceId" not in data:
            raise ValueError("metadata needs a sourceId")
        score = data.get("criticScore")
        return EnrichmentMetadata(
            source_id=int(data["sourceId"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            developers=[str(x) for x in data.get("developers") or []],
            publishers=[str(x) for x in data.get("publishers") or []],
            release_date=str(data.get("releaseDate") or ""),
            header_image=str(data.get("headerImage") or ""),
            screenshots=[str(x) for x in data.get("screenshots") or []],
            genres=[str(x) for x in data.get("genres") or []],
            categories=[str(x) for x in data.get("categories") or []],
            critic_score=int(score) if score is not None else None,
        )


@dataclass
class GameEntry:
    id: str
    name: str
    path: str
    added_at: str
    metadata: Optional[EnrichmentMetadata] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "addedAt": self.added_at,
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "GameEntry":
        if not isinstance(data, dict):
            raise ValueError("library entry must be an object")
        meta = data.get("metadata")
        return GameEntry(
            id=str(data["id"]),
            name=str(data["name"]),
            path=str(data["path"]),
            added_at=str(data["addedAt"]),
            metadata=EnrichmentMetadata.from_dict(meta) if meta else None,
        )

    def with_changes(self, **changes) -> "GameEntry":
        return replace(self, **changes)
