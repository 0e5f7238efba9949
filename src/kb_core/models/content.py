"""Domain models for knowledge-base content and categories."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContentItem:
    """An article as seen by search.

    ``body`` is either a serialized document tree or plain text.
    """

    id: str
    title: str = ""
    body: str = ""
    slug: str = ""
    category_id: str = ""
    status: str = "published"


@dataclass(frozen=True)
class SearchHit:
    """A matching item with its relevance score."""

    item: ContentItem
    score: int


@dataclass(frozen=True)
class CategoryRecord:
    """A category as stored, with a reference to its parent."""

    id: str
    parent_id: str | None = None
    order: int = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    icon: str = ""
    color: str = ""
    is_visible: bool = True


@dataclass(frozen=True)
class CategoryNode:
    """A category with its sorted subcategories."""

    record: CategoryRecord
    children: tuple["CategoryNode", ...] = ()

    @property
    def id(self) -> str:
        return self.record.id


@dataclass(frozen=True)
class FlatCategory:
    """A category emitted by a flattened tree walk."""

    record: CategoryRecord
    depth: int
    child_count: int = 0


@dataclass(frozen=True)
class Breadcrumb:
    """A single ancestor in a category trail."""

    category_id: str
    name: str
    href: str


@dataclass(frozen=True)
class ForestStats:
    """Counts over a category forest."""

    roots: int
    total: int

    @property
    def subcategories(self) -> int:
        return self.total - self.roots


@dataclass
class TreeDiagnostics:
    """Records dropped while building a category forest.

    Filled in by the builder when passed in; the forest itself never contains them.
    """

    dangling: list[str] = field(default_factory=list)
    cyclic: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.dangling or self.cyclic or self.duplicates)
