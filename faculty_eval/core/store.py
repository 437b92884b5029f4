"""
In-memory document store

Mirrors the small subset of a document database the service relies on:
point lookup, upsert by key, delete by key and a sorted, limited scan.
Documents are plain dicts; every read returns a copy so callers never
mutate stored state by accident.
"""
import copy
from typing import Any, Dict, Iterable, List, Optional, Tuple

from faculty_eval.core.errors import Conflict


Filter = Dict[str, Any]

ASCENDING = 1
DESCENDING = -1


def _matches(doc: Dict[str, Any], filter: Optional[Filter]) -> bool:
    if not filter:
        return True
    return all(doc.get(field) == value for field, value in filter.items())


class Collection:
    """
    Ordered collection of documents with unique-field enforcement

    Args:
        name: Collection name (used in error messages)
        unique: Fields whose non-empty values must be unique
    """

    def __init__(self, name: str, unique: Iterable[str] = ()):
        self.name = name
        self.unique = tuple(unique)
        self._docs: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._docs)

    def _locate(self, filter: Filter) -> Optional[Dict[str, Any]]:
        for doc in self._docs:
            if _matches(doc, filter):
                return doc
        return None

    def _check_unique(self, candidate: Dict[str, Any], current: Optional[Dict[str, Any]] = None) -> None:
        for field in self.unique:
            value = candidate.get(field)
            if value in (None, ""):
                continue
            for doc in self._docs:
                if doc is not current and doc.get(field) == value:
                    raise Conflict(f"{self.name}: {field} '{value}' already exists")

    def insert_one(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        self._check_unique(doc)
        stored = copy.deepcopy(doc)
        self._docs.append(stored)
        return copy.deepcopy(stored)

    def find_one(self, filter: Filter) -> Optional[Dict[str, Any]]:
        doc = self._locate(filter)
        return copy.deepcopy(doc) if doc is not None else None

    def find(
        self,
        filter: Optional[Filter] = None,
        sort: Optional[Tuple[str, int]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Scan documents matching filter

        Args:
            filter: Field equality filter (None matches everything)
            sort: (field, ASCENDING|DESCENDING); ties keep insertion order
            limit: Maximum number of documents returned

        Returns:
            Copies of the matching documents
        """
        docs = [doc for doc in self._docs if _matches(doc, filter)]
        if sort is not None:
            field, direction = sort
            # Missing values sort lowest
            docs.sort(key=lambda d: (d.get(field) is not None, d.get(field)), reverse=direction == DESCENDING)
        if limit is not None:
            docs = docs[:limit]
        return copy.deepcopy(docs)

    def find_one_and_update(
        self,
        filter: Filter,
        update: Dict[str, Any],
        upsert: bool = False,
        set_on_insert: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Set fields on the first matching document

        When nothing matches and upsert is true, a new document is built from
        filter, set_on_insert and update (later wins).

        Returns:
            The document after the update, or None when nothing matched
        """
        doc = self._locate(filter)
        if doc is None:
            if not upsert:
                return None
            new_doc = {**filter, **(set_on_insert or {}), **update}
            return self.insert_one(new_doc)

        self._check_unique({**doc, **update}, current=doc)
        doc.update(copy.deepcopy(update))
        return copy.deepcopy(doc)

    def find_one_and_delete(self, filter: Filter) -> Optional[Dict[str, Any]]:
        doc = self._locate(filter)
        if doc is None:
            return None
        self._docs = [d for d in self._docs if d is not doc]
        return copy.deepcopy(doc)

    def clear(self) -> None:
        self._docs.clear()


class DocumentStore:
    """The four collections the service persists"""

    def __init__(self):
        self.users = Collection("users", unique=("id", "email", "employee_id"))
        self.questions = Collection("questions", unique=("id",))
        self.evaluations = Collection("evaluations", unique=("employee_id",))
        self.system_config = Collection("system_config", unique=("key",))

    def reset(self) -> None:
        for collection in (self.users, self.questions, self.evaluations, self.system_config):
            collection.clear()
