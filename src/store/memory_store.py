# src/store/memory_store.py — v1
"""In-memory document store (STORE_BACKEND=memory).

Evaluates the subset of the query DSL produced by the constraint
algebra: ``bool`` (must, filter, must_not, should), ``term``, ``exists``
and ``match_all``. A ``term`` on a list field matches membership.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from docmapper.cache.base_entity_cache import BaseEntityCache
from docmapper.core.errors import OptimisticLockError
from docmapper.core.models import ID_FIELD, StoredDocument
from docmapper.store.base_store import BaseDocumentStore

logger = logging.getLogger(__name__)


class MemoryDocumentStore(BaseDocumentStore):
    """Document store keeping everything in process memory."""

    def __init__(
        self,
        default_cache: BaseEntityCache | None = None,
        default_limit: int = 1000,
    ) -> None:
        super().__init__(default_cache=default_cache, default_limit=default_limit)
        self._documents: dict[str, dict[str, StoredDocument]] = {}
        self._lock = threading.Lock()
        self.load_count = 0

    @property
    def provider_name(self) -> str:
        return "memory"

    def _load(self, type_name: str, entity_id: str) -> StoredDocument | None:
        self.load_count += 1
        document = self._documents.get(type_name, {}).get(entity_id)
        return None if document is None else document.model_copy(deep=True)

    def _write(self, document: StoredDocument, expected_version: int | None) -> StoredDocument:
        with self._lock:
            documents = self._documents.setdefault(document.type_name, {})
            current = documents.get(document.id)
            if expected_version is not None:
                if current is None or current.version != expected_version:
                    found = None if current is None else current.version
                    raise OptimisticLockError(
                        f"{document.unique_id}: expected version {expected_version}, found {found}"
                    )
            version = (current.version if current is not None else 0) + 1
            saved = document.model_copy(update={"version": version}, deep=True)
            documents[document.id] = saved
            return saved.model_copy(deep=True)

    def _remove(self, type_name: str, entity_id: str) -> bool:
        with self._lock:
            return self._documents.get(type_name, {}).pop(entity_id, None) is not None

    def _search(
        self,
        type_name: str,
        query: dict[str, Any] | None,
        filter: dict[str, Any] | None,  # noqa: A002
        limit: int | None,
    ) -> list[StoredDocument]:
        clause = query if query is not None else filter
        result: list[StoredDocument] = []
        for document in list(self._documents.get(type_name, {}).values()):
            if clause is None or _matches(clause, document):
                result.append(document.model_copy(deep=True))
                if limit is not None and len(result) >= limit:
                    break
        return result

    def document_count(self, type_name: str) -> int:
        return len(self._documents.get(type_name, {}))

    def clear(self) -> None:
        """Drop every stored document and the default cache."""
        with self._lock:
            self._documents.clear()
        self.clear_cache()


def _field_value(document: StoredDocument, field: str) -> Any:
    if field == ID_FIELD:
        return document.id
    return document.source.get(field)


def _matches(clause: dict[str, Any], document: StoredDocument) -> bool:
    """Evaluate one DSL clause against a document."""
    if len(clause) != 1:
        raise ValueError(f"Malformed clause: {clause!r}")
    kind, body = next(iter(clause.items()))

    if kind == "match_all":
        return True

    if kind == "term":
        field, expected = next(iter(body.items()))
        if isinstance(expected, dict):
            expected = expected.get("value")
        actual = _field_value(document, field)
        if isinstance(actual, list):
            return expected in actual
        return actual == expected

    if kind == "exists":
        actual = _field_value(document, body["field"])
        return actual is not None and actual != []

    if kind == "bool":
        must = _as_list(body.get("must")) + _as_list(body.get("filter"))
        if not all(_matches(c, document) for c in must):
            return False
        if any(_matches(c, document) for c in _as_list(body.get("must_not"))):
            return False
        should = _as_list(body.get("should"))
        if should and not any(_matches(c, document) for c in should):
            return False
        return True

    raise ValueError(f"Unsupported query clause: {kind!r}")


def _as_list(value: Any) -> list[dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    return list(value)
