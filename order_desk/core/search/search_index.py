"""Prefix index over product names and SKUs.

The index is a trie keyed by lowercased characters. Every node exclusively
owns its children; an index is built once per catalog snapshot and thrown
away on the next rebuild, never updated in place.

Normalization is simple case folding (``str.lower``). Accents and other
diacritics are not folded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from order_desk.core.domain.types import Product

DEFAULT_INDEX_FIELDS: tuple[str, ...] = ("name", "sku")


@dataclass(slots=True)
class SearchIndexNode:
    """One character step in the trie."""

    children: dict[str, SearchIndexNode] = field(default_factory=dict)
    is_end: bool = False
    product_ids: set[str] = field(default_factory=set)


class SearchIndex:
    """Trie mapping normalized text prefixes to product identifiers."""

    def __init__(self) -> None:
        self._root = SearchIndexNode()
        self._product_ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._product_ids)

    def __contains__(self, prefix: object) -> bool:
        return isinstance(prefix, str) and self._walk(prefix.lower()) is not None

    @property
    def product_ids(self) -> frozenset[str]:
        """All identifiers inserted so far."""
        return frozenset(self._product_ids)

    def insert(self, text: str, product_id: str) -> None:
        """Index ``product_id`` under ``text``.

        Repeated calls with the same arguments leave the index unchanged.
        Empty text is not indexed.
        """
        if not text:
            return

        node = self._root
        for char in text.lower():
            child = node.children.get(char)
            if child is None:
                child = SearchIndexNode()
                node.children[char] = child
            node = child

        node.is_end = True
        node.product_ids.add(product_id)
        self._product_ids.add(product_id)

    def prefix_search(self, query: str) -> set[str]:
        """Return every product id indexed under a word starting with ``query``.

        The empty query is the root prefix and returns every inserted id.
        Callers that treat an empty query as "match nothing" must check for
        it before calling.
        """
        node = self._walk(query.lower())
        if node is None:
            return set()

        found: set[str] = set()
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_end:
                found.update(current.product_ids)
            stack.extend(current.children.values())
        return found

    def _walk(self, normalized: str) -> SearchIndexNode | None:
        node = self._root
        for char in normalized:
            child = node.children.get(char)
            if child is None:
                return None
            node = child
        return node


def build_index(
    products: Iterable[Product],
    fields: Iterable[str] = DEFAULT_INDEX_FIELDS,
) -> SearchIndex:
    """Build a fresh index over the given catalog snapshot.

    Each product is inserted once per indexed field (name and SKU by default).
    """
    field_names = tuple(fields)
    index = SearchIndex()
    for product in products:
        for name in field_names:
            value = getattr(product, name, None)
            if isinstance(value, str):
                index.insert(value, product.id)
    return index
