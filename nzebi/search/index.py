"""
Lookup tables built over a loaded word list.

The index is a pure function of the entry list: building twice from the
same list (same order) gives identical buckets in identical order. It is
never updated in place; a reload builds a new one.
"""

from dataclasses import dataclass, field
from typing import Iterable

from nzebi.core.unicode_utils import normalize_for_search
from nzebi.schemas.dictionary import DictionaryEntry
from nzebi.search.phonetic import phonetic_code
from nzebi.search.stemmer import stem

Bucket = tuple[DictionaryEntry, ...]


@dataclass(frozen=True)
class SearchIndex:
	"""Read-only tables shared by every search against one word list."""

	exact: dict[str, Bucket] = field(default_factory=dict)
	phonetic: dict[str, Bucket] = field(default_factory=dict)
	stemmed: dict[str, Bucket] = field(default_factory=dict)
	entries: Bucket = ()
	normalized: dict[str, tuple[str, str]] = field(default_factory=dict)  # id -> (headword, translation)

	def __len__(self) -> int:
		return len(self.entries)

	def fields_of(self, entry: DictionaryEntry) -> tuple[str, str]:
		"""Normalized (headword, translation) of an indexed entry."""
		return self.normalized[entry.id]


class _BucketBuilder:
	"""Accumulates entries per key, each entry at most once per bucket."""

	def __init__(self):
		self._buckets: dict[str, list[DictionaryEntry]] = {}
		self._seen: dict[str, set[str]] = {}

	def add(self, key: str, entry: DictionaryEntry) -> None:
		if not key:
			return
		seen = self._seen.setdefault(key, set())
		if entry.id in seen:
			return
		seen.add(entry.id)
		self._buckets.setdefault(key, []).append(entry)

	def freeze(self) -> dict[str, Bucket]:
		return {key: tuple(bucket) for key, bucket in self._buckets.items()}


def build_index(entries: Iterable[DictionaryEntry]) -> SearchIndex:
	"""
	Build exact, phonetic and stemmed tables from a word list.

	Both the headword and the translation of every entry are indexed.
	Entries are expected to carry non-empty headword and translation, which
	the loader guarantees. A repeated id keeps its first occurrence.

	Args:
		entries: Word list in the order buckets should preserve

	Returns:
		A new SearchIndex
	"""
	exact = _BucketBuilder()
	phonetic = _BucketBuilder()
	stemmed = _BucketBuilder()
	ordered: list[DictionaryEntry] = []
	normalized: dict[str, tuple[str, str]] = {}

	for entry in entries:
		if entry.id in normalized:
			continue
		headword = normalize_for_search(entry.headword)
		translation = normalize_for_search(entry.translation)
		ordered.append(entry)
		normalized[entry.id] = (headword, translation)

		for text in (headword, translation):
			exact.add(text, entry)
			phonetic.add(phonetic_code(text), entry)
			stemmed.add(stem(text), entry)

	return SearchIndex(
		exact=exact.freeze(),
		phonetic=phonetic.freeze(),
		stemmed=stemmed.freeze(),
		entries=tuple(ordered),
		normalized=normalized,
	)
