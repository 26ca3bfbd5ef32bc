"""
Tiered query resolution over a SearchIndex.

Tiers run in priority order and each one only adds entries the earlier
tiers did not select (identity by entry id):

1. exact      normalized query equals a normalized headword or translation
2. prefix     a normalized field starts with the query, then
   substring  a normalized field contains it
3. fuzzy      edit distance within an adaptive threshold, queries of
              three characters or more only

The concatenation is cut to `max_results`.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from nzebi.core.unicode_utils import normalize_for_search
from nzebi.schemas.dictionary import DictionaryEntry
from nzebi.search.distance import levenshtein
from nzebi.search.index import SearchIndex
from nzebi.search.phonetic import phonetic_code
from nzebi.search.stemmer import stem

DEFAULT_MAX_RESULTS = 20
DEFAULT_FUZZY_MIN_LENGTH = 3
MIN_FUZZY_MATCHES = 5

TIER_EXACT = "exact"
TIER_PREFIX = "prefix"
TIER_SUBSTRING = "substring"
TIER_FUZZY = "fuzzy"


@dataclass(frozen=True)
class SearchHit:
	entry: DictionaryEntry
	tier: str
	distance: Optional[int] = None


def fuzzy_threshold(query_length: int) -> int:
	"""Maximum accepted edit distance for a normalized query of this length."""
	return min(2, query_length // 3)


class QueryResolver:
	"""Answers searches against one immutable index. Safe to share."""

	def __init__(
		self,
		index: SearchIndex,
		max_results: int = DEFAULT_MAX_RESULTS,
		fuzzy_min_length: int = DEFAULT_FUZZY_MIN_LENGTH,
	):
		if max_results < 1:
			raise ValueError("max_results must be at least 1")
		self.index = index
		self.max_results = max_results
		self.fuzzy_min_length = fuzzy_min_length

	def search(self, query: str) -> list[DictionaryEntry]:
		return [hit.entry for hit in self.explain(query)]

	def explain(self, query: str) -> list[SearchHit]:
		"""Same ranking as `search`, with the tier and distance of each hit."""
		normalized = normalize_for_search(query or "").strip()
		if not normalized:
			return []

		hits: list[SearchHit] = []
		selected: set[str] = set()

		def take(tier_hits: Iterable[SearchHit]) -> None:
			for hit in tier_hits:
				if hit.entry.id in selected:
					continue
				selected.add(hit.entry.id)
				hits.append(hit)

		take(SearchHit(entry, TIER_EXACT, 0) for entry in self.index.exact.get(normalized, ()))
		if len(hits) < self.max_results:
			take(self._partial_matches(normalized, selected))
		if len(hits) < self.max_results and len(normalized) >= self.fuzzy_min_length:
			take(self._fuzzy_matches(normalized, selected))

		return hits[: self.max_results]

	def _partial_matches(self, query: str, selected: set[str]) -> list[SearchHit]:
		starts: list[tuple[int, int, DictionaryEntry]] = []
		contains: list[tuple[int, int, DictionaryEntry]] = []

		for position, entry in enumerate(self.index.entries):
			if entry.id in selected:
				continue
			headword, translation = self.index.fields_of(entry)
			if headword.startswith(query) or translation.startswith(query):
				group = starts
			elif query in headword or query in translation:
				group = contains
			else:
				continue
			group.append((min(len(headword), len(translation)), position, entry))

		def rank(item):
			return item[0], item[1]

		return [
			SearchHit(entry, TIER_PREFIX) for _, _, entry in sorted(starts, key=rank)
		] + [
			SearchHit(entry, TIER_SUBSTRING) for _, _, entry in sorted(contains, key=rank)
		]

	def _candidate_stages(self, query: str, threshold: int) -> list[Callable[[], Iterable[DictionaryEntry]]]:
		"""Candidate sources, cheapest first; later ones run only while matches are scarce."""
		return [
			lambda: self.index.phonetic.get(phonetic_code(query), ()),
			lambda: self.index.stemmed.get(stem(query), ()),
			# Typos in the first letter or in the consonants change the phonetic
			# code; widen to every entry whose length makes a match possible.
			lambda: self._length_candidates(query, threshold),
		]

	def _length_candidates(self, query: str, threshold: int) -> Iterator[DictionaryEntry]:
		for entry in self.index.entries:
			if any(abs(len(text) - len(query)) <= threshold for text in self.index.fields_of(entry)):
				yield entry

	def _distance(self, query: str, entry: DictionaryEntry, threshold: int) -> Optional[int]:
		distances = [
			levenshtein(query, text)
			for text in self.index.fields_of(entry)
			# Length difference is a lower bound on the distance
			if abs(len(text) - len(query)) <= threshold
		]
		if not distances or min(distances) > threshold:
			return None
		return min(distances)

	def _fuzzy_matches(self, query: str, selected: set[str]) -> list[SearchHit]:
		threshold = fuzzy_threshold(len(query))
		seen = set(selected)
		scored: list[tuple[int, str, str, DictionaryEntry]] = []

		for stage in self._candidate_stages(query, threshold):
			if len(scored) >= MIN_FUZZY_MATCHES:
				break
			for entry in stage():
				if entry.id in seen:
					continue
				seen.add(entry.id)
				distance = self._distance(query, entry, threshold)
				if distance is not None:
					headword, _ = self.index.fields_of(entry)
					scored.append((distance, headword, entry.headword, entry))

		scored.sort(key=lambda item: item[:3])
		return [SearchHit(entry, TIER_FUZZY, distance) for distance, _, _, entry in scored]
