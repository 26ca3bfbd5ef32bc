"""Tests for the index builder and the tiered query resolver."""

import pytest

from nzebi.core.unicode_utils import normalize_for_search
from nzebi.search.index import build_index
from nzebi.search.resolver import (
	TIER_EXACT,
	TIER_FUZZY,
	TIER_PREFIX,
	TIER_SUBSTRING,
	QueryResolver,
	fuzzy_threshold,
)

from conftest import make_entry


def ids(entries):
	return [e.id for e in entries]


class TestBuildIndex:
	"""Tests for build_index."""

	def test_exact_keys_cover_both_fields(self, mbolo):
		index = build_index([mbolo])
		assert index.exact["mbolo"] == (mbolo,)
		assert index.exact["salut, bonjour"] == (mbolo,)

	def test_keys_are_normalized(self):
		entry = make_entry("1", "Ñzébi", "Langue")
		index = build_index([entry])
		assert "nzebi" in index.exact
		assert "langue" in index.exact
		assert index.fields_of(entry) == ("nzebi", "langue")

	def test_bucket_order_follows_input(self):
		first = make_entry("3", "mama", "maman")
		second = make_entry("99", "Mama", "grand-mère")
		index = build_index([first, second])
		assert ids(index.exact["mama"]) == ["3", "99"]

	def test_no_entry_twice_in_a_bucket(self):
		entry = make_entry("1", "taxi", "taxi")
		index = build_index([entry])
		assert index.exact["taxi"] == (entry,)
		assert index.phonetic["t200"] == (entry,)
		assert len(index.stemmed["taxi"]) == 1

	def test_phonetic_and_stemmed_tables(self, mbolo):
		salutation = make_entry("2", "mbasi", "salutations")
		index = build_index([mbolo, salutation])
		assert mbolo in index.phonetic["m140"]
		assert ids(index.stemmed["salut"]) == ["2"]

	def test_repeated_id_keeps_first(self):
		first = make_entry("1", "mbolo", "salut")
		again = make_entry("1", "ndoki", "sorcier")
		index = build_index([first, again])
		assert index.entries == (first,)
		assert "ndoki" not in index.exact

	def test_rebuild_is_identical(self, sample_entries):
		one = build_index(sample_entries)
		two = build_index(sample_entries)
		assert one.exact == two.exact
		assert one.phonetic == two.phonetic
		assert one.stemmed == two.stemmed
		assert one.entries == two.entries

	def test_empty_list(self):
		index = build_index([])
		assert len(index) == 0
		assert index.exact == {}


class TestFuzzyThreshold:
	"""Tests for fuzzy_threshold."""

	def test_values(self):
		assert fuzzy_threshold(2) == 0
		assert fuzzy_threshold(3) == 1
		assert fuzzy_threshold(5) == 1
		assert fuzzy_threshold(6) == 2
		assert fuzzy_threshold(40) == 2


class TestQueryResolver:
	"""Tests for QueryResolver."""

	@pytest.fixture
	def resolver(self, sample_entries):
		return QueryResolver(build_index(sample_entries))

	def test_empty_queries(self, resolver):
		assert resolver.search("") == []
		assert resolver.search("   ") == []
		assert resolver.search("\t\n") == []

	def test_exact_match(self, resolver):
		hits = resolver.explain("mbolo")
		assert hits[0].entry.id == "1"
		assert hits[0].tier == TIER_EXACT

	def test_exact_match_ignores_case_and_accents(self, resolver):
		assert resolver.search("NZÁMBI")[0].id == "5"
		assert resolver.search("  Mbolo ")[0].id == "1"

	def test_prefix_match(self, resolver):
		hits = resolver.explain("mbol")
		assert hits[0].entry.id == "1"
		assert hits[0].tier == TIER_PREFIX

	def test_substring_match_on_translation(self, resolver):
		hits = resolver.explain("bonjour")
		assert [h.entry.id for h in hits] == ["1"]
		assert hits[0].tier == TIER_SUBSTRING

	def test_fuzzy_match(self, resolver):
		hits = resolver.explain("mbolx")
		assert hits[0].entry.id == "1"
		assert hits[0].tier == TIER_FUZZY
		assert hits[0].distance == 1

	def test_no_match(self, resolver):
		assert resolver.search("zzz") == []

	def test_prefix_then_substring_ordering(self, resolver):
		# starts-with group first, each group by shorter field then input order
		assert ids(resolver.search("m")) == [
			"6", "9", "3", "14", "1", "8",
			"5", "15", "11", "12", "13", "2",
		]

	def test_exact_beats_shorter_prefix_candidates(self):
		entries = [make_entry("a", "kala", "autrefois"), make_entry("b", "ka", "aller")]
		resolver = QueryResolver(build_index(entries))
		assert ids(resolver.search("ka")) == ["b", "a"]

	def test_fuzzy_sorted_by_distance_then_headword(self):
		entries = [
			make_entry("1", "bola", "chose"),
			make_entry("2", "bala", "truc"),
			make_entry("3", "bilan", "compte"),
		]
		hits = QueryResolver(build_index(entries)).explain("bila")
		assert [(h.entry.id, h.tier) for h in hits] == [
			("3", TIER_PREFIX),
			("2", TIER_FUZZY),
			("1", TIER_FUZZY),
		]

	def test_fuzzy_skipped_for_short_queries(self):
		resolver = QueryResolver(build_index([make_entry("1", "mo", "yy")]))
		assert resolver.search("mx") == []

	def test_fuzzy_min_length_is_configurable(self):
		entries = [make_entry("1", "mbolo", "salut")]
		resolver = QueryResolver(build_index(entries), fuzzy_min_length=6)
		assert resolver.search("mbolx") == []

	def test_results_capped(self):
		entries = [make_entry(i, f"mot{i:02d}", f"sens {i}") for i in range(60)]
		index = build_index(entries)
		assert len(QueryResolver(index).search("mot")) == 20
		assert len(QueryResolver(index, max_results=25).search("mot")) == 25
		assert QueryResolver(index).search("mot")[0].id == "0"

	def test_invalid_max_results(self, mbolo):
		with pytest.raises(ValueError):
			QueryResolver(build_index([mbolo]), max_results=0)

	def test_no_duplicates_across_tiers(self, resolver):
		for query in ["mama", "m", "mbolo", "ndo", "mbote"]:
			found = ids(resolver.search(query))
			assert len(found) == len(set(found))

	def test_headword_lookup_ranks_before_fuzzy(self, resolver, sample_entries):
		for entry in sample_entries:
			hits = resolver.explain(normalize_for_search(entry.headword))
			position = [h.entry.id for h in hits].index(entry.id)
			fuzzy_positions = [i for i, h in enumerate(hits) if h.tier == TIER_FUZZY]
			assert all(position < i for i in fuzzy_positions)
			assert hits[0].tier == TIER_EXACT

	def test_rebuilt_index_gives_same_results(self, sample_entries):
		one = QueryResolver(build_index(sample_entries))
		two = QueryResolver(build_index(sample_entries))
		for query in ["mbolo", "mb", "bonjour", "ndongi", "eau", "zzz", "m"]:
			assert one.search(query) == two.search(query)

	def test_fuzzy_does_not_scan_unrelated_lengths(self):
		# "abcdefghij" is far longer than the query and never becomes a candidate
		entries = [make_entry("1", "abcdefghij", "klmnopqrst")]
		assert QueryResolver(build_index(entries)).search("abd") == []

	def test_fuzzy_widens_when_same_code_words_are_too_far(self, mbolo):
		# all share the code of "mbolx" (m142) but are at least two edits away
		crowd = [
			make_entry(str(i), word, f"sens {i}")
			for i, word in enumerate(["mabelka", "mibolki", "mubalkas", "mobilkes", "mebulaks", "mabolakis"], start=2)
		]
		index = build_index(crowd + [mbolo])
		assert len(index.phonetic["m142"]) == 6
		hits = QueryResolver(index).explain("mbolx")
		assert [(h.entry.id, h.tier, h.distance) for h in hits] == [("1", TIER_FUZZY, 1)]

	def test_stem_bucket_finds_plural(self, monkeypatch):
		# "amis" and "ami" have different codes (a520, a500) but the same stem
		entry = make_entry("1", "ami", "copain")
		resolver = QueryResolver(build_index([entry]))
		monkeypatch.setattr(resolver, "_length_candidates", lambda query, threshold: iter(()))
		hits = resolver.explain("amis")
		assert [(h.entry.id, h.tier, h.distance) for h in hits] == [("1", TIER_FUZZY, 1)]
