"""Listing helpers for the alphabetical and by-category views."""

from typing import Iterable, Optional

from nzebi.core.unicode_utils import normalize_for_search
from nzebi.schemas.dictionary import DictionaryEntry

UNCATEGORIZED = "autres"


def display_key(entry: DictionaryEntry) -> tuple[str, str]:
	# Accent-insensitive first so "éla" sorts with "ela", exact form breaks ties
	return normalize_for_search(entry.headword), entry.headword


def first_letter(entry: DictionaryEntry) -> str:
	normalized = normalize_for_search(entry.headword)
	return normalized[:1].upper()


def sort_for_display(entries: Iterable[DictionaryEntry]) -> list[DictionaryEntry]:
	return sorted(entries, key=display_key)


def filter_entries(
	entries: Iterable[DictionaryEntry],
	letter: Optional[str] = None,
	text: Optional[str] = None,
) -> list[DictionaryEntry]:
	rows = list(entries)
	if letter:
		wanted = normalize_for_search(letter)[:1].upper()
		rows = [e for e in rows if first_letter(e) == wanted]
	if text:
		needle = normalize_for_search(text).strip()
		if needle:
			rows = [
				e for e in rows
				if needle in normalize_for_search(e.headword)
				or needle in normalize_for_search(e.translation)
			]
	return rows


def letter_counts(entries: Iterable[DictionaryEntry]) -> dict[str, int]:
	counts: dict[str, int] = {}
	for entry in entries:
		letter = first_letter(entry)
		if letter:
			counts[letter] = counts.get(letter, 0) + 1
	return dict(sorted(counts.items()))


def group_by_category(entries: Iterable[DictionaryEntry]) -> dict[str, list[DictionaryEntry]]:
	groups: dict[str, list[DictionaryEntry]] = {}
	for entry in sort_for_display(entries):
		category = (entry.part_of_speech or "").strip().lower() or UNCATEGORIZED
		groups.setdefault(category, []).append(entry)
	return groups


def paginate(rows: list, limit: int, offset: int = 0) -> list:
	return rows[offset: offset + limit]
