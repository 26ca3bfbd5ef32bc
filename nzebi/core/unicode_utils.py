"""Unicode normalization utilities for dictionary entries and queries."""

import unicodedata
from typing import Tuple


def normalize_lemma(lemma_raw: str) -> Tuple[str, str]:
	"""
	Normalize a lemma to NFC form for display and deduplication.

	Args:
		lemma_raw: Original form (preserves diacritics and case)

	Returns:
		Tuple of (lemma_raw, lemma_nfc)
	"""
	lemma_nfc = unicodedata.normalize('NFC', lemma_raw.strip())
	return lemma_raw, lemma_nfc


def strip_diacritics(text: str) -> str:
	"""
	Remove combining marks (accents, tildes, cedillas) from text.

	Args:
		text: Input text

	Returns:
		Text with base characters only, recomposed to NFC
	"""
	decomposed = unicodedata.normalize('NFD', text)
	kept = [c for c in decomposed if unicodedata.category(c) != 'Mn']
	return unicodedata.normalize('NFC', ''.join(kept))


def normalize_for_search(text: str) -> str:
	"""
	Normalize text for case- and diacritic-insensitive search.

	Lower-cases first, then strips diacritics, so "Ñzébi" and "nzebi"
	compare equal. Digits, punctuation and inner spaces are kept.

	Args:
		text: Input text

	Returns:
		Normalized text used for every index key and comparison
	"""
	return strip_diacritics(text.lower())
