"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from nzebi.schemas.dictionary import DictionaryEntry
from nzebi.services.loader import parse_entries

SAMPLE_PATH = Path(__file__).parent.parent / "data" / "sample_dictionary.json"


def make_entry(entry_id, headword, translation, **extra) -> DictionaryEntry:
	"""Build an entry using the Python field names."""
	return DictionaryEntry(id=str(entry_id), headword=headword, translation=translation, **extra)


@pytest.fixture
def sample_path():
	return SAMPLE_PATH


@pytest.fixture
def sample_entries():
	"""The fifteen-word sample dictionary, in file order."""
	return parse_entries(json.loads(SAMPLE_PATH.read_text(encoding="utf-8")))


@pytest.fixture
def mbolo():
	return make_entry("1", "mbolo", "salut, bonjour")


class StaticLoader:
	"""Loader returning a fixed list, counting fetches."""

	def __init__(self, entries):
		self.entries = list(entries)
		self.calls = 0

	async def fetch(self):
		self.calls += 1
		return list(self.entries)


class FailingLoader:
	def __init__(self, exc: Exception):
		self.exc = exc
		self.calls = 0

	async def fetch(self):
		self.calls += 1
		raise self.exc
