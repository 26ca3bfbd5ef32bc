import json
from pathlib import Path
from typing import Any, Optional, Set

import httpx
from pydantic import ValidationError

from nzebi.core.config import Settings
from nzebi.core.errors import DictionaryPayloadError, DictionaryTransportError
from nzebi.core.logging import log_event
from nzebi.schemas.dictionary import DictionaryEntry


def parse_entries(payload: Any) -> list[DictionaryEntry]:
	"""
	Validate a decoded word-list payload.

	Rows missing a required field are skipped, as are rows repeating an id
	already seen; both are logged. A payload that is not a list is rejected.
	"""
	if not isinstance(payload, list):
		raise DictionaryPayloadError(details=f"expected a list, got {type(payload).__name__}")

	seen: Set[str] = set()
	entries = []
	for position, row in enumerate(payload):
		try:
			entry = DictionaryEntry.model_validate(row)
		except ValidationError as exc:
			log_event("entry_skipped", position=position, errors=exc.error_count())
			continue
		if entry.id in seen:
			log_event("entry_duplicate", position=position, id=entry.id)
			continue
		seen.add(entry.id)
		entries.append(entry)
	return entries


class RemoteDictionaryLoader:
	"""Fetches the word list from the dictionary edge function."""

	def __init__(
		self,
		url: str,
		api_key: str = "",
		timeout: float = 10.0,
		client: Optional[httpx.AsyncClient] = None,
	):
		self.url = url
		self.api_key = api_key
		self.timeout = timeout
		self._client = client

	def _headers(self) -> dict:
		if not self.api_key:
			return {}
		return {"Authorization": f"Bearer {self.api_key}", "apikey": self.api_key}

	async def fetch(self) -> list[DictionaryEntry]:
		try:
			if self._client is not None:
				res = await self._client.get(self.url, headers=self._headers(), timeout=self.timeout)
			else:
				async with httpx.AsyncClient() as client:
					res = await client.get(self.url, headers=self._headers(), timeout=self.timeout)
		except httpx.HTTPError as exc:
			raise DictionaryTransportError(details=str(exc)) from exc

		if not res.is_success:
			raise DictionaryTransportError(
				"Erreur lors du chargement du dictionnaire",
				details=f"HTTP {res.status_code}",
			)
		try:
			payload = res.json()
		except ValueError as exc:
			raise DictionaryPayloadError(details=str(exc)) from exc
		return parse_entries(payload)


def _read_text(path: Path) -> str:
	try:
		return path.read_text(encoding="utf-8-sig")
	except UnicodeDecodeError:
		return path.read_text(encoding="latin-1")


class FileDictionaryLoader:
	"""Reads the word list from a JSON array on disk."""

	def __init__(self, path: Path | str):
		self.path = Path(path)

	async def fetch(self) -> list[DictionaryEntry]:
		if not self.path.exists():
			raise DictionaryTransportError(
				"Fichier du dictionnaire introuvable",
				details=str(self.path),
			)
		try:
			text = _read_text(self.path)
		except OSError as exc:
			raise DictionaryTransportError(details=str(exc)) from exc
		try:
			payload = json.loads(text)
		except ValueError as exc:
			raise DictionaryPayloadError(details=str(exc)) from exc
		return parse_entries(payload)


def resolve_dictionary_path(project_dir: Path, configured_path: str) -> Path:
	path = Path(configured_path)
	if path.is_absolute():
		return path
	candidate = project_dir / configured_path
	if candidate.exists():
		return candidate
	return Path.cwd() / configured_path


def build_loader(settings: Settings, project_dir: Optional[Path] = None):
	if settings.DICTIONARY_FILE:
		base = project_dir or Path.cwd()
		return FileDictionaryLoader(resolve_dictionary_path(base, settings.DICTIONARY_FILE))
	return RemoteDictionaryLoader(
		settings.DICTIONARY_URL,
		api_key=settings.DICTIONARY_API_KEY,
		timeout=settings.DICTIONARY_TIMEOUT_SEC,
	)
