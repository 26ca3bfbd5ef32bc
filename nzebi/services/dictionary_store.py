"""
Owner of the loaded word list and of the search index built from it.

The store publishes one immutable snapshot (entries, index, resolver) with
a single attribute assignment. Searches read whatever snapshot was current
when they started, so a reload never races with them. At most one load is in
flight: concurrent callers await the same task.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from nzebi.core.errors import DictionaryLoadError
from nzebi.core.logging import log_event
from nzebi.schemas.dictionary import DictionaryEntry, StoreStatus
from nzebi.search.index import SearchIndex, build_index
from nzebi.search.resolver import (
	DEFAULT_FUZZY_MIN_LENGTH,
	DEFAULT_MAX_RESULTS,
	QueryResolver,
	SearchHit,
)


class DictionaryLoader(Protocol):
	async def fetch(self) -> list[DictionaryEntry]:
		...


@dataclass(frozen=True)
class _Snapshot:
	entries: tuple[DictionaryEntry, ...]
	by_id: dict[str, DictionaryEntry]
	index: SearchIndex
	resolver: QueryResolver


class DictionaryStore:
	def __init__(
		self,
		max_results: int = DEFAULT_MAX_RESULTS,
		fuzzy_min_length: int = DEFAULT_FUZZY_MIN_LENGTH,
	):
		self.max_results = max_results
		self.fuzzy_min_length = fuzzy_min_length
		self.error: Optional[str] = None
		self._snapshot: Optional[_Snapshot] = None
		self._task: Optional[asyncio.Task] = None
		self._generation = 0

	# ---------- Lifecycle ----------
	def is_ready(self) -> bool:
		return self._snapshot is not None

	def is_loading(self) -> bool:
		return self._task is not None and not self._task.done()

	def status(self) -> StoreStatus:
		snapshot = self._snapshot
		return StoreStatus(
			ready=snapshot is not None,
			loading=self.is_loading(),
			error=self.error,
			count=len(snapshot.entries) if snapshot else 0,
		)

	def load_entries(self, entries: Iterable[DictionaryEntry]) -> bool:
		"""Build and publish an index from entries already in memory."""
		self._generation += 1
		return self._build_and_publish(list(entries), self._generation)

	async def load(self, loader: DictionaryLoader, force: bool = False) -> bool:
		"""
		Fetch the word list and publish a new index.

		A no-op when already loaded (unless `force`). While a load is in
		flight, other callers wait for it instead of starting another one.
		A forced reload supersedes the in-flight load, whose result is then
		discarded.

		Returns:
			True if the store is ready once this call completes
		"""
		if self.is_loading() and not force:
			return await asyncio.shield(self._task)
		if self.is_ready() and not force:
			return True

		self._generation += 1
		task = asyncio.ensure_future(self._run_load(loader, self._generation))
		self._task = task
		try:
			return await asyncio.shield(task)
		finally:
			if self._task is task and task.done():
				self._task = None

	async def reload(self, loader: DictionaryLoader) -> bool:
		return await self.load(loader, force=True)

	async def _run_load(self, loader: DictionaryLoader, generation: int) -> bool:
		log_event("dictionary_load_started", generation=generation)
		try:
			entries = await loader.fetch()
		except Exception as exc:
			if generation != self._generation:
				return await self._superseded(generation)
			if isinstance(exc, DictionaryLoadError):
				return self._fail(generation, exc.message, exc)
			return self._fail(generation, DictionaryLoadError.default_message, exc)

		if generation != self._generation:
			return await self._superseded(generation)
		return self._build_and_publish(entries, generation)

	async def _superseded(self, generation: int) -> bool:
		"""Drop a stale result and report the outcome of the load that replaced it."""
		log_event("dictionary_load_discarded", generation=generation, current=self._generation)
		newer = self._task
		if newer is not None and newer is not asyncio.current_task():
			return await asyncio.shield(newer)
		return self.is_ready()

	def _build_and_publish(self, entries: list[DictionaryEntry], generation: int) -> bool:
		try:
			index = build_index(entries)
			resolver = QueryResolver(
				index,
				max_results=self.max_results,
				fuzzy_min_length=self.fuzzy_min_length,
			)
			snapshot = _Snapshot(
				entries=index.entries,
				by_id={entry.id: entry for entry in index.entries},
				index=index,
				resolver=resolver,
			)
		except Exception as exc:
			return self._fail(generation, DictionaryLoadError.default_message, exc)

		self._snapshot = snapshot
		self.error = None
		log_event("dictionary_loaded", generation=generation, count=len(snapshot.entries))
		return True

	def _fail(self, generation: int, message: str, exc: Exception) -> bool:
		self.error = message
		log_event(
			"dictionary_load_failed",
			level=logging.WARNING,
			generation=generation,
			message=message,
			error=str(exc),
			error_type=type(exc).__name__,
		)
		return False

	# ---------- Reads ----------
	def get_all(self) -> list[DictionaryEntry]:
		snapshot = self._snapshot
		return list(snapshot.entries) if snapshot else []

	def get_by_id(self, entry_id: str) -> Optional[DictionaryEntry]:
		snapshot = self._snapshot
		return snapshot.by_id.get(entry_id) if snapshot else None

	def search(self, query: str) -> list[DictionaryEntry]:
		snapshot = self._snapshot
		if snapshot is None:
			return []
		return snapshot.resolver.search(query)

	def explain(self, query: str) -> list[SearchHit]:
		snapshot = self._snapshot
		if snapshot is None:
			return []
		return snapshot.resolver.explain(query)
