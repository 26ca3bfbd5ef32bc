from fastapi import APIRouter, Depends, HTTPException, Query, Request

from nzebi.core.logging import log_event
from nzebi.services import browse
from nzebi.services.dictionary_store import DictionaryStore

router = APIRouter(prefix="/dictionary", tags=["dictionary"])


def get_store(request: Request) -> DictionaryStore:
	return request.app.state.store


def _entry_out(entry) -> dict:
	return entry.model_dump()


@router.get("")
def list_words(
	letter: str | None = Query(None, max_length=1),
	filter: str | None = None,
	limit: int = Query(50, ge=1, le=500),
	offset: int = Query(0, ge=0),
	store: DictionaryStore = Depends(get_store),
):
	rows = browse.filter_entries(store.get_all(), letter=letter, text=filter)
	rows = browse.sort_for_display(rows)
	return {
		"total": len(rows),
		"results": [_entry_out(e) for e in browse.paginate(rows, limit, offset)],
	}


@router.get("/status")
def dictionary_status(store: DictionaryStore = Depends(get_store)):
	return store.status().model_dump()


@router.get("/letters")
def list_letters(store: DictionaryStore = Depends(get_store)):
	return browse.letter_counts(store.get_all())


@router.get("/categories")
def list_categories(store: DictionaryStore = Depends(get_store)):
	groups = browse.group_by_category(store.get_all())
	return {
		category: [_entry_out(e) for e in entries]
		for category, entries in groups.items()
	}


@router.get("/search")
def search_words(
	request: Request,
	q: str = Query("", max_length=200),
	debug: bool = False,
	store: DictionaryStore = Depends(get_store),
):
	if debug:
		hits = store.explain(q)
		results = [
			{**_entry_out(hit.entry), "tier": hit.tier, "distance": hit.distance}
			for hit in hits
		]
	else:
		results = [_entry_out(e) for e in store.search(q)]
	log_event(
		"search",
		query=q,
		count=len(results),
		ready=store.is_ready(),
		request_id=getattr(request.state, "request_id", None),
	)
	return {"query": q, "count": len(results), "results": results}


@router.post("/reload")
async def reload_words(request: Request, store: DictionaryStore = Depends(get_store)):
	ok = await store.reload(request.app.state.loader)
	if not ok:
		raise HTTPException(status_code=503, detail=store.error or "Dictionary unavailable")
	return {"status": "OK", "count": store.status().count}


@router.get("/words/{entry_id}")
def get_word(entry_id: str, store: DictionaryStore = Depends(get_store)):
	entry = store.get_by_id(entry_id)
	if not entry:
		raise HTTPException(status_code=404, detail="Word not found")
	return _entry_out(entry)
