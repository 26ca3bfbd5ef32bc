from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from nzebi.core.config import settings
from nzebi.core.errors import http_exception_handler, validation_exception_handler
from nzebi.core.logging import request_id_middleware
from nzebi.routers.dictionary import router as dictionary_router
from nzebi.services.dictionary_store import DictionaryStore
from nzebi.services.loader import build_loader


def create_app(store: DictionaryStore | None = None, loader=None, load_on_startup: bool = True) -> FastAPI:
	"""
	Build the API around one dictionary store.

	Tests pass their own store and loader; by default both come from settings.
	A failed startup load leaves the app running with the store not ready.
	"""
	project_dir = Path(__file__).resolve().parent.parent
	if store is None:
		store = DictionaryStore(
			max_results=settings.SEARCH_MAX_RESULTS,
			fuzzy_min_length=settings.SEARCH_FUZZY_MIN_LENGTH,
		)
	if loader is None:
		loader = build_loader(settings, project_dir)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		if load_on_startup:
			await store.load(loader)
		yield

	app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
	app.state.store = store
	app.state.loader = loader

	# Middleware
	app.middleware("http")(request_id_middleware)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.ALLOW_ORIGINS,
		allow_methods=["GET", "POST"],
		allow_headers=["*"],
	)

	# Consistent error format
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(HTTPException, http_exception_handler)

	app.include_router(dictionary_router)

	@app.get("/health")
	def health():
		return {"status": "OK"}

	return app

app = create_app()

if __name__ == "__main__":
	import uvicorn
	uvicorn.run(app, host="0.0.0.0", port=8000)
