from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status


class DictionaryLoadError(Exception):
	"""Word list could not be acquired. `message` is safe to show to users."""

	default_message = "Erreur lors du chargement du dictionnaire"

	def __init__(self, message: str | None = None, details=None):
		self.message = message or self.default_message
		self.details = details
		super().__init__(self.message)


class DictionaryTransportError(DictionaryLoadError):
	default_message = "Erreur de connexion"


class DictionaryPayloadError(DictionaryLoadError):
	default_message = "Format de données invalide"


def error_response(request: Request, status_code: int, message: str, details=None):
	# Ensure details is serializable
	if isinstance(details, Exception):
		details = str(details)
	return JSONResponse(
		status_code=status_code,
		content={
			"error": {
				"message": message,
				"details": jsonable_encoder(details),
				"request_id": getattr(request.state, "request_id", None),
			}
		},
	)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
	return error_response(
		request,
		status.HTTP_422_UNPROCESSABLE_ENTITY,
		"Validation error",
		details=exc.errors(),
	)

async def http_exception_handler(request: Request, exc: HTTPException):
	return error_response(request, exc.status_code, str(exc.detail))
