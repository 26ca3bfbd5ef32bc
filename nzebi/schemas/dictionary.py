from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nzebi.core.unicode_utils import normalize_lemma


class DictionaryEntry(BaseModel):
	"""One dictionary word. Immutable for the lifetime of a loaded word list."""

	model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

	id: str = Field(min_length=1)
	headword: str = Field(min_length=1, alias="nzebi_word")
	translation: str = Field(min_length=1, alias="french_word")
	part_of_speech: Optional[str] = None
	plural_form: Optional[str] = None
	imperative: Optional[str] = None
	synonyms: Optional[str] = None
	scientific_name: Optional[str] = None
	example_nzebi: Optional[str] = None
	example_french: Optional[str] = None
	pronunciation_url: Optional[str] = None
	is_verb: Optional[bool] = None

	@field_validator("id", mode="before")
	@classmethod
	def _coerce_id(cls, value):
		if isinstance(value, (int, float)) and not isinstance(value, bool):
			return str(value)
		return value

	@field_validator("headword", "translation")
	@classmethod
	def _nfc(cls, value: str) -> str:
		_, nfc = normalize_lemma(value)
		if not nfc:
			raise ValueError("must not be blank")
		return nfc


class StoreStatus(BaseModel):
	ready: bool
	loading: bool
	error: Optional[str] = None
	count: int = 0
