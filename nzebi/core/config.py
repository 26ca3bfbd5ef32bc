import os
from dotenv import load_dotenv

load_dotenv()

def _split_csv(value: str) -> list[str]:
	return [part.strip() for part in value.split(",") if part.strip()]

class Settings:
	APP_NAME = os.getenv("APP_NAME", "Dictionnaire Nzébi-Français")

	# Remote word list (edge function returning a JSON array of words)
	DICTIONARY_URL = os.getenv("DICTIONARY_URL", "http://localhost:54321/functions/v1/get-dictionnaire")
	DICTIONARY_API_KEY = os.getenv("DICTIONARY_API_KEY", "")
	DICTIONARY_TIMEOUT_SEC = float(os.getenv("DICTIONARY_TIMEOUT_SEC", "10"))

	# When set, the word list is read from this JSON file instead of the remote URL
	DICTIONARY_FILE = os.getenv("DICTIONARY_FILE", "")

	SEARCH_MAX_RESULTS = int(os.getenv("SEARCH_MAX_RESULTS", "20"))
	SEARCH_FUZZY_MIN_LENGTH = int(os.getenv("SEARCH_FUZZY_MIN_LENGTH", "3"))

	ALLOW_ORIGINS = _split_csv(os.getenv("ALLOW_ORIGINS", "*"))

	LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
