"""
Soundex-like phonetic code used to pre-filter fuzzy candidates.

Two words sharing a code are only "phonetically close" for candidate
selection; the edit distance decides whether they actually match.
"""

CODE_LENGTH = 4

# Consonant classes: labials, velars/sibilants, dentals, l, nasals, r
_CLASSES = {
	"1": "bfpv",
	"2": "cgjkqsxz",
	"3": "dt",
	"4": "l",
	"5": "mn",
	"6": "r",
}

CONSONANT_DIGITS: dict[str, str] = {
	letter: digit for digit, letters in _CLASSES.items() for letter in letters
}


def phonetic_code(text: str, length: int = CODE_LENGTH) -> str:
	"""
	Encode an already-normalized string.

	The first character is kept verbatim; following consonants become class
	digits, vowels and anything unmapped are skipped, and a digit equal to
	the last one emitted is dropped. The result is padded with "0" and cut
	to `length`. Empty input gives "".
	"""
	if not text:
		return ""
	code = text[0]
	last_digit = ""
	for char in text[1:]:
		digit = CONSONANT_DIGITS.get(char)
		if digit is None:
			continue
		if digit == last_digit:
			continue
		code += digit
		last_digit = digit
		if len(code) >= length:
			break
	return (code + "0" * length)[:length]
