"""
Heuristic French suffix stripping.

Groups inflected variants ("salutations", "salutation") under one root so
the fuzzy tier can find them. This is not linguistic stemming: it over- and
under-strips in predictable ways and is only used for candidate selection.
"""

MIN_STEMMABLE_LENGTH = 3
MIN_ROOT_LENGTH = 2

# Checked in order, first match wins: derivational suffixes before
# inflectional and verb endings. Input is already diacritic-free.
FRENCH_SUFFIXES: tuple[str, ...] = (
	"issements",
	"issement",
	"atrices",
	"atrice",
	"ateurs",
	"ateur",
	"ations",
	"ation",
	"tions",
	"tion",
	"ements",
	"ement",
	"ments",
	"ment",
	"ismes",
	"isme",
	"istes",
	"iste",
	"ables",
	"able",
	"ibles",
	"ible",
	"ances",
	"ance",
	"ences",
	"ence",
	"euses",
	"euse",
	"eux",
	"ites",
	"ite",
	"ives",
	"ive",
	"aient",
	"eront",
	"erons",
	"erez",
	"ions",
	"iez",
	"ons",
	"ez",
	"ait",
	"ais",
	"ant",
	"es",
	"s",
)

VERB_ENDINGS: tuple[str, ...] = ("er", "ir", "re")


def stem(text: str) -> str:
	if len(text) < MIN_STEMMABLE_LENGTH:
		return text

	for suffix in FRENCH_SUFFIXES:
		if text.endswith(suffix) and len(text) - len(suffix) >= MIN_ROOT_LENGTH:
			return text[: -len(suffix)]

	if text.endswith(VERB_ENDINGS) and len(text) - 2 > 4:
		return text[:-2]

	return text
