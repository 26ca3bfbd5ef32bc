"""Levenshtein edit distance used to rank fuzzy matches."""


def levenshtein(a: str, b: str) -> int:
	"""
	Edit distance between two strings (insert, delete, substitute cost 1).

	Walks the (len(b)+1) x (len(a)+1) table row by row, keeping only the
	previous row. Inputs are compared code point by code point and are
	never truncated; callers bound the number of calls instead.
	"""
	if a == b:
		return 0
	if not a:
		return len(b)
	if not b:
		return len(a)

	prev = list(range(len(a) + 1))
	for j in range(1, len(b) + 1):
		curr = [j]
		cb = b[j - 1]
		for i in range(1, len(a) + 1):
			cost = 0 if a[i - 1] == cb else 1
			curr.append(min(
				curr[i - 1] + 1,    # insertion
				prev[i] + 1,        # deletion
				prev[i - 1] + cost, # substitution
			))
		prev = curr
	return prev[len(a)]
