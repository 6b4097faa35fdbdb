"""
"Did you mean ...?" suggestions for mistyped flags.

distance() is the optimal-string-alignment flavour of Damerau–Levenshtein:
insertions, deletions, substitutions and adjacent transpositions all cost 1,
and no substring is edited twice.

suggest() keeps the candidates closest to the mistyped word:
- long words ("--x") and bare words ("x") are compared against long flags and
  bare names only, with the "--" stripped on both sides; survivors are shown
  with "--" put back. Short words ("-x") are compared against short flags only.
- candidates of length <= 1 are too ambiguous and are skipped.
- candidates with a similarity (L - d) / L of 0.4 or less are skipped.
- only the survivors at the smallest distance are kept, and nothing further
  than MAX_DISTANCE edits away is ever offered.
"""
MAX_DISTANCE = 3
MIN_SIMILARITY = 0.4


def distance(source, target, /):
    """
    Edit distance between two strings (optimal string alignment).

    Strings whose lengths differ by more than MAX_DISTANCE are never suggested,
    so the full table is skipped and the longer length is returned instead.
    """
    if not isinstance(source, str) or not isinstance(target, str):
        raise TypeError("distance() arguments must be strings")

    if abs(len(source) - len(target)) > MAX_DISTANCE:
        return max(len(source), len(target))

    # rows[i][j]: distance between source[:i] and target[:j]
    rows = [[0] * (len(target) + 1) for _ in range(len(source) + 1)]
    for i in range(len(source) + 1):
        rows[i][0] = i
    for j in range(len(target) + 1):
        rows[0][j] = j

    for i in range(1, len(source) + 1):
        for j in range(1, len(target) + 1):
            cost = source[i - 1] != target[j - 1]
            rows[i][j] = min(
                rows[i - 1][j] + 1,  # deletion
                rows[i][j - 1] + 1,  # insertion
                rows[i - 1][j - 1] + cost,  # substitution
            )
            if i > 1 and j > 1 and source[i - 1] == target[j - 2] and source[i - 2] == target[j - 1]:
                rows[i][j] = min(rows[i][j], rows[i - 2][j - 2] + 1)  # transposition

    return rows[-1][-1]


def _similarity(source, target, measured):
    longest = max(len(source), len(target))
    return (longest - measured) / longest if longest else 1.0


def suggest(word, candidates, /):
    """
    Render a suggestion for a mistyped flag, or "" when nothing is close enough.

    Examples
    - suggest("--verbos", ["--verbose", "-v"])       -> "Did you mean --verbose?"
    - suggest("bda", ["bad"])                        -> "Did you mean --bad?"
    - suggest("--fo", ["--foo", "--fox"])            -> "Did you mean one of --foo, --fox?"
    - suggest("--zzzzzz", ["--out"])                 -> ""
    """
    if not isinstance(word, str):
        raise TypeError("suggest() first argument must be a string")

    if word.startswith("--") or not word.startswith("-"):
        prefix = "--"
        source = word.removeprefix("--")
        eligible = (
            candidate.removeprefix("--")
            for candidate in candidates
            if candidate.startswith("--") or not candidate.startswith("-")
        )
    else:
        prefix = ""
        source = word
        eligible = (
            candidate
            for candidate in candidates
            if candidate.startswith("-") and not candidate.startswith("--")
        )

    best = MAX_DISTANCE
    matches = []
    for candidate in dict.fromkeys(eligible):
        if len(candidate) <= 1:
            continue
        measured = distance(source, candidate)
        if _similarity(source, candidate, measured) <= MIN_SIMILARITY:
            continue
        if measured < best:
            best = measured
            matches = [candidate]
        elif measured == best:
            matches.append(candidate)

    matches = sorted(prefix + match for match in matches)
    match len(matches):
        case 0:
            return ""
        case 1:
            return f"Did you mean {matches[0]}?"
        case _:
            return f"Did you mean one of {", ".join(matches)}?"


__all__ = (
    "MAX_DISTANCE",
    "distance",
    "suggest",
)
