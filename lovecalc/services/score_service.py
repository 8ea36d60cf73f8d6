"""Score service - derives the compatibility percentage from two names."""

SCORE_FLOOR = 20
SCORE_SPAN = 81  # floor + (sum % span) stays within [20, 100]


def compute_score(name1: str, name2: str) -> int:
    """Map two names to a deterministic percentage in [20, 100].

    The names are concatenated in order, lower-cased and stripped of all
    whitespace; the Unicode code points of what remains are summed. Callers
    are responsible for rejecting empty names beforehand.
    """
    combined = "".join((name1 + name2).lower().split())
    return sum(ord(ch) for ch in combined) % SCORE_SPAN + SCORE_FLOOR
