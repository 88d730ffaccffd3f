# =============================================================================================
# APP/CORE/PROFANITY.PY - CHIRP BODY WORD FILTER
# =============================================================================================
# Literal, case-insensitive, whole-word replacement. Words are delimited by single spaces
# only: "Kerfuffle!" is not a match, "kerfuffle" and "KERFUFFLE" are.
# =============================================================================================

BAD_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_body(body: str, bad_words: frozenset[str] = BAD_WORDS) -> str:
    """Replace every banned word in `body` with MASK, leaving spacing untouched."""
    words = body.split(" ")
    cleaned = [MASK if word.lower() in bad_words else word for word in words]
    return " ".join(cleaned)
