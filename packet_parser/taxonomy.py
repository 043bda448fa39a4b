"""
Category Taxonomy
=================
Static category tables shared by every parser instance. These are
read-only after import; never mutate them at runtime.
"""

from __future__ import annotations

from types import MappingProxyType

# ─── Subcategory → Category ───────────────────────────────────────────────────

SUBCATEGORY_TO_CATEGORY = MappingProxyType({
    "American Literature": "Literature",
    "British Literature": "Literature",
    "Classical Literature": "Literature",
    "European Literature": "Literature",
    "World Literature": "Literature",
    "Other Literature": "Literature",
    "Drama": "Literature",
    "Poetry": "Literature",
    "Long Fiction": "Literature",
    "Short Fiction": "Literature",
    "Misc Literature": "Literature",
    "American History": "History",
    "Ancient History": "History",
    "European History": "History",
    "World History": "History",
    "Other History": "History",
    "Historiography": "History",
    "Archaeology": "History",
    "Biology": "Science",
    "Chemistry": "Science",
    "Physics": "Science",
    "Math": "Science",
    "Astronomy": "Science",
    "Computer Science": "Science",
    "Earth Science": "Science",
    "Engineering": "Science",
    "Other Science": "Science",
    "Painting": "Fine Arts",
    "Sculpture": "Fine Arts",
    "Music": "Fine Arts",
    "Other Arts": "Fine Arts",
    "Architecture": "Fine Arts",
    "Dance": "Fine Arts",
    "Film": "Fine Arts",
    "Jazz": "Fine Arts",
    "Musicals": "Fine Arts",
    "Opera": "Fine Arts",
    "Photography": "Fine Arts",
    "Visual Fine Arts": "Fine Arts",
    "Auditory Fine Arts": "Fine Arts",
    "Other Fine Arts": "Fine Arts",
    "Religion": "Religion",
    "Mythology": "Mythology",
    "Philosophy": "Philosophy",
    "Economics": "Social Science",
    "Psychology": "Social Science",
    "Linguistics": "Social Science",
    "Sociology": "Social Science",
    "Anthropology": "Social Science",
    "Other Social Science": "Social Science",
    "Social Science": "Social Science",
    "Current Events": "Current Events",
    "Geography": "Geography",
    "Other Academic": "Other Academic",
    "Trash": "Trash",
})

# Labels the top-level classifier chooses from, in canonical order
SUBCATEGORIES = (
    "American Literature",
    "British Literature",
    "Classical Literature",
    "European Literature",
    "World Literature",
    "Other Literature",
    "American History",
    "Ancient History",
    "European History",
    "World History",
    "Other History",
    "Biology",
    "Chemistry",
    "Physics",
    "Other Science",
    "Visual Fine Arts",
    "Auditory Fine Arts",
    "Other Fine Arts",
    "Religion",
    "Mythology",
    "Philosophy",
    "Social Science",
    "Current Events",
    "Geography",
    "Other Academic",
    "Trash",
)

# Category → alternate subcategories (literary form)
ALTERNATE_SUBCATEGORIES = MappingProxyType({
    "Literature": (
        "Drama",
        "Long Fiction",
        "Poetry",
        "Short Fiction",
        "Misc Literature",
    ),
})

# Subcategory → sub-subcategories
SUBSUBCATEGORIES = MappingProxyType({
    "Other Science": (
        "Math",
        "Astronomy",
        "Computer Science",
        "Earth Science",
        "Engineering",
        "Misc Science",
    ),
    "Other Fine Arts": (
        "Architecture",
        "Dance",
        "Film",
        "Jazz",
        "Musicals",
        "Opera",
        "Photography",
        "Misc Arts",
    ),
    "Social Science": (
        "Anthropology",
        "Economics",
        "Linguistics",
        "Psychology",
        "Sociology",
        "Other Social Science",
    ),
})

# ─── Tag word-sets ────────────────────────────────────────────────────────────
# Every word of a key must appear in the tag for the key to match.
# Evaluated in order, first match wins: specific keys precede generic ones.

STANDARDIZE_SUBCATEGORIES = MappingProxyType({
    # Literature
    "american literature": "American Literature",
    "american lit": "American Literature",
    "us literature": "American Literature",
    "british literature": "British Literature",
    "british lit": "British Literature",
    "english literature": "British Literature",
    "english lit": "British Literature",
    "irish literature": "British Literature",
    "classical literature": "Classical Literature",
    "classical lit": "Classical Literature",
    "classics": "Classical Literature",
    "ancient literature": "Classical Literature",
    "european literature": "European Literature",
    "european lit": "European Literature",
    "euro lit": "European Literature",
    "french literature": "European Literature",
    "german literature": "European Literature",
    "russian literature": "European Literature",
    "world literature": "World Literature",
    "world lit": "World Literature",
    "other literature": "Other Literature",
    "other lit": "Other Literature",
    "misc literature": "Other Literature",
    "mixed literature": "Other Literature",
    # History
    "american history": "American History",
    "us history": "American History",
    "ancient history": "Ancient History",
    "classical history": "Ancient History",
    "european history": "European History",
    "euro history": "European History",
    "british history": "European History",
    "world history": "World History",
    "asian history": "World History",
    "african history": "World History",
    "latin american history": "World History",
    "other history": "Other History",
    "misc history": "Other History",
    "historiography": "Other History",
    "archaeology": "Other History",
    # Science
    "biology": "Biology",
    "bio": "Biology",
    "chemistry": "Chemistry",
    "chem": "Chemistry",
    "physics": "Physics",
    "other science": "Other Science",
    "misc science": "Other Science",
    "math": "Other Science",
    "mathematics": "Other Science",
    "astronomy": "Other Science",
    "computer science": "Other Science",
    "earth science": "Other Science",
    "geology": "Other Science",
    "engineering": "Other Science",
    # Fine Arts
    "visual fine arts": "Visual Fine Arts",
    "visual arts": "Visual Fine Arts",
    "visual art": "Visual Fine Arts",
    "painting": "Visual Fine Arts",
    "sculpture": "Visual Fine Arts",
    "auditory fine arts": "Auditory Fine Arts",
    "auditory arts": "Auditory Fine Arts",
    "classical music": "Auditory Fine Arts",
    "music": "Auditory Fine Arts",
    "other fine arts": "Other Fine Arts",
    "other arts": "Other Fine Arts",
    "other art": "Other Fine Arts",
    "misc arts": "Other Fine Arts",
    "architecture": "Other Fine Arts",
    "dance": "Other Fine Arts",
    "film": "Other Fine Arts",
    "jazz": "Other Fine Arts",
    "musicals": "Other Fine Arts",
    "opera": "Other Fine Arts",
    "photography": "Other Fine Arts",
    # Beliefs and thought
    "religion": "Religion",
    "mythology": "Mythology",
    "myth": "Mythology",
    "philosophy": "Philosophy",
    "philo": "Philosophy",
    # Social science
    "social science": "Social Science",
    "economics": "Social Science",
    "psychology": "Social Science",
    "linguistics": "Social Science",
    "sociology": "Social Science",
    "anthropology": "Social Science",
    # Everything else
    "current events": "Current Events",
    "ce": "Current Events",
    "geography": "Geography",
    "geo": "Geography",
    "other academic": "Other Academic",
    "trash": "Trash",
    "pop culture": "Trash",
    "popular culture": "Trash",
    "sports": "Trash",
    # Generic fallbacks
    "literature": "Other Literature",
    "lit": "Other Literature",
    "drama": "Other Literature",
    "poetry": "Other Literature",
    "history": "Other History",
    "science": "Other Science",
    "fine arts": "Other Fine Arts",
    "arts": "Other Fine Arts",
})

STANDARDIZE_ALTERNATE_SUBCATEGORIES = MappingProxyType({
    # Literature
    "drama": "Drama",
    "play": "Drama",
    "long fiction": "Long Fiction",
    "novel": "Long Fiction",
    "poetry": "Poetry",
    "poem": "Poetry",
    "short fiction": "Short Fiction",
    "short story": "Short Fiction",
    "misc literature": "Misc Literature",
    "misc lit": "Misc Literature",
    # Other science
    "math": "Math",
    "mathematics": "Math",
    "astronomy": "Astronomy",
    "computer science": "Computer Science",
    "earth science": "Earth Science",
    "geology": "Earth Science",
    "engineering": "Engineering",
    "misc science": "Misc Science",
    # Other fine arts
    "architecture": "Architecture",
    "dance": "Dance",
    "ballet": "Dance",
    "film": "Film",
    "jazz": "Jazz",
    "musicals": "Musicals",
    "musical": "Musicals",
    "opera": "Opera",
    "photography": "Photography",
    "misc arts": "Misc Arts",
    # Social science
    "anthropology": "Anthropology",
    "economics": "Economics",
    "linguistics": "Linguistics",
    "psychology": "Psychology",
    "sociology": "Sociology",
    "other social science": "Other Social Science",
})


def category_for(subcategory: str) -> str:
    """Category of a subcategory, or "" when it is not in the taxonomy."""
    return SUBCATEGORY_TO_CATEGORY.get(subcategory, "")
