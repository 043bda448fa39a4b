"""
Statistical Classifier
======================
Naive-Bayes fallback used when a question has no usable category tag.

The frequency model is pre-built and shipped as package data
(``data/classifier_model.json``). It is loaded once per process and shared
read-only by every parser instance; nothing here trains or updates it.

Modes:
    - subcategory: top-level subcategory of any question
    - alternate-subcategory: literary form, bound to a category
    - subsubcategory: finer label, bound to a subcategory
"""

from __future__ import annotations

import json
import logging
import math
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, model_validator

from .taxonomy import (
    ALTERNATE_SUBCATEGORIES,
    SUBCATEGORIES,
    SUBSUBCATEGORIES,
    category_for,
)

logger = logging.getLogger(__name__)

SMOOTHING = 0.01

MODE_SUBCATEGORY = "subcategory"
MODE_ALTERNATE_SUBCATEGORY = "alternate-subcategory"
MODE_SUBSUBCATEGORY = "subsubcategory"
MODES = (MODE_SUBCATEGORY, MODE_ALTERNATE_SUBCATEGORY, MODE_SUBSUBCATEGORY)

STOPWORDS = frozenset("""
a about above after again against all also am an and any are as at be
because been before being below between both but by can could did do does
doing down during each few for from further had has have having he her here
hers herself him himself his how i if in into is it its itself just me more
most my myself no nor not now of off on once only or other our ours
ourselves out over own same she should so some such than that the their
theirs them themselves then there these they this those through to too
under until up very was we were what when where which while who whom why
will with would you your yours yourself yourselves
answer answers name identify give points point ten fifteen twenty
each one two three first second third
""".split())

_MARKUP = re.compile(r"\{/?[biu]\}")
_NON_ALPHA = re.compile(r"[^a-z ]")


# ─── Model ────────────────────────────────────────────────────────────────────


class LabelModel(BaseModel):
    """Frequency tables for one label set."""
    labels: list[str]
    priors: dict[str, float]
    totals: dict[str, float]
    token_counts: dict[str, dict[str, float]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_labels(self) -> "LabelModel":
        for table_name in ("priors", "totals"):
            missing = set(self.labels) - set(getattr(self, table_name))
            if missing:
                raise ValueError(
                    f"{table_name} missing labels: {sorted(missing)}"
                )
        return self


class ClassifierModel(BaseModel):
    """The full static model: one LabelModel per mode and binding."""
    version: int = 1
    subcategory: LabelModel
    alternate_subcategory: dict[str, LabelModel] = Field(default_factory=dict)
    subsubcategory: dict[str, LabelModel] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_subcategories(self) -> "ClassifierModel":
        unknown = set(self.subcategory.labels) - set(SUBCATEGORIES)
        if unknown:
            raise ValueError(f"Unknown subcategory labels: {sorted(unknown)}")
        return self


def load_model(path: Union[str, Path]) -> ClassifierModel:
    """Load a classifier model from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return ClassifierModel.model_validate(json.load(f))


@lru_cache(maxsize=1)
def load_default_model() -> ClassifierModel:
    """The bundled model, loaded once per process."""
    source = resources.files("packet_parser") / "data" / "classifier_model.json"
    data = json.loads(source.read_text(encoding="utf-8"))
    model = ClassifierModel.model_validate(data)
    logger.debug(
        f"Loaded classifier model v{model.version} "
        f"({len(model.subcategory.token_counts)} tokens)"
    )
    return model


# ─── Classifier ───────────────────────────────────────────────────────────────


def tokenize(text: str) -> list[str]:
    """Lowercase, drop markup and punctuation, remove stopwords."""
    text = _MARKUP.sub(" ", text).lower().replace("\n", " ")
    text = _NON_ALPHA.sub("", text)
    return [t for t in text.split(" ") if t and t not in STOPWORDS]


class Classifier:
    """
    Smoothed naive-Bayes predictor over a static frequency model.

    Ties resolve to the first tied label in the model's label order, so a
    given model and text always produce the same label.
    """

    def __init__(self, model: Optional[ClassifierModel] = None):
        self.model = model or load_default_model()

    def _label_model(
        self, mode: str, category: str = "", subcategory: str = ""
    ) -> Optional[LabelModel]:
        if mode == MODE_SUBCATEGORY:
            return self.model.subcategory
        if mode == MODE_ALTERNATE_SUBCATEGORY:
            return self.model.alternate_subcategory.get(category)
        if mode == MODE_SUBSUBCATEGORY:
            return self.model.subsubcategory.get(subcategory)
        raise ValueError(f"Unknown classifier mode: {mode}")

    def scores(
        self,
        text: str,
        mode: str = MODE_SUBCATEGORY,
        category: str = "",
        subcategory: str = "",
    ) -> dict[str, float]:
        """Log-likelihood of every label, in label order."""
        table = self._label_model(mode, category, subcategory)
        if table is None:
            return {}

        tokens = [t for t in tokenize(text) if t in table.token_counts]
        prior_total = sum(table.priors[label] for label in table.labels)
        class_count = len(table.labels)

        scores = {}
        for label in table.labels:
            score = math.log(table.priors[label] / prior_total)
            denominator = math.log(table.totals[label] + SMOOTHING * class_count)
            for token in tokens:
                count = table.token_counts[token].get(label, 0)
                score += math.log(count + SMOOTHING) - denominator
            scores[label] = score
        return scores

    def classify(
        self,
        text: str,
        mode: str = MODE_SUBCATEGORY,
        category: str = "",
        subcategory: str = "",
    ) -> str:
        """
        Best label for ``text``.

        Args:
            text: Question text (markup is ignored).
            mode: One of "subcategory", "alternate-subcategory",
                "subsubcategory".
            category: Category the alternate subcategory belongs to.
            subcategory: Subcategory the sub-subcategory belongs to.

        Returns:
            The arg-max label, or "" when the mode has no labels for the
            given category/subcategory.
        """
        scores = self.scores(text, mode, category, subcategory)
        best_label = ""
        best_score = -math.inf
        for label, score in scores.items():
            if score > best_score:
                best_label, best_score = label, score
        return best_label

    def classify_question(self, text: str) -> tuple[str, str, str]:
        """Classify a whole question: (category, subcategory, alternate)."""
        subcategory = self.classify(text, MODE_SUBCATEGORY)
        category = category_for(subcategory)

        alternate_subcategory = ""
        if category in ALTERNATE_SUBCATEGORIES:
            alternate_subcategory = self.classify(
                text, MODE_ALTERNATE_SUBCATEGORY, category=category
            )
        elif subcategory in SUBSUBCATEGORIES:
            alternate_subcategory = self.classify(
                text, MODE_SUBSUBCATEGORY, subcategory=subcategory
            )

        return category, subcategory, alternate_subcategory
