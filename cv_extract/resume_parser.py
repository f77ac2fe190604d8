"""Resume parser for cv_extract.

Extracts candidate fields from decoded resume text using spaCy NER for
names and countries, reference-list scans for languages, and the regex
helpers in ``utils`` for everything else.
"""

from __future__ import annotations

import logging
import re
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache, partial
from typing import Any, Callable, Dict, List, Optional, Tuple

import spacy

from .config import get_settings
from .errors import ExtractionError
from .records import ExtractedRecord
from .utils import (
    extract_email,
    extract_linkedin,
    extract_phone,
    extract_salary,
    extract_telegram,
    extract_whatsapp,
    load_reference_list,
)

logger = logging.getLogger(__name__)

PERSON = "person"
PLACE = "place"

ENTITY_LABELS = {
    PERSON: ("PERSON",),
    PLACE: ("GPE", "LOC"),
}

COUNTRIES_FILE = "countries.csv"
LANGUAGES_FILE = "languages.csv"


class SpacyEntityRecognizer:
    """Named-entity lookup backed by a spaCy pipeline.

    Anything with a ``recognize_entities(text, kind)`` method returning an
    ordered list of strings can be used in its place.
    """

    def __init__(self, model_name: Optional[str] = None) -> None:
        self.model_name = model_name or get_settings().spacy_model
        self._nlp = None
        self._load_failed = False
        self._lock = threading.Lock()

    @property
    def nlp(self):
        if self._nlp is None:
            with self._lock:
                if self._nlp is None:
                    logger.info("Loading spaCy model %s", self.model_name)
                    try:
                        self._nlp = spacy.load(self.model_name)
                    except OSError:
                        if not self._load_failed:
                            self._load_failed = True
                            logger.error(
                                "spaCy model %s is not installed; names and countries will be empty. "
                                "Install it with: python -m spacy download %s",
                                self.model_name,
                                self.model_name,
                            )
                        raise
        return self._nlp

    def recognize_entities(self, text: str, kind: str) -> List[str]:
        if not text:
            return []
        labels = ENTITY_LABELS[kind]
        doc = self.nlp(text)
        found = [ent.text.strip() for ent in doc.ents if ent.label_ in labels]
        return [f for f in found if f]


@lru_cache(maxsize=None)
def get_recognizer() -> SpacyEntityRecognizer:
    return SpacyEntityRecognizer()


def extract_full_name(text: str, recognizer) -> Tuple[Optional[str], Optional[str]]:
    """Split the first PERSON entity into (first name, last name).

    When the first entity is a single word, a second single-word PERSON
    entity is taken as the last name.
    """
    people = recognizer.recognize_entities(text, PERSON)
    if not people:
        return None, None
    tokens = people[0].split()
    if not tokens:
        return None, None
    first_name = tokens[0]
    last_name = " ".join(tokens[1:]) or None
    if last_name is None and len(people) > 1 and len(people[1].split()) == 1:
        last_name = people[1]
    return first_name, last_name


def extract_country(text: str, recognizer) -> Optional[str]:
    """Return the first ISO country (in list order) named among the place entities."""
    places = recognizer.recognize_entities(text, PLACE)
    locations = {part.strip() for place in places for part in place.split(",")}
    for country in load_reference_list(COUNTRIES_FILE):
        if country in locations:
            return country
    return None


@lru_cache(maxsize=None)
def _language_patterns() -> Tuple[Tuple[str, re.Pattern], ...]:
    return tuple(
        (name, re.compile(rf"\b{re.escape(name)}\b", re.I))
        for name in load_reference_list(LANGUAGES_FILE)
    )


def extract_languages(text: str) -> Optional[Tuple[str, ...]]:
    """All reference languages mentioned as whole words, in list order."""
    if not text:
        return None
    found = tuple(name for name, pattern in _language_patterns() if pattern.search(text))
    return found or None


def _guarded(field: str, func: Callable[[], Any]) -> Any:
    try:
        return func()
    except Exception as exc:
        logger.warning("%s", ExtractionError(field, exc), exc_info=True)
        return None


def extract_resume_data(
    text: str,
    recognizer=None,
    max_workers: Optional[int] = None,
) -> ExtractedRecord:
    """Run every field extractor over ``text`` and assemble the record.

    Args:
        text: Decoded resume text.
        recognizer: Entity recognizer; defaults to the shared spaCy one.
        max_workers: Thread pool size; defaults to the configured value.

    Returns:
        An ExtractedRecord. A field whose extractor fails is left as None.
    """
    recognizer = recognizer or get_recognizer()
    max_workers = max_workers or get_settings().extractor_workers

    tasks: Dict[str, Callable[[], Any]] = {
        "name": partial(extract_full_name, text, recognizer),
        "email": partial(extract_email, text),
        "phone_number": partial(extract_phone, text),
        "linkedin": partial(extract_linkedin, text),
        "country": partial(extract_country, text, recognizer),
        "languages": partial(extract_languages, text),
        "whatsapp": partial(extract_whatsapp, text),
        "telegram": partial(extract_telegram, text),
        "desired_salary": partial(extract_salary, text),
    }

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {field: pool.submit(_guarded, field, func) for field, func in tasks.items()}
        results = {field: future.result() for field, future in futures.items()}

    first_name, last_name = results.pop("name") or (None, None)
    return ExtractedRecord(first_name=first_name, last_name=last_name, **results)
