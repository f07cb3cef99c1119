"""
Pytest fixtures for KM RDF Import tests.
"""

import pytest
from rdflib import Literal, Namespace
from rdflib.namespace import RDF

from km_rdf_import.audit import get_audit_log
from km_rdf_import.knowledge_model import (
    Annotation,
    Answer,
    Chapter,
    Choice,
    KnowledgeModel,
    ListQuestion,
    MultiChoiceQuestion,
    OptionsQuestion,
    ValueQuestion,
)
from km_rdf_import.triple_store import Statement

EX = Namespace("http://example.org/")


class ListTripleStore:
    """Triple store over a plain list; preserves insertion order exactly."""

    def __init__(self, triples=None):
        self.statements = [Statement(s, p, o) for s, p, o in (triples or [])]
        self.queries = []

    def statements_matching(self, subject=None, predicate=None, obj=None, source=None):
        self.queries.append((subject, predicate, obj, source))
        return [
            st for st in self.statements
            if (subject is None or st.subject == subject)
            and (predicate is None or st.predicate == predicate)
            and (obj is None or st.object == obj)
            and (source is None or st.graph == source)
        ]


class RecordingSink:
    """Reply sink that records every call with deterministic item ids."""

    def __init__(self):
        self.calls = []
        self._counter = 0

    def add_item(self, path):
        self._counter += 1
        item_uuid = f"item-{self._counter}"
        self.calls.append(("add_item", list(path), item_uuid))
        return item_uuid

    def set_reply(self, path, value, reply_type=None):
        self.calls.append(("set_reply", list(path), value))

    @property
    def replies(self):
        return [(path, value) for kind, path, value in self.calls if kind == "set_reply"]

    @property
    def items(self):
        return [(path, item) for kind, path, item in self.calls if kind == "add_item"]


def ann(key, value):
    return Annotation(key=key, value=value)


def make_km(chapters, questions=(), answers=(), choices=()):
    """Build a KnowledgeModel from entity lists; chapter order is list order."""
    return KnowledgeModel(
        chapter_uuids=[c.uuid for c in chapters],
        chapters={c.uuid: c for c in chapters},
        questions={q.uuid: q for q in questions},
        answers={a.uuid: a for a in answers},
        choices={c.uuid: c for c in choices},
    )


@pytest.fixture
def sink():
    """Recording reply sink."""
    return RecordingSink()


@pytest.fixture
def person_km():
    """Top-level person list with a name value question."""
    return make_km(
        chapters=[Chapter("ch1", ["q-people"])],
        questions=[
            ListQuestion("q-people", [ann("rdfType", str(EX.Person))], ["q-name"]),
            ValueQuestion("q-name", [ann("rdfProperty", str(EX.name))]),
        ],
    )


@pytest.fixture
def person_triples():
    """Alice has a name, Bob does not."""
    return [
        (EX.alice, RDF.type, EX.Person),
        (EX.alice, EX.name, Literal("Alice")),
        (EX.bob, RDF.type, EX.Person),
    ]


@pytest.fixture
def smoker_km():
    """Options question about smoking with yes/no answers."""
    return make_km(
        chapters=[Chapter("ch1", [])],
        questions=[
            OptionsQuestion("q-smokes", [ann("rdfProperty", str(EX.smokes))], ["a1", "a2"]),
        ],
        answers=[
            Answer("a1", [ann("rdfValue", str(EX.yes))]),
            Answer("a2", [ann("rdfValue", str(EX.no))]),
        ],
    )


@pytest.fixture
def languages_km():
    """Multi-choice question about spoken languages."""
    return make_km(
        chapters=[Chapter("ch1", [])],
        questions=[
            MultiChoiceQuestion("q-lang", [ann("rdfProperty", str(EX.speaks))], ["c-en", "c-cs", "c-de"]),
        ],
        choices=[
            Choice("c-en", [ann("rdfValue", str(EX.English))]),
            Choice("c-cs", [ann("rdfValue", str(EX.Czech))]),
            Choice("c-de", [ann("rdfValue", str(EX.German))]),
        ],
    )


@pytest.fixture
def km_document():
    """Knowledge model in the host application's JSON shape."""
    return {
        "chapterUuids": ["ch1"],
        "entities": {
            "chapters": {
                "ch1": {"uuid": "ch1", "questionUuids": ["q-people"]},
            },
            "questions": {
                "q-people": {
                    "uuid": "q-people",
                    "questionType": "ListQuestion",
                    "annotations": [{"key": "rdfType", "value": str(EX.Person)}],
                    "itemTemplateQuestionUuids": ["q-name", "q-smokes"],
                },
                "q-name": {
                    "uuid": "q-name",
                    "questionType": "ValueQuestion",
                    "annotations": [{"key": "rdfProperty", "value": str(EX.name)}],
                },
                "q-smokes": {
                    "uuid": "q-smokes",
                    "questionType": "OptionsQuestion",
                    "annotations": [{"key": "rdfProperty", "value": str(EX.smokes)}],
                    "answerUuids": ["a-yes", "a-no"],
                },
            },
            "answers": {
                "a-yes": {"uuid": "a-yes", "annotations": [{"key": "rdfValue", "value": str(EX.yes)}]},
                "a-no": {"uuid": "a-no", "annotations": [{"key": "rdfValue", "value": str(EX.no)}]},
            },
            "choices": {},
        },
    }


@pytest.fixture
def mock_health_response():
    """Mock health endpoint response."""
    return {"status": "ok"}


@pytest.fixture(autouse=True)
def clear_audit_log():
    """Clear audit log before each test."""
    get_audit_log().clear()
    yield
    get_audit_log().clear()
