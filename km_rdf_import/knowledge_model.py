"""
Knowledge Model - read-only question tree consumed by the crawler.

Chapters hold questions; questions hold answers (options), choices
(multi-choice) or nested item-template questions (lists). Every question,
answer and choice carries key/value annotations describing how it maps
onto RDF.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class QuestionType(Enum):
    """Closed set of question variants."""
    LIST = "ListQuestion"
    OPTIONS = "OptionsQuestion"
    MULTI_CHOICE = "MultiChoiceQuestion"
    VALUE = "ValueQuestion"
    INTEGRATION = "IntegrationQuestion"


@dataclass(frozen=True)
class Annotation:
    """A key/value tag on a Knowledge Model node."""
    key: str
    value: str


@dataclass(frozen=True)
class Chapter:
    uuid: str
    question_uuids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Answer:
    uuid: str
    annotations: list[Annotation] = field(default_factory=list)


@dataclass(frozen=True)
class Choice:
    uuid: str
    annotations: list[Annotation] = field(default_factory=list)


@dataclass(frozen=True)
class ListQuestion:
    uuid: str
    annotations: list[Annotation] = field(default_factory=list)
    item_template_question_uuids: list[str] = field(default_factory=list)

    question_type = QuestionType.LIST


@dataclass(frozen=True)
class OptionsQuestion:
    uuid: str
    annotations: list[Annotation] = field(default_factory=list)
    answer_uuids: list[str] = field(default_factory=list)

    question_type = QuestionType.OPTIONS


@dataclass(frozen=True)
class MultiChoiceQuestion:
    uuid: str
    annotations: list[Annotation] = field(default_factory=list)
    choice_uuids: list[str] = field(default_factory=list)

    question_type = QuestionType.MULTI_CHOICE


@dataclass(frozen=True)
class ValueQuestion:
    uuid: str
    annotations: list[Annotation] = field(default_factory=list)

    question_type = QuestionType.VALUE


@dataclass(frozen=True)
class IntegrationQuestion:
    uuid: str
    annotations: list[Annotation] = field(default_factory=list)

    question_type = QuestionType.INTEGRATION


Question = Union[
    ListQuestion,
    OptionsQuestion,
    MultiChoiceQuestion,
    ValueQuestion,
    IntegrationQuestion,
]


def _entity_table(entities: dict, name: str) -> dict[str, dict]:
    """An entity table keyed by uuid whose entries are all objects."""
    table = entities.get(name, {})
    if not isinstance(table, dict):
        raise ValueError(f"Knowledge model entities.{name} must be an object keyed by uuid")
    for uuid, entry in table.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Knowledge model entities.{name}.{uuid} must be an object")
    return table


def _uuid_list(data: dict, key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list, got {type(value).__name__}")
    return list(value)


def _parse_annotations(data: dict) -> list[Annotation]:
    annotations = data.get("annotations", [])
    if not isinstance(annotations, list) or not all(isinstance(a, dict) for a in annotations):
        raise ValueError("annotations must be a list of objects")
    return [
        Annotation(key=a.get("key", ""), value=a.get("value", ""))
        for a in annotations
    ]


def _parse_question(data: dict) -> Question | None:
    """Build the question variant named by ``questionType``, None if the type is unknown."""
    uuid = data["uuid"]
    try:
        question_type = QuestionType(data.get("questionType"))
    except ValueError:
        return None

    annotations = _parse_annotations(data)

    if question_type is QuestionType.LIST:
        return ListQuestion(uuid, annotations, _uuid_list(data, "itemTemplateQuestionUuids"))
    elif question_type is QuestionType.OPTIONS:
        return OptionsQuestion(uuid, annotations, _uuid_list(data, "answerUuids"))
    elif question_type is QuestionType.MULTI_CHOICE:
        return MultiChoiceQuestion(uuid, annotations, _uuid_list(data, "choiceUuids"))
    elif question_type is QuestionType.VALUE:
        return ValueQuestion(uuid, annotations)
    else:
        return IntegrationQuestion(uuid, annotations)


class KnowledgeModel:
    """
    Loaded knowledge model with id lookups.

    Lookups return None for unknown ids; the crawler treats every miss as
    a silent no-op.
    """

    def __init__(
        self,
        chapter_uuids: list[str],
        chapters: dict[str, Chapter] | None = None,
        questions: dict[str, Question] | None = None,
        answers: dict[str, Answer] | None = None,
        choices: dict[str, Choice] | None = None,
    ):
        self.chapter_uuids = list(chapter_uuids)
        self.chapters = chapters or {}
        self.questions = questions or {}
        self.answers = answers or {}
        self.choices = choices or {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KnowledgeModel":
        """
        Load a knowledge model from the host application's JSON shape.

        Questions of a type this package does not know are left out, so
        references to them resolve to None like any other missing id.

        Args:
            data: Dict with ``chapterUuids`` and ``entities`` holding
                ``chapters``, ``questions``, ``answers`` and ``choices``
                keyed by uuid

        Returns:
            KnowledgeModel

        Raises:
            ValueError: If the document is not shaped like a knowledge
                model (missing ``entities``, tables or entries that are
                not objects, id lists that are not lists)
        """
        if not isinstance(data, dict):
            raise ValueError("Knowledge model document must be an object")

        entities = data.get("entities")
        if not isinstance(entities, dict):
            raise ValueError("Knowledge model document has no 'entities' object")

        chapters = {
            uuid: Chapter(uuid=c.get("uuid", uuid), question_uuids=_uuid_list(c, "questionUuids"))
            for uuid, c in _entity_table(entities, "chapters").items()
        }
        questions = {}
        for uuid, q in _entity_table(entities, "questions").items():
            question = _parse_question({"uuid": uuid, **q})
            if question is not None:
                questions[uuid] = question
        answers = {
            uuid: Answer(uuid=a.get("uuid", uuid), annotations=_parse_annotations(a))
            for uuid, a in _entity_table(entities, "answers").items()
        }
        choices = {
            uuid: Choice(uuid=c.get("uuid", uuid), annotations=_parse_annotations(c))
            for uuid, c in _entity_table(entities, "choices").items()
        }

        return cls(
            chapter_uuids=_uuid_list(data, "chapterUuids"),
            chapters=chapters,
            questions=questions,
            answers=answers,
            choices=choices,
        )

    def get_chapter(self, uuid: str) -> Chapter | None:
        return self.chapters.get(uuid)

    def get_question(self, uuid: str) -> Question | None:
        return self.questions.get(uuid)

    def get_answer(self, uuid: str) -> Answer | None:
        return self.answers.get(uuid)

    def get_choice(self, uuid: str) -> Choice | None:
        return self.choices.get(uuid)
