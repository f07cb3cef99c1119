"""
KM Crawler - maps an RDF graph onto a knowledge model.

Walks chapters and questions in document order. Each question variant has
its own matching policy, driven by the ``rdfType``, ``rdfProperty`` and
``rdfValue`` annotations on questions, answers and choices. Matches are
written to a ReplySink; everything else is a silent skip.

``path`` and ``subject`` are passed down by value, so no state is shared
between sibling branches.
"""

from rdflib import URIRef
from rdflib.namespace import RDF
from rdflib.term import Node

from .audit import CrawlAudit, SkipReason, get_audit_log
from .importer import ReplySink, ReplyType
from .knowledge_model import (
    Annotation,
    IntegrationQuestion,
    KnowledgeModel,
    ListQuestion,
    MultiChoiceQuestion,
    OptionsQuestion,
    Question,
    ValueQuestion,
)
from .triple_store import TripleStore

RDF_TYPE_KEY = "rdfType"
RDF_PROPERTY_KEY = "rdfProperty"
RDF_VALUE_KEY = "rdfValue"


def get_annotation(annotations: list[Annotation], key: str) -> str | None:
    """Value of the first annotation with ``key``, or None if it is absent or empty."""
    annotation = next((a for a in annotations if a.key == key), None)
    if annotation is not None and annotation.value:
        return annotation.value
    return None


def _get_rdf_annotation(annotations: list[Annotation], key: str) -> URIRef | None:
    value = get_annotation(annotations, key)
    return URIRef(value) if value is not None else None


def get_rdf_type(annotations: list[Annotation]) -> URIRef | None:
    return _get_rdf_annotation(annotations, RDF_TYPE_KEY)


def get_rdf_property(annotations: list[Annotation]) -> URIRef | None:
    return _get_rdf_annotation(annotations, RDF_PROPERTY_KEY)


def get_rdf_value(annotations: list[Annotation]) -> URIRef | None:
    return _get_rdf_annotation(annotations, RDF_VALUE_KEY)


class KMCrawler:
    """
    Crawls a knowledge model against a triple store.

    Errors raised by the store or the sink are not caught and abort the
    crawl.
    """

    def __init__(
        self,
        store: TripleStore,
        knowledge_model: KnowledgeModel,
        sink: ReplySink,
        audit: CrawlAudit | None = None,
    ):
        """
        Initialize the crawler.

        Args:
            store: Triple store to query
            knowledge_model: Question tree to fill in
            sink: Receives created items and replies
            audit: Event log (the global audit log by default)
        """
        self.store = store
        self.km = knowledge_model
        self.sink = sink
        self.audit = audit if audit is not None else get_audit_log()

    def crawl(self) -> None:
        """Process every chapter in document order."""
        for chapter_uuid in self.km.chapter_uuids:
            self._process_chapter(chapter_uuid)

    def _process_chapter(self, chapter_uuid: str) -> None:
        chapter = self.km.get_chapter(chapter_uuid)
        if chapter is None:
            self.audit.skipped([chapter_uuid], SkipReason.MISSING_REFERENCE)
            return

        for question_uuid in chapter.question_uuids:
            self.process_question([chapter_uuid], question_uuid)

    def process_question(self, path: list[str], question_uuid: str, subject: Node | None = None) -> None:
        """
        Dispatch one question to the handler for its variant.

        Args:
            path: Reply path down to (not including) the question
            question_uuid: Question to process
            subject: RDF resource in scope, None at chapter level
        """
        question = self.km.get_question(question_uuid)
        if question is None:
            self.audit.skipped([*path, question_uuid], SkipReason.MISSING_REFERENCE)
            return

        if isinstance(question, ListQuestion):
            self._process_list_question(path, question, subject)
        elif isinstance(question, OptionsQuestion):
            self._process_options_question(path, question, subject)
        elif isinstance(question, MultiChoiceQuestion):
            self._process_multi_choice_question(path, question, subject)
        elif isinstance(question, (ValueQuestion, IntegrationQuestion)):
            self._process_value_question(path, question, subject)
        else:
            raise TypeError(f"Unhandled question type: {type(question).__name__}")

    def _process_list_question(self, path: list[str], question: ListQuestion, subject: Node | None) -> None:
        question_path = [*path, question.uuid]

        # Only lists annotated with an RDF type are backed by the graph
        rdf_type = get_rdf_type(question.annotations)
        if rdf_type is None:
            self.audit.skipped(question_path, SkipReason.MISSING_ANNOTATION)
            return

        rdf_property = get_rdf_property(question.annotations)
        if rdf_property is not None and subject is not None:
            # Nested collection: objects reachable from the current subject
            stmts = self.store.statements_matching(subject, rdf_property, None, None)
        else:
            # Top level collection: every resource of the annotated type
            stmts = self.store.statements_matching(None, RDF.type, rdf_type, None)

        if not stmts:
            self.audit.skipped(question_path, SkipReason.NO_MATCH)
            return

        for stmt in stmts:
            item_uuid = self.sink.add_item(question_path)
            self.audit.item_created(question_path, item_uuid)

            item_path = [*question_path, item_uuid]
            # Items are bound to the statement subject in both branches.
            # TODO: confirm with product whether nested lists should descend into stmt.object
            for template_uuid in question.item_template_question_uuids:
                self.process_question(item_path, template_uuid, stmt.subject)

    def _process_options_question(self, path: list[str], question: OptionsQuestion, subject: Node | None) -> None:
        question_path = [*path, question.uuid]

        if subject is None:
            self.audit.skipped(question_path, SkipReason.MISSING_SUBJECT)
            return

        rdf_property = get_rdf_property(question.annotations)
        if rdf_property is None:
            self.audit.skipped(question_path, SkipReason.MISSING_ANNOTATION)
            return

        stmts = self.store.statements_matching(subject, rdf_property, None, None)
        if not stmts:
            self.audit.skipped(question_path, SkipReason.NO_MATCH)
            return

        # Single select: the first statement decides, the rest are ignored
        value = str(stmts[0].object)
        for answer_uuid in question.answer_uuids:
            answer = self.km.get_answer(answer_uuid)
            if answer is None:
                continue

            rdf_value = get_rdf_value(answer.annotations)
            if rdf_value is not None and str(rdf_value) == value:
                self.sink.set_reply(question_path, answer_uuid, reply_type=ReplyType.ANSWER)
                self.audit.reply_set(question_path, answer_uuid)
                return

        self.audit.skipped(question_path, SkipReason.NO_MATCH)

    def _process_multi_choice_question(
        self, path: list[str], question: MultiChoiceQuestion, subject: Node | None
    ) -> None:
        question_path = [*path, question.uuid]

        if subject is None:
            self.audit.skipped(question_path, SkipReason.MISSING_SUBJECT)
            return

        rdf_property = get_rdf_property(question.annotations)
        if rdf_property is None:
            self.audit.skipped(question_path, SkipReason.MISSING_ANNOTATION)
            return

        stmts = self.store.statements_matching(subject, rdf_property, None, None)
        if not stmts:
            self.audit.skipped(question_path, SkipReason.NO_MATCH)
            return

        # Every statement counts; duplicates are kept
        choice_uuids = []
        for stmt in stmts:
            value = str(stmt.object)
            for choice_uuid in question.choice_uuids:
                choice = self.km.get_choice(choice_uuid)
                if choice is None:
                    continue

                rdf_value = get_rdf_value(choice.annotations)
                if rdf_value is not None and str(rdf_value) == value:
                    choice_uuids.append(choice.uuid)

        if not choice_uuids:
            self.audit.skipped(question_path, SkipReason.NO_MATCH)
            return

        self.sink.set_reply(question_path, choice_uuids, reply_type=ReplyType.MULTI_CHOICE)
        self.audit.reply_set(question_path, choice_uuids)

    def _process_value_question(self, path: list[str], question: Question, subject: Node | None) -> None:
        """Value and integration questions: first object found, verbatim."""
        question_path = [*path, question.uuid]

        rdf_property = get_rdf_property(question.annotations)
        if rdf_property is None:
            self.audit.skipped(question_path, SkipReason.MISSING_ANNOTATION)
            return

        # Without a subject this searches the whole graph for the property
        stmts = self.store.statements_matching(subject, rdf_property, None, None)
        if not stmts:
            self.audit.skipped(question_path, SkipReason.NO_MATCH)
            return

        value = str(stmts[0].object)
        self.sink.set_reply(question_path, value, reply_type=ReplyType.STRING)
        self.audit.reply_set(question_path, value)
