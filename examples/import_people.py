#!/usr/bin/env python3
"""
Example: Importing people from Turtle

Fills a small questionnaire (a list of people, each with a name and a
smoking status) from an RDF graph and prints the resulting replies.

Usage:
    python examples/import_people.py
"""

from km_rdf_import import (
    KMCrawler,
    KnowledgeModel,
    RdflibTripleStore,
    ReplyCollector,
    get_audit_log,
    parse_graph,
)

PEOPLE_TTL = """
@prefix ex: <http://example.org/> .

ex:alice a ex:Person ;
    ex:name "Alice" ;
    ex:smokes ex:no .

ex:bob a ex:Person ;
    ex:smokes ex:yes .
"""

KNOWLEDGE_MODEL = {
    "chapterUuids": ["chapter-people"],
    "entities": {
        "chapters": {
            "chapter-people": {"questionUuids": ["q-people"]},
        },
        "questions": {
            "q-people": {
                "questionType": "ListQuestion",
                "annotations": [{"key": "rdfType", "value": "http://example.org/Person"}],
                "itemTemplateQuestionUuids": ["q-name", "q-smokes"],
            },
            "q-name": {
                "questionType": "ValueQuestion",
                "annotations": [{"key": "rdfProperty", "value": "http://example.org/name"}],
            },
            "q-smokes": {
                "questionType": "OptionsQuestion",
                "annotations": [{"key": "rdfProperty", "value": "http://example.org/smokes"}],
                "answerUuids": ["a-yes", "a-no"],
            },
        },
        "answers": {
            "a-yes": {"annotations": [{"key": "rdfValue", "value": "http://example.org/yes"}]},
            "a-no": {"annotations": [{"key": "rdfValue", "value": "http://example.org/no"}]},
        },
    },
}


def demo_import():
    print("=" * 50)
    print("  Example: Importing people from Turtle")
    print("=" * 50)
    print()

    store = RdflibTripleStore(parse_graph(PEOPLE_TTL))
    km = KnowledgeModel.from_dict(KNOWLEDGE_MODEL)
    collector = ReplyCollector()

    KMCrawler(store, km, collector).crawl()

    print(collector.to_text())
    print()
    for event in get_audit_log().events:
        print(event)


if __name__ == "__main__":
    demo_import()
