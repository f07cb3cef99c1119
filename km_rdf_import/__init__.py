"""
KM RDF Import - fill knowledge model replies from an RDF graph.

Maps RDF triples onto a question tree using rdfType / rdfProperty /
rdfValue annotations on questions, answers and choices.

Example:
    from km_rdf_import import KMCrawler, KnowledgeModel, ReplyCollector
    from km_rdf_import import RdflibTripleStore, load_graph

    store = RdflibTripleStore(load_graph("people.ttl"))
    collector = ReplyCollector()
    KMCrawler(store, km, collector).crawl()
    print(collector.to_text())
"""

from .audit import (
    CrawlAudit,
    CrawlEvent,
    CrawlEventKind,
    SkipReason,
    get_audit_log,
)
from .client import (
    HostClient,
    AsyncHostClient,
    HostResult,
    DEFAULT_BASE_URL,
)
from .crawler import KMCrawler
from .importer import (
    ReplySink,
    ReplyCollector,
    Reply,
    ReplyType,
)
from .knowledge_model import (
    KnowledgeModel,
    QuestionType,
    Annotation,
    Chapter,
    Answer,
    Choice,
    ListQuestion,
    OptionsQuestion,
    MultiChoiceQuestion,
    ValueQuestion,
    IntegrationQuestion,
)
from .triple_store import (
    TripleStore,
    RdflibTripleStore,
    Statement,
    load_graph,
    parse_graph,
)

__version__ = "0.1.0"
__all__ = [
    # Crawler
    "KMCrawler",
    # Knowledge model
    "KnowledgeModel",
    "QuestionType",
    "Annotation",
    "Chapter",
    "Answer",
    "Choice",
    "ListQuestion",
    "OptionsQuestion",
    "MultiChoiceQuestion",
    "ValueQuestion",
    "IntegrationQuestion",
    # Triple store
    "TripleStore",
    "RdflibTripleStore",
    "Statement",
    "load_graph",
    "parse_graph",
    # Replies
    "ReplySink",
    "ReplyCollector",
    "Reply",
    "ReplyType",
    # Host
    "HostClient",
    "AsyncHostClient",
    "HostResult",
    "DEFAULT_BASE_URL",
    # Audit
    "CrawlAudit",
    "CrawlEvent",
    "CrawlEventKind",
    "SkipReason",
    "get_audit_log",
]
