"""Adapter between Segments and LangChain documents."""

from typing import Iterable, List

from langchain_core.documents import Document

from notecorpus.domain import Segment
from notecorpus.shared.hashing import HashingService, Slugifier


class LangChainAdapter:
    """Convert segments to ``langchain_core`` Documents and back.

    Example:
        >>> docs = LangChainAdapter.to_documents(store.all())
        >>> retriever_store.add_documents(docs)
    """

    @staticmethod
    def to_document(segment: Segment) -> Document:
        metadata = {
            "segment_id": segment.id,
            "heading": segment.heading,
            "anchor": Slugifier.slugify(segment.heading),
            "source": segment.source,
            "ordinal": segment.ordinal,
            "tags": list(segment.tags),
            "content_hash": segment.content_hash,
        }
        if segment.source_url:
            metadata["source_url"] = segment.source_url
        return Document(page_content=segment.body, metadata=metadata, id=segment.id)

    @classmethod
    def to_documents(cls, segments: Iterable[Segment]) -> List[Document]:
        return [cls.to_document(segment) for segment in segments]

    @staticmethod
    def from_document(document: Document) -> Segment:
        meta = document.metadata or {}
        body = document.page_content or ""
        segment_id = meta.get("segment_id") or document.id
        if not segment_id:
            raise ValueError("document carries no segment id")
        return Segment(
            id=segment_id,
            heading=meta.get("heading") or "",
            source_url=meta.get("source_url"),
            body=body,
            source=meta.get("source") or "",
            ordinal=int(meta.get("ordinal") or 0),
            tags=tuple(meta.get("tags") or ()),
            content_hash=HashingService.content_hash(body),
        )


__all__ = ["LangChainAdapter"]
