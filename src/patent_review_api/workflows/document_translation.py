"""The external translation call: document bytes in, ordered segments out."""

import base64
import logging
from typing import List, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from ..models.glossary import GlossaryTerm
from ..models.model_router import ModelRouter, get_model_router
from ..models.segment import DocumentTranslation, RawSegment
from ..prompts.patent import SYSTEM_INSTRUCTION, get_term_suggestion_prompt, get_translation_prompt


logger = logging.getLogger("patent_review_api.translation")


def build_document_messages(
    document: bytes,
    mime_type: str,
    glossary: Sequence[GlossaryTerm],
    target_language: str,
    source_language: str = "English",
) -> list:
    """Build the chat messages carrying the base64 document and the instructions."""
    prompt = get_translation_prompt(target_language, glossary, source_language)
    return [
        SystemMessage(content=SYSTEM_INSTRUCTION),
        HumanMessage(content=[
            {
                "type": "file",
                "source_type": "base64",
                "mime_type": mime_type,
                "data": base64.b64encode(document).decode("ascii"),
            },
            {"type": "text", "text": prompt},
        ]),
    ]


async def translate_document(
    model: BaseChatModel,
    document: bytes,
    mime_type: str,
    glossary: Sequence[GlossaryTerm],
    target_language: str,
    source_language: str = "English",
) -> List[RawSegment]:
    """Translate and segment a document in a single model call.

    Raises:
        ValueError: If the model returns nothing or output that does not fit the schema
    """
    messages = build_document_messages(document, mime_type, glossary, target_language, source_language)
    structured = model.with_structured_output(DocumentTranslation)
    result = await structured.ainvoke(messages)
    if result is None:
        raise ValueError("Empty response from LLM")
    if not isinstance(result, DocumentTranslation):
        result = DocumentTranslation.model_validate(result)
    return result.segments


def _content_text(response) -> str:
    text = getattr(response, "content", "") or ""
    if isinstance(text, list):
        text = "".join(p if isinstance(p, str) else str(p.get("text", "")) for p in text)
    return str(text)


async def suggest_term_improvement(
    model: BaseChatModel,
    term: str,
    context: str,
    target_language: str,
) -> List[str]:
    """Ask for alternative translations of ``term``; failures yield an empty list."""
    prompt = get_term_suggestion_prompt(term, context, target_language)
    try:
        response = await model.ainvoke([HumanMessage(content=prompt)])
    except Exception as e:
        logger.warning("Term suggestion failed for %r: %s", term, e)
        return []
    text = _content_text(response)
    return [s.strip() for s in text.split(",") if s.strip()]


class DocumentTranslator:
    """Binds a model name to ``translate_document``.

    The model is built per call so a missing credential surfaces as a failure
    of that request only.
    """

    def __init__(
        self,
        model_name: str,
        source_language: str = "English",
        model_router: Optional[ModelRouter] = None,
    ):
        self.model_name = model_name
        self.source_language = source_language
        self._router = model_router or get_model_router()

    async def __call__(
        self,
        document: bytes,
        mime_type: str,
        glossary: Sequence[GlossaryTerm],
        target_language: str,
    ) -> List[RawSegment]:
        model = self._router.get_model(self.model_name)
        logger.info("Translating %d bytes into %s with %s", len(document), target_language, self.model_name)
        return await translate_document(
            model,
            document,
            mime_type,
            glossary,
            target_language,
            source_language=self.source_language,
        )
