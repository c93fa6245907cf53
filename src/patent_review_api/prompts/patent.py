"""Prompts for translating and reviewing patent documents."""

from typing import Iterable

from ..models.glossary import GlossaryTerm


SYSTEM_INSTRUCTION = "You are a helpful, professional AI assistant for patent attorneys."

NO_GLOSSARY_CONTEXT = "No specific glossary provided."


PATENT_TRANSLATION_PROMPT = """You are an expert Senior Patent Translator.
Task: Translate the attached patent document from {source_language} into {target_language}.

GUIDELINES:
1. **Format**: Maintain strict technical accuracy and legal tone.
2. **Segmentation**: Split the translation into logical segments.
   - Treat paragraph identifiers (e.g., "[0001]", "[0023]") as natural segment breaks.
   - Each segment should ideally be one paragraph or a distinct claim.
3. **Numbering Handling**:
   - **Preserve** paragraph identifiers (e.g., [0001]).
   - **Ignore/Remove** margin line numbers (e.g., 5, 10, 15) if they appear mid-sentence or disrupt the text flow. Do not let line numbers break a sentence into multiple segments.
4. **Glossary**: {glossary_context}
5. **Uncertainty Analysis**: CRITICAL: Identify any "uncertain phrases". These are terms that are ambiguous, potential neologisms, extremely complex, or where the translation might be shaky. Flag them with a suggested translation and the reason.

For every segment give:
- source_text: the original segment
- translated_text: its translation
- uncertainty_score: 0.0 (certain) to 1.0 (highly uncertain)
- flagged_terms: list of {{term, suggestion, reason}}

Output Format: Return the segments in document order."""


TERM_SUGGESTION_PROMPT = """The term "{term}" appears in the following context: "{context}".
Provide 3 alternative professional translations for this term in {target_language} specifically for a patent/legal context.
Return only the list of comma-separated strings."""


def format_glossary_context(glossary: Iterable[GlossaryTerm]) -> str:
    """Render approved terms as prompt context, one ``- source: target`` line each."""
    lines = [f"- {t.source}: {t.target}" for t in glossary]
    if not lines:
        return NO_GLOSSARY_CONTEXT
    return "Use the following technical glossary for consistency:\n" + "\n".join(lines)


def get_translation_prompt(
    target_language: str,
    glossary: Iterable[GlossaryTerm] = (),
    source_language: str = "English",
) -> str:
    """
    Generate the document translation prompt.

    Args:
        target_language: Language to translate into
        glossary: Approved term pairs to keep consistent
        source_language: Language of the uploaded document

    Returns:
        Formatted prompt string
    """
    return PATENT_TRANSLATION_PROMPT.format(
        source_language=source_language,
        target_language=target_language,
        glossary_context=format_glossary_context(glossary),
    )


def get_term_suggestion_prompt(term: str, context: str, target_language: str) -> str:
    return TERM_SUGGESTION_PROMPT.format(term=term, context=context, target_language=target_language)
