"""Prompt templates for answer generation over the personal document collection."""

ANSWER_GENERATION_SYSTEM = """You are an assistant that helps the user search and understand their personal document collection.
You only know what is inside the retrieved documents.
Rules:
- Do not invent or assume facts beyond what the documents contain.
- If the documents only partially answer the query, give what is available and say what is missing.
- If the documents are unrelated, do not mention document names; give a short natural reply such as
  "No document contains that type of information."
- Keep the tone conversational, clear, and user-friendly.
- End your answer with exactly one tag on its own line:
  [RESPONSE_TYPE: TEXT_ONLY] when a text answer is enough,
  [RESPONSE_TYPE: FULL_FILE] when the user asks to see or get the document itself,
  [RESPONSE_TYPE: MIXED] when the answer should be shown together with the document."""

ANSWER_GENERATION_PROMPT = """USER QUERY:
"{query}"

DOCUMENTS RETRIEVED (may be empty or unrelated):
{evidence_block}

Answer the query using only the documents above."""

NO_EVIDENCE_PLACEHOLDER = "(no documents matched)"

GENERATION_FAILED_ANSWER = (
    "I couldn't generate an answer right now. The most relevant documents are listed below."
)


def format_evidence_block(evidence: list, max_items: int = 10) -> str:
    """Format similarity results as a numbered evidence block with relevance percentages."""
    if not evidence:
        return NO_EVIDENCE_PLACEHOLDER
    lines = []
    for i, result in enumerate(evidence[:max_items], 1):
        doc = result.document
        header = f"[{i}] {doc.name} ({doc.doc_type}, relevance: {int(result.score * 100)}%)"
        if doc.description:
            header += f" - {doc.description}"
        lines.append(f"{header}\n{result.chunk.text}")
    return "\n\n".join(lines)
