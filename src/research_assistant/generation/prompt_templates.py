"""Prompt templates for research completions."""

RESEARCH_SYSTEM = """You are a careful research assistant. Give comprehensive, well-organized answers.
Cite external sources inline whenever you rely on them."""

CITATION_INSTRUCTION = (
    "Please provide a comprehensive response with citations where applicable. "
    "Format citations as [CITATION]{title}|{url}|{text} if you reference external sources."
)


def build_research_prompt(prompt: str) -> str:
    """Append the citation marker instruction to a user prompt."""
    return f"{prompt}\n\n{CITATION_INSTRUCTION}"
