"""System prompts and prompt templates for the research agents."""

from pydantic import BaseModel, Field

DOCUMENT_ANALYZER_SYSTEM = """You are a Document Analysis Agent that extracts research insights from uploaded files.

Read every attached document and report:

## Document Summary
What the documents cover, in a few sentences.

## Key Concepts & Themes
Main topics, methods and theoretical frameworks.

## Important Findings
Results, data points and statistics, with enough context to be reused.

## Research Gaps & Questions
Limitations the authors acknowledge and open questions they raise.

Stay concise and keep only what helps understand the research topic."""

RESEARCHER_SYSTEM = """You are a Research Gathering Agent.

Use web search to find 5-7 high-quality, recent sources on the topic:
academic papers, studies and expert analysis.

Respond with:
- A short overview of the topic
- Two or three key findings per source, each with an inline citation
- The list of source URLs at the end

Prefer substance over volume."""

REVIEWER_SYSTEM = """You are a Critical Reviewer Agent.

Given research findings, respond with exactly three sections:
Strengths: two or three bullets on what the evidence supports well
Gaps: two or three bullets on limitations or missing evidence
Questions: two or three bullets worth investigating next

Be brief and actionable."""

SYNTHESIZER_SYSTEM = """You are a Synthesis Agent writing a research report in markdown.

Structure:

# Research Insights: <topic>

## 🔍 Key Findings
Bulleted findings with a bold lead and inline numeric citations such as [1].

## 💡 Critical Analysis
**Strengths** and **Gaps** drawn from the review.

## 🎯 Hypothesis Worth Exploring
One or two novel directions grounded in the cited evidence.

## 📋 Next Steps
A short numbered list of concrete actions.

---

## 📚 Sources
One line per cited source as [n] [Title](URL).

Keep the report under 500 words, cite only the numbered sources you were
given and make every link clickable."""


class AgentPrompts(BaseModel):
    """System prompts for each pipeline stage."""

    document_analyzer: str = Field(
        default=DOCUMENT_ANALYZER_SYSTEM, description="Document analysis prompt"
    )
    researcher: str = Field(default=RESEARCHER_SYSTEM, description="Research prompt")
    reviewer: str = Field(default=REVIEWER_SYSTEM, description="Review prompt")
    synthesizer: str = Field(
        default=SYNTHESIZER_SYSTEM, description="Synthesis prompt"
    )


def format_source_list(sources: list[str]) -> str:
    """Enumerate sources as 1-based "[n] url" lines."""
    return "\n".join(f"[{i}] {url}" for i, url in enumerate(sources, start=1))


def _topic_block(topic: str, document_insights: str) -> list[str]:
    blocks = [f"Research topic: {topic}"]
    if document_insights:
        blocks.append(f"Document insights from uploaded files:\n{document_insights}")
    return blocks


def build_document_analysis_prompt(topic: str) -> str:
    return (
        f"Research topic: {topic}\n\n"
        "Analyze the attached documents and extract:\n"
        "1. Key concepts and themes\n"
        "2. Main findings and conclusions\n"
        "3. Data points and statistics mentioned\n"
        "4. Research questions or gaps identified in the documents\n\n"
        "Provide a structured summary."
    )


def build_research_prompt(topic: str, document_insights: str = "") -> str:
    blocks = _topic_block(topic, document_insights)
    if document_insights:
        blocks.append(
            "Building on the document insights and the research topic, find 5-7 "
            "additional high-quality sources. Keep summaries brief and focused "
            "on key findings."
        )
    else:
        blocks.append(
            "Find 5-7 high-quality sources. Keep summaries brief and focused on "
            "key findings."
        )
    return "\n\n".join(blocks)


def build_review_prompt(
    topic: str, research_findings: str, document_insights: str = ""
) -> str:
    blocks = _topic_block(topic, document_insights)
    blocks.append(f"Research findings:\n{research_findings}")
    instruction = "Provide a concise critical analysis: strengths, gaps, and key questions."
    if document_insights:
        instruction += " Consider both the uploaded documents and the web research."
    blocks.append(instruction)
    return "\n\n".join(blocks)


def build_synthesis_prompt(
    topic: str,
    research_findings: str,
    critique: str,
    sources: list[str],
    document_insights: str = "",
) -> str:
    """Assemble the final report prompt.

    The enumerated source list is what the report's inline citation markers
    index into, so it is only included when there is at least one source.
    """
    blocks = _topic_block(topic, document_insights)
    blocks.append(f"Web research findings:\n{research_findings}")
    blocks.append(f"Critical review:\n{critique}")
    if sources:
        blocks.append(
            "Available sources for citation (use [1], [2], etc.):\n"
            + format_source_list(sources)
        )

    instructions = [
        "Create a well-formatted markdown report with:",
        "- Clear headings (##)",
        "- Bullet points with bold emphasis",
        "- Inline citations [1], [2]",
        "- Clickable source links using [Title](URL) format at the end",
    ]
    if document_insights:
        instructions.append("- Integration of document insights with web research")
    instructions.append("")
    instructions.append("Keep it concise, visual, and scannable.")
    blocks.append("\n".join(instructions))
    return "\n\n".join(blocks)
