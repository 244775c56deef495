"""Demo prompt templates."""

from typing import Optional

from ..models import HandlerDescriptor, ParamSpec, PromptMessage, PromptResult
from ..server.registry import CapabilityRegistry

LEVEL_TEXT = {
    "beginner": "Explain as if to someone new to programming, avoiding jargon",
    "intermediate": "Explain at an intermediate level, assuming basic programming knowledge",
    "advanced": "Provide an in-depth technical explanation with implementation details",
}

APPROACH_TEXT = {
    "tdd": "We'll use Test-Driven Development: write tests first, then implement.",
    "design-first": "We'll start with design and architecture before coding.",
    "iterative": "We'll work iteratively, building incrementally.",
}


def code_review(language: str, focus: Optional[str] = None) -> PromptResult:
    focus_text = (
        f"Focus especially on: {focus}"
        if focus
        else "Provide a comprehensive review covering security, performance, and best practices"
    )
    text = (
        f"Please review the following {language} code.\n\n"
        f"{focus_text}\n\n"
        "Structure your review as:\n"
        "1. **Summary**: Brief overview of what the code does\n"
        "2. **Strengths**: What's done well\n"
        "3. **Issues**: Problems found (categorized by severity)\n"
        "4. **Suggestions**: Specific improvements with code examples\n"
        "5. **Security**: Any security concerns\n\n"
        "Please paste the code to review:\n"
    )
    return PromptResult(
        description=f"Code Review Request ({language})",
        messages=[PromptMessage.user(text)],
    )


def explain_concept(
    concept: str,
    level: Optional[str] = None,
    context: Optional[str] = None,
) -> PromptResult:
    level_text = LEVEL_TEXT.get((level or "").lower(), LEVEL_TEXT["intermediate"])
    context_text = f"\n\nSpecific context: {context}" if context else ""
    text = (
        f"Please explain: **{concept}**\n\n"
        f"{level_text}{context_text}\n\n"
        "Structure your explanation as:\n"
        "1. **Definition**: What it is in simple terms\n"
        "2. **Why it matters**: Real-world importance and use cases\n"
        "3. **How it works**: Technical explanation with diagrams/pseudocode if helpful\n"
        "4. **Example**: Concrete code example demonstrating the concept\n"
        "5. **Common pitfalls**: Mistakes to avoid\n"
        "6. **Related concepts**: What to learn next\n"
    )
    return PromptResult(description=f"Explain: {concept}", messages=[PromptMessage.user(text)])


def debug_helper(error_type: str, language: Optional[str] = None) -> PromptResult:
    lang_text = f" ({language})" if language else ""
    text = (
        f"I need help debugging a {error_type} error{lang_text}.\n\n"
        "Please help me by:\n"
        "1. **Understanding**: Ask clarifying questions about the error\n"
        "2. **Analysis**: Identify potential root causes\n"
        "3. **Diagnosis**: Suggest debugging steps/techniques\n"
        "4. **Solution**: Provide fixes with explanations\n"
        "5. **Prevention**: How to avoid this in the future\n\n"
        "Here's the information about my issue:\n\n"
        "**Error message/behavior**:\n[Paste error message or describe unexpected behavior]\n\n"
        "**Relevant code**:\n[Paste the code causing the issue]\n\n"
        "**What I've tried**:\n[Describe debugging attempts]\n\n"
        "**Expected behavior**:\n[What should happen]\n"
    )
    return PromptResult(
        description=f"Debug Helper: {error_type} error",
        messages=[PromptMessage.user(text)],
    )


def pair_programming(task: str, approach: Optional[str] = None) -> PromptResult:
    approach_text = APPROACH_TEXT.get((approach or "").lower(), APPROACH_TEXT["iterative"])
    return PromptResult(
        description=f"Pair Programming: {task}",
        messages=[
            PromptMessage.user(f"Let's pair program on: {task}"),
            PromptMessage.assistant(
                "I'd be happy to pair program with you on this task!\n\n"
                f"{approach_text}\n\n"
                "I'll act as your programming partner:\n"
                "- I'll think through problems out loud\n"
                "- I'll suggest approaches and ask for your input\n"
                "- I'll write code incrementally and explain my reasoning\n"
                "- I'll catch potential issues before they become bugs\n"
                "- I'll ask questions when requirements are unclear\n\n"
                "Let's start! Can you tell me more about the context and any constraints?\n"
            ),
        ],
    )


def commit_message(type: str, scope: Optional[str] = None) -> PromptResult:
    scope_text = f"({scope})" if scope else ""
    text = (
        "Please help me write a commit message following conventional commits format.\n\n"
        f"**Type**: {type}{scope_text}\n\n"
        "Format:\n"
        "```\n"
        f"{type}{scope_text}: <short description>\n\n"
        "<body - what and why, not how>\n\n"
        "<footer - breaking changes, issue references>\n"
        "```\n\n"
        "Guidelines:\n"
        "- Subject line: imperative mood, max 50 chars, no period\n"
        "- Body: wrap at 72 chars, explain motivation\n"
        '- Reference issues: "Fixes #123" or "Relates to #456"\n\n'
        "Please describe what changes you made:\n"
    )
    return PromptResult(description=f"Commit Message: {type}", messages=[PromptMessage.user(text)])


def register_demo_prompts(registry: CapabilityRegistry) -> None:
    """Register the five demo prompt templates."""
    registry.register(
        HandlerDescriptor.prompt(
            "code_review",
            "Generate a structured code review request",
            [
                ParamSpec(name="language", description="Programming language"),
                ParamSpec(
                    name="focus",
                    required=False,
                    description="Review focus: security, performance, readability, "
                    "best-practices, testing, documentation",
                ),
            ],
        ),
        code_review,
    )
    registry.register(
        HandlerDescriptor.prompt(
            "explain_concept",
            "Generate a prompt to explain a technical concept",
            [
                ParamSpec(name="concept", description="The concept to explain"),
                ParamSpec(name="level", required=False, description="Expertise level: beginner, intermediate, advanced"),
                ParamSpec(name="context", required=False, description="Additional context or specific use case"),
            ],
        ),
        explain_concept,
    )
    registry.register(
        HandlerDescriptor.prompt(
            "debug_helper",
            "Generate a structured debugging assistance prompt",
            [
                ParamSpec(name="error_type", description="Type of error: runtime, compile, logic, performance"),
                ParamSpec(name="language", required=False, description="Programming language"),
            ],
        ),
        debug_helper,
    )
    registry.register(
        HandlerDescriptor.prompt(
            "pair_programming",
            "Start a pair programming session with structured roles",
            [
                ParamSpec(name="task", description="What you want to build or solve"),
                ParamSpec(name="approach", required=False, description="Preferred approach: tdd, iterative, design-first"),
            ],
        ),
        pair_programming,
    )
    registry.register(
        HandlerDescriptor.prompt(
            "commit_message",
            "Generate a well-structured git commit message",
            [
                ParamSpec(name="type", description="Commit type: feat, fix, refactor, docs, test, chore"),
                ParamSpec(name="scope", required=False, description="Affected component/module"),
            ],
        ),
        commit_message,
    )
