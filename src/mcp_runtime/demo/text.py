"""Text manipulation demo tools."""

from ..models import HandlerDescriptor, ParamSpec
from ..server.registry import CapabilityRegistry

TEXT_FORMATS = ("uppercase", "lowercase", "titlecase", "reverse")


def to_title_case(text: str) -> str:
    """Capitalize the first letter after each whitespace run, lowercase the rest."""
    chars = []
    capitalize_next = True
    for ch in text:
        if ch.isspace():
            capitalize_next = True
            chars.append(ch)
        elif capitalize_next:
            chars.append(ch.upper())
            capitalize_next = False
        else:
            chars.append(ch.lower())
    return "".join(chars)


def format_text(text: str, format: str) -> str:
    style = format.lower()
    if style == "uppercase":
        return text.upper()
    if style == "lowercase":
        return text.lower()
    if style == "titlecase":
        return to_title_case(text)
    if style == "reverse":
        return text[::-1]
    return f"Unknown format: {format}. Use: uppercase, lowercase, titlecase, or reverse"


def count_words(text: str) -> dict[str, int]:
    """Count words, characters, and lines in text."""
    return {
        "words": len(text.split()) if text.strip() else 0,
        "characters": len(text),
        "characters_no_spaces": len(text.replace(" ", "")),
        "lines": len(text.split("\n")),
    }


def register_text_tools(registry: CapabilityRegistry) -> None:
    """Register format_text and count_words."""
    registry.register(
        HandlerDescriptor.tool(
            "format_text",
            "Format text in various ways",
            [
                ParamSpec(name="text", description="The text to format"),
                ParamSpec(
                    name="format",
                    description=f"Format type: {', '.join(TEXT_FORMATS)}",
                ),
            ],
        ),
        format_text,
    )
    registry.register(
        HandlerDescriptor.tool(
            "count_words",
            "Count words, characters, and lines in text",
            [ParamSpec(name="text", description="The text to analyze")],
        ),
        count_words,
    )
