"""URI templates for resource capabilities.

A template is ``scheme://segment/segment`` where each segment is either a
literal or a whole-segment ``{placeholder}``. Matching compares the scheme,
the segment count, and every literal segment; placeholders bind the
percent-decoded text of the corresponding non-empty segment.
"""

from typing import Optional
from urllib.parse import unquote

from ..models.descriptor import PLACEHOLDER_PATTERN

SCHEME_SEPARATOR = "://"


def split_uri(uri: str) -> tuple[str, list[str]]:
    """Split a URI into its scheme and path segments.

    Args:
        uri: URI such as "document://readme"

    Returns:
        Tuple of (scheme, segments)

    Raises:
        ValueError: If the URI has no scheme
    """
    scheme, sep, rest = uri.partition(SCHEME_SEPARATOR)
    if not sep or not scheme:
        raise ValueError(f"URI has no scheme: {uri!r}")
    return scheme.lower(), rest.split("/")


class UriTemplate:
    """A parsed resource URI template.

    Args:
        template: Template string, e.g. "document://{id}"

    Raises:
        ValueError: If the template is malformed
    """

    def __init__(self, template: str) -> None:
        self.template = template
        self.scheme, self.segments = split_uri(template)
        self.placeholders: list[Optional[str]] = []

        for segment in self.segments:
            match = PLACEHOLDER_PATTERN.fullmatch(segment)
            if match:
                self.placeholders.append(match.group(1))
            elif "{" in segment or "}" in segment:
                raise ValueError(
                    f"Placeholder must span a whole segment in {template!r}: {segment!r}"
                )
            else:
                self.placeholders.append(None)

        names = [p for p in self.placeholders if p is not None]
        if len(names) != len(set(names)):
            raise ValueError(f"Repeated placeholder in {template!r}")

    @property
    def literal_count(self) -> int:
        """Number of literal segments (higher is more specific)."""
        return sum(1 for p in self.placeholders if p is None)

    @property
    def shape(self) -> tuple[str, tuple[Optional[str], ...]]:
        """Structural shape: scheme plus literals, with placeholders blanked.

        Two templates with the same shape match exactly the same URIs.
        """
        return (
            self.scheme,
            tuple(None if p is not None else seg for seg, p in zip(self.segments, self.placeholders)),
        )

    def match(self, uri: str) -> Optional[dict[str, str]]:
        """Match a concrete URI.

        Args:
            uri: Concrete URI to match

        Returns:
            Bound placeholder values, or None if the URI does not match
        """
        try:
            scheme, segments = split_uri(uri)
        except ValueError:
            return None

        if scheme != self.scheme or len(segments) != len(self.segments):
            return None

        bound: dict[str, str] = {}
        for literal, placeholder, value in zip(self.segments, self.placeholders, segments):
            if placeholder is None:
                if value != literal:
                    return None
            elif not value:
                return None
            else:
                bound[placeholder] = unquote(value)
        return bound

    def __repr__(self) -> str:
        return f"UriTemplate({self.template!r})"
