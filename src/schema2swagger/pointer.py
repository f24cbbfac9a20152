"""JSON pointer helpers for `#/a/b` style references."""

MISSING = object()


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def pointer_segments(ref: str) -> list[str]:
    """Split ``#/a/b`` (or ``/a/b``) into its path segments, dropping empty ones."""
    return [_unescape(part) for part in ref.lstrip("#").split("/") if part]


def lookup_pointer(document, segments: list[str]):
    """Follow ``segments`` through mappings and lists; return MISSING if absent."""
    node = document
    for segment in segments:
        if isinstance(node, dict):
            if segment not in node:
                return MISSING
            node = node[segment]
        elif isinstance(node, list):
            if not segment.isdigit() or int(segment) >= len(node):
                return MISSING
            node = node[int(segment)]
        else:
            return MISSING
    return node
