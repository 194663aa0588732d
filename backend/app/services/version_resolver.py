"""
Versioned title resolution for uploaded files.

A title is either the bare original name (implicit version 1) or the base
name followed by ``_v<N>`` and the original extension. Matching is
case-insensitive and done by plain string parsing, so names containing
pattern metacharacters need no escaping.
"""


from typing import Iterable, Optional, Tuple


FALLBACK_TITLE = "untitled_video"
VERSION_MARKER = "_v"


def split_filename(filename: str) -> Tuple[str, str]:
    """
    Split a filename at its last '.' into base name and extension.
    The extension keeps its leading dot and is empty when there is no dot.
    """
    last_dot = filename.rfind(".")
    if last_dot == -1:
        return filename, ""
    return filename[:last_dot], filename[last_dot:]


def parse_title_version(title: str, base_name: str, extension: str) -> Optional[int]:
    """
    Return the version a title represents for the given base name and
    extension, or None if the title has neither accepted shape.
    """
    folded = title.casefold()
    base = base_name.casefold()
    ext = extension.casefold()
    if len(folded) < len(base) + len(ext):
        return None
    if not folded.startswith(base) or not folded.endswith(ext):
        return None
    middle = folded[len(base):len(folded) - len(ext)]
    if not middle:
        return 1
    if not middle.startswith(VERSION_MARKER):
        return None
    digits = middle[len(VERSION_MARKER):]
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    version = int(digits)
    return version if version >= 1 else None


def resolve_versioned_title(original_name: str, candidates: Iterable[str]) -> str:
    """
    Compute a title for an upload that does not collide with the candidates.

    Args:
        original_name: Filename the user uploaded
        candidates: Existing titles sharing the base name as a prefix
    Returns:
        original_name when no candidate has an accepted shape, otherwise
        base name + "_v<max version + 1>" + extension
    """
    original_name = original_name or FALLBACK_TITLE
    base_name, extension = split_filename(original_name)
    max_version = 0
    for title in candidates:
        if not title:
            continue
        version = parse_title_version(title, base_name, extension)
        if version is not None and version > max_version:
            max_version = version
    if max_version == 0:
        return original_name
    return f"{base_name}{VERSION_MARKER}{max_version + 1}{extension}"
