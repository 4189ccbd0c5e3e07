ANCHOR_LENGTH = 100


def line_at(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def _occurrence_lines(haystack: str, anchor: str) -> list[int]:
    """Lines of the non-overlapping occurrences of *anchor*, in order."""
    lines: list[int] = []
    counted_pos = 0
    counted_line = 1
    pos = haystack.find(anchor)
    while pos != -1:
        counted_line += haystack.count("\n", counted_pos, pos)
        counted_pos = pos
        lines.append(counted_line)
        pos = haystack.find(anchor, pos + len(anchor))
    return lines


def _nearest(lines: list[int], target_line: int) -> int:
    """The line closest to *target_line*; earlier wins ties."""
    return min(lines, key=lambda line: (abs(line - target_line), line))


def resolve_line(match_text: str, offset: int, buffer: str, original: str | None = None) -> int:
    """Map a match in the working buffer to a 1-based line of the file on disk.

    The working buffer may have drifted from the on-disk text because of
    earlier compiler passes, so the match is anchored against *original*
    when it is available: first the full tag text, then its first
    ``ANCHOR_LENGTH`` characters. Without an anchor the line is counted in
    the working buffer itself.

    Repeated identical tags are told apart by order: when the anchor occurs
    as often in the buffer as on disk, the n-th occurrence in the buffer
    maps to the n-th on disk, whatever the drift. When the counts differ
    (a compiler pass added or dropped a copy) the on-disk occurrence
    nearest to the buffer line wins, so a large drift can then pick a
    neighbouring copy of the same tag.
    """
    buffer_line = line_at(buffer, offset)
    if not original:
        return buffer_line

    anchors = [match_text]
    if len(match_text) > ANCHOR_LENGTH:
        anchors.append(match_text[:ANCHOR_LENGTH])

    for anchor in anchors:
        if not anchor:
            continue
        lines = _occurrence_lines(original, anchor)
        if not lines:
            continue
        if buffer.count(anchor) == len(lines):
            return lines[min(buffer.count(anchor, 0, offset), len(lines) - 1)]
        return _nearest(lines, buffer_line)
    return buffer_line
