from __future__ import annotations

from diff_match_patch import diff_match_patch

from knot_downloader.sync.models import LineDiff

# Upper bound in seconds on the bisection search; past it the diff is still
# correct, only possibly not minimal.
DIFF_TIMEOUT_SECONDS = 1.0


def diff_lines(old: str, new: str) -> LineDiff:
    """
    Count added and removed lines between two texts.

    Lines keep their terminators, so a change in line endings or a missing trailing
    newline is still reported. Identical inputs always yield zero counts.
    """
    if old == new:
        return LineDiff(changed=False, additions=0, removals=0)

    dmp = diff_match_patch()
    dmp.Diff_Timeout = DIFF_TIMEOUT_SECONDS
    # Each line becomes one character, so the character diff is a line diff.
    old_chars, new_chars, _ = dmp.diff_linesToChars(old, new)

    additions = 0
    removals = 0
    for op, chars in dmp.diff_main(old_chars, new_chars, False):
        if op == dmp.DIFF_INSERT:
            additions += len(chars)
        elif op == dmp.DIFF_DELETE:
            removals += len(chars)
    return LineDiff(changed=True, additions=additions, removals=removals)
