"""Split a component file into its ``<script>`` blocks."""

import re
from typing import Dict, List, Union

from propdoc_core.models import ScriptBlock

HTML_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
SCRIPT_PATTERN = re.compile(r"<script\b([^>]*)>(.*?)</script\s*>", re.IGNORECASE | re.DOTALL)
ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s=/>"']+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)


def extract_script_blocks(text: str) -> List[ScriptBlock]:
    """
    Return every script block of ``text`` in source order.

    Script tags inside HTML comments are ignored. Block contents are kept
    verbatim.

    Example:
        >>> blocks = extract_script_blocks('<script lang="ts">let a = 1;</script><div/>')
        >>> blocks[0].content, blocks[0].lang
        ('let a = 1;', 'ts')
    """
    uncommented = HTML_COMMENT_PATTERN.sub("", text)
    return [
        ScriptBlock(content=match.group(2), attributes=parse_attributes(match.group(1)))
        for match in SCRIPT_PATTERN.finditer(uncommented)
    ]


def parse_attributes(raw: str) -> Dict[str, Union[str, bool]]:
    """
    Parse the attribute text of an opening tag.

    Bare attributes map to ``True``; names are lower-cased.

    >>> parse_attributes(' lang="ts" module')
    {'lang': 'ts', 'module': True}
    """
    attributes: Dict[str, Union[str, bool]] = {}
    for match in ATTRIBUTE_PATTERN.finditer(raw):
        name, double, single, bare = match.groups()
        if double is not None:
            attributes[name.lower()] = double
        elif single is not None:
            attributes[name.lower()] = single
        elif bare is not None:
            attributes[name.lower()] = bare
        else:
            attributes[name.lower()] = True
    return attributes
