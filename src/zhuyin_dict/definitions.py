"""Split definition text into numbered senses with their examples."""

from __future__ import annotations

import re

from zhuyin_dict.models import DefinitionItem

_NUMBERING = re.compile(r"(\d+)\.")

# Leftmost match, so 例如： is never cut down to 如：
_EXAMPLE_MARKER = re.compile(r"(?:例如|譬如|造句|如)：")


def split_example(text: str) -> DefinitionItem:
    """Separate the example part of one sense, marker included."""
    text = text.strip()
    match = _EXAMPLE_MARKER.search(text)
    if match is None:
        return DefinitionItem(number=None, text=text, example=None)
    return DefinitionItem(
        number=None,
        text=text[: match.start()].strip(),
        example=text[match.start():].strip(),
    )


def parse_definition(text: str) -> list[DefinitionItem]:
    """Parse ``1.… 2.…`` numbered definition text.

    Text before the first number becomes an unnumbered item. Text without
    any numbering is returned as a single unnumbered item.
    """
    matches = list(_NUMBERING.finditer(text))
    if not matches:
        return [split_example(text)]

    items: list[DefinitionItem] = []
    preamble = text[: matches[0].start()].strip()
    if preamble:
        items.append(split_example(preamble))
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        item = split_example(text[match.end():end])
        items.append(
            DefinitionItem(number=match.group(1), text=item.text, example=item.example)
        )
    return items
