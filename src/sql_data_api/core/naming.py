# sql_data_api/core/naming.py
from __future__ import annotations

from typing import NamedTuple


class NameAlias(NamedTuple):
    name: str
    alias: str | None = None


def extract_name_and_alias(table_or_view_with_alias: str) -> NameAlias:
    """Split ``"Name Alias"`` into its parts.

    The name ends at the first space and the alias starts after the last one,
    so ``"Orders  o"`` still parses. Without a space there is no alias.
    """
    text = table_or_view_with_alias.strip()
    if " " not in text:
        return NameAlias(name=text)

    name = text[: text.index(" ")].strip()
    alias = text[text.rindex(" ") :].strip()
    return NameAlias(name=name, alias=alias)
