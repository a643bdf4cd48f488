import re
from typing import Mapping

TOKEN_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_]+)\s*\}\}")


def fill_template(template: str, values: Mapping[str, str]) -> str:
    """
    Replace every `{{TOKEN}}` that has a value; unknown tokens are left in place.

    Values are inserted verbatim, escape them before calling.
    """
    def _replace(match: re.Match) -> str:
        return values.get(match.group(1), match.group(0))

    return TOKEN_PATTERN.sub(_replace, template)
