"""URL template interpolation using {{variable}} placeholders."""

import re
from typing import Any, Dict
from urllib.parse import quote

from calinga.logging import get_module_logger

logger = get_module_logger()

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")

TRANSLATIONS_PATH = "{{organization}}/{{team}}/{{project}}/languages/{{language}}"
LANGUAGES_PATH = "{{organization}}/{{team}}/{{project}}/languages"


def interpolate(template: str, variables: Dict[str, Any], escape: bool = True) -> str:
    """Replace {{variable_name}} placeholders with values.

    Args:
        template: Template string with {{variable}} placeholders.
        variables: Dict of variable name -> value.
        escape: Percent-encode values so they form a single path segment.

    Returns:
        Interpolated string.

    Raises:
        ValueError: If a placeholder has no value in variables.
    """
    names = PLACEHOLDER_PATTERN.findall(template)
    for name in names:
        if name not in variables:
            logger.error(
                "missing_interpolation_variable",
                variable=name,
                available_variables=list(variables.keys()),
            )
            raise ValueError(f"Missing interpolation variable: {name}")

    def _replace(match: "re.Match[str]") -> str:
        value = str(variables[match.group(1)])
        return quote(value, safe="") if escape else value

    return PLACEHOLDER_PATTERN.sub(_replace, template)
