"""
mcp-eval Suite Loader - Parse and validate test-suite YAML

This module handles:
1. Deserializing the YAML suite document (YAML 1.2 dates and booleans)
2. Validating it against the suite models, reporting every violation
3. Upgrading deprecated ``input_prompt`` cases to ``input_conversation``
"""

import logging
import re
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

import yaml
from pydantic import ValidationError

from ..errors import SuiteValidationError
from .models import TestCase, TestSuiteDocument

logger = logging.getLogger(__name__)

_YAML_BOOL_TAG = "tag:yaml.org,2002:bool"
_YAML_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class SuiteYAMLLoader(yaml.SafeLoader):
    """
    SafeLoader with YAML 1.2 scalars for dates and booleans.

    ``2024-05-01`` stays a string instead of becoming a date, and only
    ``true``/``false`` are booleans (``yes``, ``no``, ``on``, ``off`` stay
    strings), so expected parameters compare equal to the JSON a model sends.
    """


SuiteYAMLLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers
        if tag not in (_YAML_BOOL_TAG, _YAML_TIMESTAMP_TAG)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
SuiteYAMLLoader.add_implicit_resolver(
    _YAML_BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)

DEPRECATED_PROMPT_NOTICE = (
    "{count} test case(s) use the deprecated 'input_prompt' field. "
    "Use 'input_conversation' with a single user turn instead."
)


@dataclass
class ParsedSuite:
    """
    Result of parsing a suite document.

    Attributes:
        test_cases: Canonical test cases, in document order
        deprecated_prompt_count: Number of cases upgraded from ``input_prompt``
    """
    test_cases: List[TestCase]
    deprecated_prompt_count: int = 0

    def referenced_tool_names(self) -> List[str]:
        """Tool names used by tool turns across all cases, first occurrence order"""
        seen: List[str] = []
        for case in self.test_cases:
            for name in case.referenced_tool_names():
                if name not in seen:
                    seen.append(name)
        return seen


def _format_location(loc) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def _violations_from(error: ValidationError) -> List[str]:
    return [
        f"{_format_location(err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


def parse_test_suite(raw: str) -> ParsedSuite:
    """
    Parse suite document text.

    Args:
        raw: YAML text of the suite document

    Returns:
        ParsedSuite with one TestCase per ``test_cases`` entry

    Raises:
        SuiteValidationError: If the YAML is invalid or does not match the
            suite shape. All violations are listed, not just the first.
    """
    try:
        data = yaml.load(raw, Loader=SuiteYAMLLoader)
    except yaml.YAMLError as e:
        raise SuiteValidationError([f"Invalid YAML: {e}"]) from e

    if not isinstance(data, dict):
        raise SuiteValidationError(
            [f"<root>: expected a mapping with a 'test_cases' key, got {type(data).__name__}"]
        )

    try:
        document = TestSuiteDocument.model_validate(data)
    except ValidationError as e:
        raise SuiteValidationError(_violations_from(e)) from e

    deprecated = sum(1 for case in document.test_cases if case.uses_deprecated_prompt)
    if deprecated:
        notice = DEPRECATED_PROMPT_NOTICE.format(count=deprecated)
        logger.warning(notice)
        warnings.warn(notice, DeprecationWarning, stacklevel=2)

    return ParsedSuite(
        test_cases=[case.to_test_case() for case in document.test_cases],
        deprecated_prompt_count=deprecated,
    )


def load_test_suite(file_path: Union[str, Path]) -> ParsedSuite:
    """
    Load and parse a suite document from disk.

    Raises:
        SuiteValidationError: If the file cannot be read or is invalid
    """
    file_path = Path(file_path)

    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SuiteValidationError([f"Cannot read test suite file {file_path}: {e}"]) from e

    suite = parse_test_suite(raw)
    logger.info(f"📚 Found {len(suite.test_cases)} test case(s) in {file_path}")
    return suite
